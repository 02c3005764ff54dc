"""Capture source contract and the file-import implementation.

A capture source owns an exclusive device resource between ``start()`` and
``cancel()``. Callers should always go through ``capture_session``, which
releases the resource on every exit path: a successful capture, a failure, or
the hosting view being torn down mid-capture.

    async with capture_session(source) as session:
        image = await session.capture()
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from artisan.core.errors import CaptureUnavailableError, DeviceUnavailableError
from artisan.core.images import encode_image

logger = logging.getLogger(__name__)


class CaptureSource(ABC):
    """Produces encoded still images from an acquired device."""

    @abstractmethod
    async def start(self) -> None:
        """Acquire the device.

        Raises:
            CaptureUnavailableError: If the device is missing or access is denied
        """

    @abstractmethod
    async def capture(self) -> str:
        """Grab one still frame as a data URI.

        Raises:
            DeviceUnavailableError: If the device was never acquired
        """

    @abstractmethod
    def cancel(self) -> None:
        """Release the device. Safe to call more than once."""


@asynccontextmanager
async def capture_session(source: CaptureSource) -> AsyncIterator[CaptureSource]:
    """Acquire ``source`` for the duration of the block and always release it."""
    try:
        await source.start()
        yield source
    finally:
        source.cancel()
        logger.debug(f"Released capture source {source!r}")


class FileCaptureSource(CaptureSource):
    """Imports a photo from disk as if it had been captured.

    The "device" is the opened image file; frames are re-encoded as JPEG.
    """

    def __init__(self, path: Path, jpeg_quality: int = 80):
        self.path = Path(path)
        self.jpeg_quality = jpeg_quality
        self._image: Image.Image | None = None

    async def start(self) -> None:
        try:
            with Image.open(self.path) as opened:
                image = opened.copy()
        except FileNotFoundError as e:
            raise CaptureUnavailableError(f"Photo not found: {self.path.name}") from e
        except (UnidentifiedImageError, OSError) as e:
            raise CaptureUnavailableError(f"Photo could not be opened: {self.path.name}") from e

        self._image = image
        logger.info(f"Opened {self.path.name} ({image.width}x{image.height}, {image.mode})")

    async def capture(self) -> str:
        if self._image is None:
            raise DeviceUnavailableError("The capture source has not been started.")
        return encode_image(self._image, format="JPEG", quality=self.jpeg_quality)

    def cancel(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None

    @property
    def is_active(self) -> bool:
        return self._image is not None

    def __repr__(self) -> str:
        return f"FileCaptureSource(path={str(self.path)!r}, active={self.is_active})"
