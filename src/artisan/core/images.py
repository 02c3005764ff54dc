"""Helpers for moving images around as data URIs.

Both the capture side and the generation side of the pipeline exchange images
as ``data:<mime>;base64,<payload>`` strings, which is also the form persisted in
the gallery. These helpers convert between that form, raw bytes and Pillow
images.
"""

import base64
import binascii
import io

from PIL import Image

DATA_URI_PREFIX = "data:"


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Wrap raw image bytes in a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded payload.

    Args:
        uri: String of the form ``data:<mime>;base64,<payload>``

    Returns:
        Tuple of (mime_type, payload_bytes)

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    if not uri or not uri.startswith(DATA_URI_PREFIX) or "," not in uri:
        raise ValueError("Image is not a data URI")

    header, payload = uri[len(DATA_URI_PREFIX) :].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")

    mime_type = header[: -len(";base64")] or "application/octet-stream"
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

    return mime_type, data


def encode_image(image: Image.Image, format: str = "JPEG", quality: int = 80) -> str:
    """Encode a Pillow image as a data URI.

    JPEG has no alpha channel, so RGBA/paletted frames are flattened to RGB
    before encoding.
    """
    if format.upper() == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=format, quality=quality)
    mime_type = Image.MIME.get(format.upper(), f"image/{format.lower()}")
    return to_data_uri(buffer.getvalue(), mime_type)

