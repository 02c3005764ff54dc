"""Shared pytest fixtures for Artisan Studio tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from artisan.controller import StateController
from artisan.core.config import ArtisanConfig
from artisan.core.images import to_data_uri
from artisan.core.models import GalleryItem
from artisan.services.authorization import AuthorizationGate
from artisan.services.gallery_store import GalleryStore
from artisan.services.generation import GenerationClient
from artisan.services.storage import MemoryStorage


class FakeGenerationClient(GenerationClient):
    """Generation client that returns a canned result or raises a canned error."""

    def __init__(self, result: str = "data:image/png;base64,UkVTVUxU", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, image: str, instruction: str) -> str:
        self.calls.append((image, instruction))
        if self.error is not None:
            raise self.error
        return self.result


class FakeGate(AuthorizationGate):
    """Gate whose answer is set by the test."""

    def __init__(self, access: bool = True):
        self.access = access
        self.checks = 0
        self.grants = 0

    async def has_access(self) -> bool:
        self.checks += 1
        return self.access

    async def grant_access(self) -> None:
        self.grants += 1
        self.access = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path, monkeypatch) -> ArtisanConfig:
    """Create a test configuration with a temporary data directory.

    Key variables from the developer's shell are removed so the explicit
    test key always wins.
    """
    for var in ("ARTISAN_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(var, raising=False)

    return ArtisanConfig(
        _env_file=None,
        gemini_api_key="test-key",
        data_dir=temp_dir / "data",
    )


@pytest.fixture
def photo_uri() -> str:
    """A small real JPEG encoded as a data URI."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 6), color=(200, 120, 40)).save(buffer, format="JPEG")
    return to_data_uri(buffer.getvalue(), "image/jpeg")


@pytest.fixture
def photo_file(temp_dir: Path) -> Path:
    """A small PNG with an alpha channel on disk."""
    path = temp_dir / "photo.png"
    Image.new("RGBA", (16, 12), color=(10, 20, 30, 255)).save(path)
    return path


@pytest.fixture
def make_item():
    """Factory for gallery items with predictable payloads."""

    def _make(item_id: str, timestamp: int = 1_700_000_000_000, style_id: str = "renaissance"):
        return GalleryItem(
            id=item_id,
            original_image=f"data:image/jpeg;base64,{item_id}orig",
            processed_image=f"data:image/png;base64,{item_id}proc",
            style_id=style_id,
            timestamp=timestamp,
        )

    return _make


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def gallery_store(storage: MemoryStorage) -> GalleryStore:
    return GalleryStore(storage)


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def gate() -> FakeGate:
    return FakeGate()


@pytest.fixture
def controller(generation_client, gallery_store, gate, test_config) -> StateController:
    """Controller wired to in-memory fakes."""
    return StateController(
        generation_client=generation_client,
        gallery_store=gallery_store,
        gate=gate,
        config=test_config,
    )
