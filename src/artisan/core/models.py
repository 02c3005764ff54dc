"""Data models for the Artisan Studio session state.

``AppState`` is the single snapshot the controller publishes. It is immutable:
every action derives a new snapshot with ``dataclasses.replace`` and the
constructor rejects any combination of fields that breaks the screen
invariants, so an invalid snapshot can never be published.

Consumers that render a screen should read ``AppState.screen``, which narrows
the flat snapshot down to a tagged variant carrying only the data that screen
needs (for example ``GalleryDetailScreen`` always has its item).
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .styles import ArtStyle


class View(str, Enum):
    """Screens the application can show."""

    HOME = "home"
    CAMERA = "camera"
    EDITING = "editing"
    RESULT = "result"
    GALLERY = "gallery"
    GALLERY_DETAIL = "gallery-detail"


class GalleryItem(BaseModel):
    """A saved result pairing the original photo with its rendered version.

    Field aliases match the persisted record layout
    (``{id, originalImage, processedImage, styleId, timestamp}``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    original_image: str = Field(..., alias="originalImage")
    processed_image: str = Field(..., alias="processedImage")
    style_id: str = Field(..., alias="styleId")
    timestamp: int = Field(..., description="Creation instant in ms since epoch")


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_item_id(timestamp_ms: int) -> str:
    """Build a creation-ordered, collision-resistant gallery item id.

    The millisecond prefix keeps ids sortable by creation time; the random
    suffix keeps two saves within the same millisecond apart.
    """
    return f"{timestamp_ms}-{uuid.uuid4().hex[:12]}"


# Screen variants


@dataclass(frozen=True)
class HomeScreen:
    gallery_size: int


@dataclass(frozen=True)
class CameraScreen:
    pass


@dataclass(frozen=True)
class EditingScreen:
    image: str
    style: ArtStyle | None
    is_processing: bool
    error: str | None


@dataclass(frozen=True)
class ResultScreen:
    image: str
    style: ArtStyle | None
    processed_image: str


@dataclass(frozen=True)
class GalleryScreen:
    items: tuple[GalleryItem, ...]


@dataclass(frozen=True)
class GalleryDetailScreen:
    item: GalleryItem


@dataclass(frozen=True)
class UnauthorizedScreen:
    """Overlay shown while the generation service is not usable."""

    error: str | None


Screen = (
    HomeScreen
    | CameraScreen
    | EditingScreen
    | ResultScreen
    | GalleryScreen
    | GalleryDetailScreen
    | UnauthorizedScreen
)


@dataclass(frozen=True)
class AppState:
    """Single source-of-truth snapshot for the running session.

    Attributes
    ----------
    view : View
        Current screen
    image : str | None
        Captured or imported source photo (data URI)
    selected_style : ArtStyle | None
        Style the next generation request will use
    processed_image : str | None
        Last generated result (data URI)
    is_processing : bool
        True while a generation request is in flight
    error : str | None
        Last user-facing failure message
    gallery : tuple[GalleryItem, ...]
        Saved results, most recent first
    selected_gallery_item : GalleryItem | None
        Item shown on the gallery detail screen
    authorized : bool
        Whether the generation service is currently usable
    """

    view: View = View.HOME
    image: str | None = None
    selected_style: ArtStyle | None = None
    processed_image: str | None = None
    is_processing: bool = False
    error: str | None = None
    gallery: tuple[GalleryItem, ...] = field(default_factory=tuple)
    selected_gallery_item: GalleryItem | None = None
    authorized: bool = True

    def __post_init__(self) -> None:
        problem = self.invariant_violation()
        if problem:
            raise ValueError(f"Invalid app state: {problem}")

    def invariant_violation(self) -> str | None:
        """Describe the first broken invariant, or None if the snapshot is valid."""
        if self.view in (View.EDITING, View.RESULT) and not self.image:
            return f"view '{self.view.value}' requires an image"
        if self.view == View.RESULT and not self.processed_image:
            return "view 'result' requires a processed image"
        if self.view == View.GALLERY_DETAIL and self.selected_gallery_item is None:
            return "view 'gallery-detail' requires a selected gallery item"

        ids = [item.id for item in self.gallery]
        if len(ids) != len(set(ids)):
            return "gallery ids must be unique"

        if self.selected_gallery_item is not None and self.selected_gallery_item.id not in ids:
            return "selected gallery item is not in the gallery"

        return None

    @property
    def screen(self) -> Screen:
        """Tagged view of the snapshot for the screen currently shown."""
        if not self.authorized:
            return UnauthorizedScreen(error=self.error)

        if self.view == View.CAMERA:
            return CameraScreen()
        if self.view == View.EDITING:
            return EditingScreen(
                image=self.image,
                style=self.selected_style,
                is_processing=self.is_processing,
                error=self.error,
            )
        if self.view == View.RESULT:
            return ResultScreen(
                image=self.image,
                style=self.selected_style,
                processed_image=self.processed_image,
            )
        if self.view == View.GALLERY:
            return GalleryScreen(items=self.gallery)
        if self.view == View.GALLERY_DETAIL:
            return GalleryDetailScreen(item=self.selected_gallery_item)
        return HomeScreen(gallery_size=len(self.gallery))
