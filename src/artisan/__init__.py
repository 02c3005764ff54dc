"""Artisan Studio - turn photos into fine-art renderings with Gemini image models."""

__version__ = "0.1.0"

from artisan.controller import StateController
from artisan.core.config import ArtisanConfig, get_config
from artisan.core.models import AppState, GalleryItem, View
from artisan.core.styles import ART_STYLES, ArtStyle

__all__ = [
    "ART_STYLES",
    "AppState",
    "ArtStyle",
    "ArtisanConfig",
    "GalleryItem",
    "StateController",
    "View",
    "get_config",
]
