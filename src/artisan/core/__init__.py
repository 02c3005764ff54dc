"""Core data and configuration for Artisan Studio.

- **config.py**: Configuration management using Pydantic Settings (ARTISAN_ prefix)
- **styles.py**: The static catalog of artistic styles
- **models.py**: Session snapshot (``AppState``), gallery records and screen variants
- **images.py**: Data URI encoding helpers built on Pillow
- **errors.py**: Exception hierarchy shared by services and the controller
"""

from artisan.core.config import ArtisanConfig, get_config
from artisan.core.models import AppState, GalleryItem, View
from artisan.core.styles import ART_STYLES, ArtStyle, default_style, get_style, resolve_style

__all__ = [
    "ART_STYLES",
    "AppState",
    "ArtStyle",
    "ArtisanConfig",
    "GalleryItem",
    "View",
    "default_style",
    "get_config",
    "get_style",
    "resolve_style",
]
