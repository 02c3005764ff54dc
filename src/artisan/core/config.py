"""Configuration management for Artisan Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ARTISAN_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ARTISAN_* prefix)
2. .env file in the project root
3. Default values defined in ArtisanConfig

The Gemini API key is the one exception to the prefix rule: it is also picked up
from the ``GEMINI_API_KEY`` and ``API_KEY`` variables, which is where key
selection tooling usually injects it.

Example .env file:
    ARTISAN_GEMINI_API_KEY=...
    ARTISAN_DATA_DIR=data
    ARTISAN_SAVE_DESTINATION=home

Usage Example
-------------
    from artisan.core.config import get_config

    config = get_config()
    print(config.image_model)
    print(config.gallery_path)

Configuration is read once and cached. To pick up a newly injected key, build a
fresh ``ArtisanConfig()`` (this is what ``EnvironmentKeyGate.grant_access`` does).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ArtisanConfig(BaseSettings):
    """Main configuration for Artisan Studio.

    Attributes
    ----------
    Generation Service:
        gemini_api_key : str | None
            Access credential for the Gemini API (None means not configured)
        image_model : str
            Gemini model used for stylized rendering
        aspect_ratio : str
            Requested aspect ratio of the rendered image
        image_size : str
            Requested target resolution of the rendered image

    Persistence:
        data_dir : Path
            Directory holding the persisted gallery
        gallery_key : str
            Versioned key of the persisted gallery entry

    Behaviour:
        save_destination : Literal["gallery", "home"]
            View shown after a result is saved to the gallery
        capture_jpeg_quality : int
            JPEG quality used when encoding captured frames (1-100)

    Notes
    -----
    - ``data_dir`` is created automatically if it doesn't exist
    - Bumping ``gallery_key`` starts a fresh gallery without touching the old one
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ARTISAN_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Generation service
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ARTISAN_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="Gemini API key (from a paid GCP project)",
    )
    image_model: str = Field(
        default="gemini-3-pro-image-preview",
        description="Gemini image model used for rendering",
    )
    aspect_ratio: str = Field(
        default="3:4",
        description="Aspect ratio requested from the image model",
    )
    image_size: str = Field(
        default="1K",
        description="Target resolution requested from the image model",
    )

    # Persistence
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the persisted gallery",
    )
    gallery_key: str = Field(
        default="artisan_gallery_v2",
        description="Versioned key of the persisted gallery entry",
    )

    # Behaviour
    save_destination: Literal["gallery", "home"] = Field(
        default="gallery",
        description="View shown after saving a result to the gallery",
    )
    capture_jpeg_quality: int = Field(default=80, ge=1, le=100)

    def __init__(self, **kwargs):
        """Initialize configuration and create the data directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def gallery_path(self) -> Path:
        """Location of the persisted gallery file."""
        return self.data_dir / f"{self.gallery_key}.json"

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())


@lru_cache(maxsize=1)
def get_config() -> ArtisanConfig:
    """Return the process-wide configuration instance."""
    return ArtisanConfig()
