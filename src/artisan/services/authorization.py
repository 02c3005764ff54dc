"""Authorization gate for the generation service.

The controller asks the gate whether the generation service is usable at
startup and before every generation request, and asks it to grant access when
the user explicitly requests it.
"""

import logging
from abc import ABC, abstractmethod

from artisan.core.config import ArtisanConfig

logger = logging.getLogger(__name__)


class AuthorizationGate(ABC):
    """Reports and grants permission to use the generation service."""

    @abstractmethod
    async def has_access(self) -> bool:
        """Return True if a usable credential is currently selected."""

    @abstractmethod
    async def grant_access(self) -> None:
        """Run the external credential selection step."""


class AlwaysAuthorizedGate(AuthorizationGate):
    """Gate for environments with no credential selection step."""

    async def has_access(self) -> bool:
        return True

    async def grant_access(self) -> None:
        return None


class EnvironmentKeyGate(AuthorizationGate):
    """Access means a Gemini API key is configured.

    ``grant_access`` re-reads the key from the environment, so a key exported into the
    environment (or written to ``.env``) after startup is picked up. The gate's
    ``api_key`` method doubles as the key provider for the generation client.
    """

    def __init__(self, config: ArtisanConfig | None = None):
        self.config = config or ArtisanConfig()

    async def has_access(self) -> bool:
        return self.config.has_api_key

    async def grant_access(self) -> None:
        # Keep explicit overrides; only the key is re-read from the environment.
        self.config = ArtisanConfig(**self.config.model_dump(exclude={"gemini_api_key"}))
        if self.config.has_api_key:
            logger.info("API key found after access request")
        else:
            logger.warning("Access requested but no API key is configured")

    def api_key(self) -> str | None:
        return self.config.gemini_api_key
