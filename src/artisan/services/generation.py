"""Generation service contract and the Gemini implementation.

The controller only depends on ``GenerationClient``: give it a photo (data URI)
and an instruction, get back a rendered photo (data URI) or a classified
``GenerationError``:

- ``MissingCredentialError``: no API key configured, raised before any call
- ``InvalidCredentialError``: the service rejected the key
- ``EmptyResultError``: the call succeeded but carried no image
- ``UnknownGenerationError``: anything else, with the original message

There is no automatic retry. The user retries by generating again.

Usage Example
-------------
    from artisan.services.generation import GeminiGenerationClient

    client = GeminiGenerationClient(config, key_provider=gate.api_key)
    result_uri = await client.generate(photo_uri, style.prompt)
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from google import genai
from google.genai import errors, types

from artisan.core.config import ArtisanConfig
from artisan.core.errors import (
    EmptyResultError,
    GenerationError,
    InvalidCredentialError,
    MissingCredentialError,
    UnknownGenerationError,
)
from artisan.core.images import parse_data_uri, to_data_uri

logger = logging.getLogger(__name__)

# Text the service returns when the selected key no longer resolves to a project
INVALID_CREDENTIAL_SIGNAL = "Requested entity was not found"

INSTRUCTION_SUFFIX = ". Output should be a single beautiful artistic image."


class GenerationClient(ABC):
    """Renders a photo in a new style."""

    @abstractmethod
    async def generate(self, image: str, instruction: str) -> str:
        """Render ``image`` following ``instruction``.

        Args:
            image: Source photo as a data URI
            instruction: Natural-language style instruction

        Returns:
            Rendered image as a data URI

        Raises:
            GenerationError: Classified failure (see module docstring)
        """


@dataclass(frozen=True)
class GenerationRequest:
    """Provider-neutral description of one generation call."""

    image_data: bytes
    mime_type: str
    instruction_text: str
    aspect_ratio: str
    target_resolution: str


def build_request(image: str, instruction: str, config: ArtisanConfig) -> GenerationRequest:
    """Turn a data-URI photo and a style instruction into a request.

    Raises:
        UnknownGenerationError: If the photo is not a base64 data URI
    """
    try:
        mime_type, data = parse_data_uri(image)
    except ValueError as e:
        raise UnknownGenerationError(f"The source photo could not be read: {e}") from e

    return GenerationRequest(
        image_data=data,
        mime_type=mime_type,
        instruction_text=instruction + INSTRUCTION_SUFFIX,
        aspect_ratio=config.aspect_ratio,
        target_resolution=config.image_size,
    )


def extract_image(response: Any) -> str:
    """Pull the first inline image out of a generate_content response.

    Raises:
        EmptyResultError: If no candidate part carries image data
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return to_data_uri(inline_data.data, inline_data.mime_type or "image/png")

    raise EmptyResultError(
        "The museum curator was unable to finalize your piece. Please try a different style."
    )


def classify_error(error: Exception) -> GenerationError:
    """Map a raw SDK/transport failure onto the generation error taxonomy."""
    if isinstance(error, GenerationError):
        return error

    message = str(error)
    if INVALID_CREDENTIAL_SIGNAL.lower() in message.lower():
        return InvalidCredentialError("The API key was rejected by the generation service.")

    if isinstance(error, errors.APIError) and error.message:
        message = error.message

    return UnknownGenerationError(message)


class GeminiGenerationClient(GenerationClient):
    """Generation client backed by the Gemini image models (google-genai SDK).

    A new SDK client is created for every call so a key granted after startup
    is picked up without restarting. Its async transport is closed when the call
    finishes, whether or not it succeeded.

    Attributes:
        config: Model and image settings
        key_provider: Callable returning the current API key (or None)
        client_factory: Builds the SDK client from an API key
    """

    def __init__(
        self,
        config: ArtisanConfig,
        key_provider: Callable[[], str | None] | None = None,
        client_factory: Callable[..., Any] = genai.Client,
    ):
        self.config = config
        self.key_provider = key_provider or (lambda: config.gemini_api_key)
        self.client_factory = client_factory

    async def generate(self, image: str, instruction: str) -> str:
        api_key = self.key_provider()
        if not api_key:
            raise MissingCredentialError("No API Key selected. Please select your key first.")

        request = build_request(image, instruction, self.config)
        client = self.client_factory(api_key=api_key)

        logger.info(
            f"Requesting render from {self.config.image_model} "
            f"({request.aspect_ratio}, {request.target_resolution})"
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.config.image_model,
                contents=[
                    types.Part.from_bytes(data=request.image_data, mime_type=request.mime_type),
                    types.Part.from_text(text=request.instruction_text),
                ],
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(
                        aspect_ratio=request.aspect_ratio,
                        image_size=request.target_resolution,
                    ),
                ),
            )
            result = extract_image(response)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Gemini art generation error: {e}", exc_info=True)
            raise classify_error(e) from e
        finally:
            await client.aio.aclose()

        logger.info("Render complete")
        return result
