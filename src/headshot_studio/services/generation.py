"""Headshot generation through a hosted multimodal image model."""

import logging
from dataclasses import dataclass
from typing import Protocol

from headshot_studio.domain.errors import (
    ConfigurationError,
    EmptyResponseError,
    HeadshotError,
    TextOnlyResponseError,
    TransportError,
)
from headshot_studio.domain.generation import GeneratedImage, ResponsePart
from headshot_studio.domain.images import detect_mime_type

logger = logging.getLogger(__name__)


class ImageGenerationClient(Protocol):
    """Interface for a remote image-to-image generation model."""

    async def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> list[ResponsePart] | None:
        """Send a prompt plus one image and return the response parts.

        ``None`` means the response carried no content at all; an empty list
        means content was returned without any usable parts.
        """


@dataclass
class GenerationService:
    """Turns the model's response parts into exactly one generated image.

    The first part carrying inline image bytes is returned; any later image
    parts are ignored. No retries are attempted: a failure is raised to the
    caller as a :class:`GenerationError` subclass.
    """

    client: ImageGenerationClient | None
    model: str

    @property
    def configured(self) -> bool:
        """Return whether a credentialed client is available."""
        return self.client is not None

    async def generate(
        self, image_bytes: bytes, prompt: str, mime_type: str | None = None
    ) -> GeneratedImage:
        """Generate a headshot from an input image and prompt.

        ``mime_type`` should be the type established when the image was
        validated; it is only sniffed from the bytes when omitted.
        """
        if self.client is None:
            raise ConfigurationError()

        mime_type = mime_type or detect_mime_type(image_bytes)
        try:
            parts = await self.client.generate_content(
                model=self.model,
                prompt=prompt,
                image_bytes=image_bytes,
                mime_type=mime_type,
            )
        except HeadshotError:
            raise
        except Exception as exc:
            logger.exception("Image generation request failed")
            raise TransportError(str(exc) or None) from exc

        return _first_image(parts, prompt)


def _first_image(parts: list[ResponsePart] | None, prompt: str) -> GeneratedImage:
    if parts is None:
        raise EmptyResponseError()

    images = [part for part in parts if part.has_image]
    if images:
        if len(images) > 1:
            logger.debug("Ignoring %d extra image parts", len(images) - 1)
        first = images[0]
        content = first.data or b""
        return GeneratedImage(
            content=content,
            mime_type=first.mime_type or detect_mime_type(content),
            prompt_used=prompt,
        )

    for part in parts:
        if part.text:
            raise TextOnlyResponseError(part.text)
    raise EmptyResponseError("The model did not return an image.")
