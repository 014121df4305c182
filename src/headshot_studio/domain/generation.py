"""Models for image generation requests and responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResponsePart:
    """Single part of a generation response: text or inline image bytes."""

    text: str | None = None
    data: bytes | None = None
    mime_type: str | None = None

    @property
    def has_image(self) -> bool:
        """Return whether the part carries inline image bytes."""
        return bool(self.data)


@dataclass(frozen=True)
class GeneratedImage:
    """Image returned by the generation service."""

    content: bytes
    mime_type: str
    prompt_used: str
