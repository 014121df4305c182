"""Google Gemini client for image-to-image generation."""

from dataclasses import dataclass

from google import genai
from google.genai import types
from google.genai.types import Modality

from headshot_studio.domain.generation import ResponsePart
from headshot_studio.services.generation import ImageGenerationClient


@dataclass
class GeminiImageClient(ImageGenerationClient):
    """Image generation client backed by the google-genai SDK."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str, timeout_ms: int = 300_000) -> "GeminiImageClient":
        """Create a Gemini client with an HTTP timeout."""
        return cls(
            client=genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms),
            )
        )

    async def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> list[ResponsePart] | None:
        """Call generateContent with a text part and an inline image part."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_text(text=prompt),
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            ],
            config=types.GenerateContentConfig(
                response_modalities=[Modality.TEXT, Modality.IMAGE],
            ),
        )
        return _response_parts(response)


def _response_parts(response: object) -> list[ResponsePart] | None:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    raw_parts = getattr(content, "parts", None)
    if raw_parts is None:
        return None

    parts: list[ResponsePart] = []
    for part in raw_parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            parts.append(ResponsePart(data=inline.data, mime_type=inline.mime_type))
        elif getattr(part, "text", None):
            parts.append(ResponsePart(text=part.text))
    return parts
