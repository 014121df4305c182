"""Shared test fixtures."""

import asyncio
import io
from dataclasses import dataclass, field

import pytest
from PIL import Image

from headshot_studio.config import Settings
from headshot_studio.containers import AppContainer, build_session_store
from headshot_studio.domain.generation import ResponsePart
from headshot_studio.services.background import BackgroundRemover
from headshot_studio.services.generation import GenerationService, ImageGenerationClient
from headshot_studio.services.workflow import WorkflowController


def make_jpeg(width: int = 400, height: int = 500, color: str = "#c08060") -> bytes:
    """Return an encoded RGB JPEG."""
    output = io.BytesIO()
    Image.new("RGB", (width, height), color).save(output, format="JPEG")
    return output.getvalue()


def make_bmp(width: int = 40, height: int = 50) -> bytes:
    """Return an encoded BMP, a format Pillow reads but the model does not."""
    output = io.BytesIO()
    Image.new("RGB", (width, height), "#c08060").save(output, format="BMP")
    return output.getvalue()


def make_cutout_png(width: int = 40, height: int = 50) -> bytes:
    """Return an RGBA PNG with an opaque centre and transparent border."""
    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    for x in range(width // 4, 3 * width // 4):
        for y in range(height // 4, 3 * height // 4):
            image.putpixel((x, y), (200, 120, 90, 255))
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


@dataclass
class FakeGenerationClient(ImageGenerationClient):
    """Fake generation client recording requests."""

    parts: list[ResponsePart] | None = field(
        default_factory=lambda: [
            ResponsePart(data=make_jpeg(64, 80, "#334155"), mime_type="image/jpeg")
        ]
    )
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
    ) -> list[ResponsePart] | None:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_bytes": image_bytes,
                "mime_type": mime_type,
            }
        )
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.parts


@dataclass
class FakeBackgroundRemover(BackgroundRemover):
    """Fake background remover returning a fixed cutout."""

    result: bytes = field(default_factory=make_cutout_png)
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: int = 0

    async def remove(self, image_bytes: bytes) -> bytes:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="gemini-key", _env_file=None)


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def remover() -> FakeBackgroundRemover:
    return FakeBackgroundRemover()


@pytest.fixture
def generation_service(
    settings: Settings, generation_client: FakeGenerationClient
) -> GenerationService:
    return GenerationService(client=generation_client, model=settings.gemini_model)


@pytest.fixture
def controller(
    generation_service: GenerationService, remover: FakeBackgroundRemover
) -> WorkflowController:
    return WorkflowController(generation_service=generation_service, remover=remover)


@pytest.fixture
def container(
    settings: Settings,
    generation_service: GenerationService,
    remover: FakeBackgroundRemover,
) -> AppContainer:
    session_store = build_session_store(settings, generation_service, remover)

    async def close_resources() -> None:
        session_store.close()

    return AppContainer(
        settings=settings,
        generation_service=generation_service,
        background_remover=remover,
        session_store=session_store,
        close_resources=close_resources,
    )
