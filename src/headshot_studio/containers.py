"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from headshot_studio.adapters.gemini_image_client import GeminiImageClient
from headshot_studio.adapters.rembg_remover import RembgBackgroundRemover
from headshot_studio.config import Settings, resolve_api_key
from headshot_studio.services.background import BackgroundRemover
from headshot_studio.services.generation import GenerationService
from headshot_studio.services.session_store import SessionStore
from headshot_studio.services.workflow import WorkflowController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    generation_service: GenerationService
    background_remover: BackgroundRemover
    session_store: SessionStore
    close_resources: Callable[[], Awaitable[None]]


def build_session_store(
    settings: Settings,
    generation_service: GenerationService,
    background_remover: BackgroundRemover,
) -> SessionStore:
    """Create a session store producing controllers bound to the services."""

    def factory() -> WorkflowController:
        return WorkflowController(
            generation_service=generation_service,
            remover=background_remover,
            max_upload_bytes=settings.max_upload_bytes,
        )

    return SessionStore(
        factory=factory,
        ttl_seconds=settings.session_ttl_seconds,
        max_sessions=settings.max_sessions,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_key = resolve_api_key(resolved_settings.gemini_api_key)
    gemini_client = None
    if api_key:
        gemini_client = GeminiImageClient.create(
            api_key, timeout_ms=resolved_settings.gemini_timeout_ms
        )
    generation_service = GenerationService(
        client=gemini_client,
        model=resolved_settings.gemini_model,
    )
    background_remover = RembgBackgroundRemover(
        model_name=resolved_settings.rembg_model
    )
    session_store = build_session_store(
        resolved_settings, generation_service, background_remover
    )

    async def close_resources() -> None:
        session_store.close()

    return AppContainer(
        settings=resolved_settings,
        generation_service=generation_service,
        background_remover=background_remover,
        session_store=session_store,
        close_resources=close_resources,
    )
