"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from headshot_studio.api.models import StyleModel
from headshot_studio.api.sessions import router as sessions_router
from headshot_studio.api.ui import INDEX_HTML
from headshot_studio.app_logging import configure_logging
from headshot_studio.containers import AppContainer
from headshot_studio.domain.errors import (
    CompositingError,
    HeadshotError,
    InvalidStateError,
    ValidationError,
)
from headshot_studio.domain.styles import HEADSHOT_STYLES

_ERROR_STATUS: dict[type[HeadshotError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidStateError: status.HTTP_409_CONFLICT,
    CompositingError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not app.state.container.generation_service.configured:
            logger.error("GEMINI_API_KEY is not set; generation requests will fail")
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Headshot Studio", lifespan=lifespan)
    app.state.container = container

    app.include_router(sessions_router)

    @app.exception_handler(HeadshotError)
    async def headshot_error_handler(
        request: Request, exc: HeadshotError
    ) -> JSONResponse:
        status_code = status.HTTP_400_BAD_REQUEST
        for error_type, code in _ERROR_STATUS.items():
            if isinstance(exc, error_type):
                status_code = code
                break
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Browser front end consuming the session API."""
        return HTMLResponse(INDEX_HTML)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/styles")
    async def styles() -> dict[str, list[StyleModel]]:
        """Return the headshot style catalog."""
        return {"styles": [StyleModel.from_style(style) for style in HEADSHOT_STYLES]}

    return app
