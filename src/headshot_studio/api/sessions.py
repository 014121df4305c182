"""Session endpoints driving the workflow and background edit state machines."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse, Response

from headshot_studio.api.models import (
    BackdropSelection,
    PromptUpdate,
    SessionModel,
    StyleSelection,
)
from headshot_studio.domain.errors import InvalidStateError
from headshot_studio.services.background_edit import BackgroundEditController
from headshot_studio.services.exports import ExportedFile
from headshot_studio.services.workflow import WorkflowController

if TYPE_CHECKING:
    from headshot_studio.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_controller(session_id: UUID, request: Request) -> WorkflowController:
    """Resolve the workflow controller for a session id."""
    container: AppContainer = request.app.state.container
    controller = container.session_store.get(session_id)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return controller


def _session_model(session_id: UUID, controller: WorkflowController) -> SessionModel:
    editor = controller.background_edit
    return SessionModel.from_session(
        session_id,
        controller.snapshot(),
        editor.snapshot() if editor else None,
    )


def _editor(controller: WorkflowController) -> BackgroundEditController:
    if controller.background_edit is None:
        raise InvalidStateError("Background editing is not open.")
    return controller.background_edit


def _attachment(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(request: Request) -> SessionModel:
    """Start a new workflow session on the upload screen."""
    container: AppContainer = request.app.state.container
    session_id, controller = container.session_store.create()
    return _session_model(session_id, controller)


@router.get("/{session_id}")
async def get_session(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Return the current session state."""
    return _session_model(session_id, controller)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID, request: Request) -> Response:
    """Drop a session and release its resources."""
    container: AppContainer = request.app.state.container
    if not container.session_store.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/image")
async def upload_image(
    session_id: UUID,
    file: UploadFile = File(...),
    controller: WorkflowController = Depends(get_controller),
) -> SessionModel:
    """Select the photo to transform."""
    # One byte past the limit is enough for validation to reject the upload.
    content = await file.read(controller.max_upload_bytes + 1)
    controller.select_image(content, file.content_type)
    return _session_model(session_id, controller)


@router.put("/{session_id}/style")
async def select_style(
    session_id: UUID,
    body: StyleSelection,
    controller: WorkflowController = Depends(get_controller),
) -> SessionModel:
    """Select a headshot style."""
    controller.select_style_id(body.style_id)
    return _session_model(session_id, controller)


@router.put("/{session_id}/prompt")
async def set_prompt(
    session_id: UUID,
    body: PromptUpdate,
    controller: WorkflowController = Depends(get_controller),
) -> SessionModel:
    """Update the custom prompt text."""
    controller.set_custom_prompt(body.text)
    return _session_model(session_id, controller)


@router.post("/{session_id}/generate")
async def generate(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Run the generation and return the settled state."""
    await controller.generate()
    return _session_model(session_id, controller)


@router.post("/{session_id}/try-again")
async def try_again(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Go back to style selection keeping the uploaded photo."""
    controller.try_again()
    return _session_model(session_id, controller)


@router.post("/{session_id}/reset")
async def reset(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Start over from the upload screen."""
    controller.reset()
    return _session_model(session_id, controller)


@router.get("/{session_id}/images/{kind}")
async def get_image(
    kind: str, controller: WorkflowController = Depends(get_controller)
) -> Response:
    """Return the original or generated image bytes."""
    if kind == "original":
        image = controller.session.original_image
        if image is not None:
            return Response(content=image.content, media_type=image.mime_type)
    elif kind == "generated":
        generated = controller.session.generated_image
        if generated is not None:
            return Response(content=generated.content, media_type=generated.mime_type)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No such image")


@router.get("/{session_id}/download")
async def download(
    controller: WorkflowController = Depends(get_controller),
) -> Response:
    """Download the generated headshot."""
    return _attachment(controller.download())


@router.post("/{session_id}/background")
async def open_background_editor(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Enter the background edit sub-workflow."""
    controller.open_background_editor()
    return _session_model(session_id, controller)


@router.delete("/{session_id}/background")
async def close_background_editor(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Leave the background edit sub-workflow."""
    controller.close_background_editor()
    return _session_model(session_id, controller)


@router.post("/{session_id}/background/start")
async def start_background_removal(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Remove the background of the generated image."""
    await _editor(controller).start()
    return _session_model(session_id, controller)


@router.post("/{session_id}/background/cancel")
async def cancel_background_edit(
    session_id: UUID, controller: WorkflowController = Depends(get_controller)
) -> SessionModel:
    """Discard the processed image."""
    _editor(controller).cancel()
    return _session_model(session_id, controller)


@router.put("/{session_id}/background/backdrop")
async def select_backdrop(
    session_id: UUID,
    body: BackdropSelection,
    controller: WorkflowController = Depends(get_controller),
) -> SessionModel:
    """Choose the export backdrop."""
    _editor(controller).select_backdrop(body.backdrop)
    return _session_model(session_id, controller)


@router.get("/{session_id}/background/image")
async def background_image(
    controller: WorkflowController = Depends(get_controller),
) -> FileResponse:
    """Return the background-removed image."""
    processed = _editor(controller).processed_image
    if processed is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No processed image"
        )
    return FileResponse(processed.path, media_type="image/png")


@router.get("/{session_id}/background/download")
async def background_download(
    controller: WorkflowController = Depends(get_controller),
) -> Response:
    """Download the edited image on the selected backdrop."""
    return _attachment(_editor(controller).download())
