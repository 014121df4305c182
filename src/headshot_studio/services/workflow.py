"""Workflow state machine: upload, configure, generate, result."""

import logging
from dataclasses import replace
from datetime import datetime

from headshot_studio.domain.errors import (
    HeadshotError,
    InvalidStateError,
    ValidationError,
)
from headshot_studio.domain.styles import Style, get_style
from headshot_studio.domain.workflow import Screen, Session
from headshot_studio.services.background import BackgroundRemover
from headshot_studio.services.background_edit import BackgroundEditController
from headshot_studio.services.exports import ExportedFile, generated_filename
from headshot_studio.services.generation import GenerationService
from headshot_studio.services.observable import Observable
from headshot_studio.services.uploads import DEFAULT_MAX_UPLOAD_BYTES, validate_upload

logger = logging.getLogger(__name__)

PROMPT_REQUIRED_MESSAGE = "Please enter a custom prompt."


class WorkflowController(Observable[Session]):
    """Owns one user's session and applies workflow transitions.

    Events that are not valid for the current screen are ignored. Every
    generation captures a token; ``reset``, ``try_again`` and a new image
    selection advance it so that a result settling afterwards is discarded
    instead of overwriting newer state.
    """

    def __init__(
        self,
        generation_service: GenerationService,
        remover: BackgroundRemover,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        super().__init__()
        self.generation_service = generation_service
        self.remover = remover
        self.max_upload_bytes = max_upload_bytes
        self.session = Session()
        self.background_edit: BackgroundEditController | None = None
        self._generation_token = 0

    def snapshot(self) -> Session:
        """Return a shallow copy of the session."""
        return replace(self.session)

    def effective_prompt(self) -> str:
        """Return the text that would be sent to the generation model."""
        style = self.session.selected_style
        if style.is_custom:
            return self.session.custom_prompt
        return style.prompt_template

    def select_image(self, content: bytes, content_type: str | None = None) -> None:
        """Store an uploaded image and move to CONFIGURE."""
        if self.session.screen is not Screen.UPLOAD:
            logger.debug("Ignoring image selection on %s", self.session.screen)
            return
        try:
            image = validate_upload(content, content_type, self.max_upload_bytes)
        except ValidationError as exc:
            logger.info("Rejected upload: %s", exc.message)
            self.session.last_error = exc.message
            self._notify()
            return

        self._generation_token += 1
        self.session.original_image = image
        self.session.screen = Screen.CONFIGURE
        self.session.last_error = None
        self._notify()

    def select_style(self, style: Style) -> None:
        """Select a style unless a generation is in flight."""
        if self.session.screen is Screen.GENERATING:
            logger.debug("Ignoring style selection while generating")
            return
        self.session.selected_style = style
        self._notify()

    def select_style_id(self, style_id: str) -> None:
        """Select a catalog style by id."""
        style = get_style(style_id)
        if style is None:
            raise ValidationError(f"Unknown style: {style_id}")
        self.select_style(style)

    def set_custom_prompt(self, text: str) -> None:
        """Update the user-authored prompt unless a generation is in flight."""
        if self.session.screen is Screen.GENERATING:
            logger.debug("Ignoring prompt edit while generating")
            return
        self.session.custom_prompt = text
        self._notify()

    async def generate(self) -> None:
        """Generate a headshot from the original image and effective prompt."""
        session = self.session
        if session.original_image is None or session.selected_style is None:
            return
        if session.screen is not Screen.CONFIGURE:
            logger.debug("Ignoring generate request on %s", session.screen)
            return

        prompt = self.effective_prompt()
        if not prompt.strip():
            session.last_error = PROMPT_REQUIRED_MESSAGE
            self._notify()
            return

        self._generation_token += 1
        token = self._generation_token
        original = session.original_image
        session.screen = Screen.GENERATING
        session.last_error = None
        self._notify()

        try:
            image = await self.generation_service.generate(
                original.content, prompt, original.mime_type
            )
        except HeadshotError as exc:
            if token != self._generation_token:
                logger.info("Discarding failure of a stale generation: %s", exc.message)
                return
            logger.warning("Generation failed: %s", exc.message)
            self.session.screen = Screen.CONFIGURE
            self.session.last_error = exc.message
            self._notify()
            return

        if token != self._generation_token:
            logger.info("Discarding result of a stale generation")
            return
        self.session.generated_image = image
        self.session.screen = Screen.RESULT
        self._notify()

    def try_again(self) -> None:
        """Return from RESULT to CONFIGURE keeping the image and style."""
        if self.session.screen is not Screen.RESULT:
            return
        self._close_background_edit()
        self._generation_token += 1
        self.session.generated_image = None
        self.session.last_error = None
        self.session.screen = Screen.CONFIGURE
        self._notify()

    def reset(self) -> None:
        """Start over with a fresh session."""
        self._close_background_edit()
        self._generation_token += 1
        self.session = Session()
        self._notify()

    def download(self, now: datetime | None = None) -> ExportedFile:
        """Export the generated image as a download."""
        image = self.session.generated_image
        if self.session.screen is not Screen.RESULT or image is None:
            raise InvalidStateError("There is no generated image to download.")
        return ExportedFile(
            filename=generated_filename(image.mime_type, now),
            content=image.content,
            media_type=image.mime_type,
        )

    def open_background_editor(self) -> BackgroundEditController:
        """Enter the background edit sub-workflow for the current result."""
        image = self.session.generated_image
        if self.session.screen is not Screen.RESULT or image is None:
            raise InvalidStateError(
                "Generate a headshot before editing its background."
            )
        if self.background_edit is None:
            self.background_edit = BackgroundEditController(image.content, self.remover)
            self._notify()
        return self.background_edit

    def close_background_editor(self) -> None:
        """Leave the background edit sub-workflow."""
        if self._close_background_edit():
            self._notify()

    def _close_background_edit(self) -> bool:
        if self.background_edit is None:
            return False
        self.background_edit.close()
        self.background_edit = None
        return True
