"""Background edit sub-workflow entered from a generated result."""

import logging
from datetime import datetime

from headshot_studio.domain.errors import (
    CompositingError,
    InvalidStateError,
    LocalProcessingError,
)
from headshot_studio.domain.workflow import (
    Backdrop,
    BackgroundEditSnapshot,
    EditState,
)
from headshot_studio.services.background import BackgroundRemover, ProcessedImage
from headshot_studio.services.compositor import composite
from headshot_studio.services.exports import ExportedFile, edited_filename
from headshot_studio.services.observable import Observable

logger = logging.getLogger(__name__)


class BackgroundEditController(Observable[BackgroundEditSnapshot]):
    """State machine for removing the background of one generated image.

    A controller is created fresh each time the user opts in and is closed
    when they leave, which releases the processed image it owns. The removal
    result is memoized: ``start`` does nothing while a result is cached or a
    removal is in flight.
    """

    def __init__(self, source_image: bytes, remover: BackgroundRemover) -> None:
        super().__init__()
        self.source_image = source_image
        self.remover = remover
        self.state = EditState.IDLE
        self.processed_image: ProcessedImage | None = None
        self.selected_backdrop = Backdrop.TRANSPARENT
        self.last_error: str | None = None
        self._closed = False

    @property
    def busy(self) -> bool:
        return self.state is EditState.PROCESSING

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> BackgroundEditSnapshot:
        """Return a read-only view of the edit."""
        return BackgroundEditSnapshot(
            state=self.state,
            selected_backdrop=self.selected_backdrop,
            has_processed_image=self.processed_image is not None,
            last_error=self.last_error,
        )

    async def start(self) -> None:
        """Remove the background of the source image once."""
        if self._closed or self.state in {EditState.PROCESSING, EditState.EDITED}:
            return

        self.state = EditState.PROCESSING
        self.last_error = None
        self._notify()

        try:
            content = await self.remover.remove(self.source_image)
            handle = ProcessedImage.store(content)
        except Exception as exc:
            message = (
                exc.message
                if isinstance(exc, LocalProcessingError)
                else LocalProcessingError.default_message
            )
            logger.warning("Background removal failed: %s", message)
            if self._closed:
                return
            self.state = EditState.FAILED
            self.last_error = message
            self._notify()
            return

        if self._closed:
            logger.info("Discarding background removal for a closed edit")
            handle.release()
            return

        self.processed_image = handle
        self.state = EditState.EDITED
        self._notify()

    def cancel(self) -> None:
        """Discard the processed image and return to IDLE."""
        if self.state not in {EditState.EDITED, EditState.FAILED}:
            return
        self._release()
        self.state = EditState.IDLE
        self.last_error = None
        self._notify()

    def select_backdrop(self, backdrop: Backdrop) -> None:
        """Choose the backdrop used by the preview and the export."""
        self.selected_backdrop = backdrop
        self._notify()

    def download(self, now: datetime | None = None) -> ExportedFile:
        """Export the processed image on the selected backdrop."""
        if self.state is not EditState.EDITED or self.processed_image is None:
            raise InvalidStateError("Remove the background before downloading.")

        try:
            content = self.processed_image.read_bytes()
        except OSError as exc:
            logger.error("Processed image is no longer readable")
            raise CompositingError() from exc

        color = self.selected_backdrop.color
        if color is None:
            return ExportedFile(
                filename=edited_filename(None, now),
                content=content,
                media_type="image/png",
            )

        try:
            flattened = composite(content, color)
        except CompositingError:
            logger.error("Could not composite the processed image")
            raise
        return ExportedFile(
            filename=edited_filename(self.selected_backdrop.value, now),
            content=flattened,
            media_type="image/jpeg",
        )

    def close(self) -> None:
        """Release owned resources; later removal results are discarded."""
        self._closed = True
        self._release()

    def _release(self) -> None:
        if self.processed_image is not None:
            self.processed_image.release()
            self.processed_image = None
