"""Local background removal backed by rembg."""

import asyncio
import logging
from dataclasses import dataclass, field

from rembg import new_session, remove

from headshot_studio.domain.errors import LocalProcessingError
from headshot_studio.services.background import BackgroundRemover

logger = logging.getLogger(__name__)


@dataclass
class RembgBackgroundRemover(BackgroundRemover):
    """Background remover running a rembg model in a worker thread."""

    model_name: str = "u2net_human_seg"
    _sessions: dict[str, object] = field(default_factory=dict, repr=False)

    def _session(self) -> object:
        """Return a cached rembg session for the configured model."""
        session = self._sessions.get(self.model_name)
        if session is None:
            logger.info("Loading rembg model %s", self.model_name)
            session = new_session(self.model_name)
            self._sessions[self.model_name] = session
        return session

    def _remove_sync(self, image_bytes: bytes) -> bytes:
        return remove(image_bytes, session=self._session())

    async def remove(self, image_bytes: bytes) -> bytes:
        """Return PNG bytes with the background made transparent."""
        try:
            result = await asyncio.to_thread(self._remove_sync, image_bytes)
        except Exception as exc:
            logger.exception("Background removal failed")
            raise LocalProcessingError() from exc
        if not isinstance(result, bytes) or not result:
            raise LocalProcessingError()
        return result
