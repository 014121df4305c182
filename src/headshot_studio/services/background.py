"""Background removal interface and processed-image handles."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class BackgroundRemover(Protocol):
    """Interface for a local foreground extraction routine."""

    async def remove(self, image_bytes: bytes) -> bytes:
        """Return the foreground as image bytes, normally with alpha."""


@dataclass
class ProcessedImage:
    """Temporary file holding a background-removed image.

    The handle is owned by exactly one background edit and must be released
    when that edit is cancelled or discarded.
    """

    path: Path

    @classmethod
    def store(cls, content: bytes) -> "ProcessedImage":
        """Write bytes to a new temporary PNG file."""
        fd, raw_path = tempfile.mkstemp(prefix="headshot-", suffix=".png")
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        return cls(path=Path(raw_path))

    @property
    def released(self) -> bool:
        return not self.path.exists()

    def read_bytes(self) -> bytes:
        """Return the stored image bytes."""
        return self.path.read_bytes()

    def release(self) -> None:
        """Delete the backing file; safe to call more than once."""
        self.path.unlink(missing_ok=True)
