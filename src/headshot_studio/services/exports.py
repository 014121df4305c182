"""Downloadable file naming."""

from dataclasses import dataclass
from datetime import UTC, datetime

from headshot_studio.domain.images import extension_for

GENERATED_PREFIX = "ai-headshot"
EDITED_PREFIX = "headshot"


@dataclass(frozen=True)
class ExportedFile:
    """A file ready to be sent to the browser as a download."""

    filename: str
    content: bytes
    media_type: str


def timestamp_ms(now: datetime | None = None) -> int:
    """Return a millisecond epoch timestamp."""
    moment = now or datetime.now(tz=UTC)
    return int(moment.timestamp() * 1000)


def generated_filename(mime_type: str, now: datetime | None = None) -> str:
    """Name for a downloaded generation result."""
    return f"{GENERATED_PREFIX}-{timestamp_ms(now)}.{extension_for(mime_type)}"


def edited_filename(backdrop: str | None, now: datetime | None = None) -> str:
    """Name for a downloaded background edit.

    ``None`` means the transparent, alpha-preserving PNG export.
    """
    if backdrop is None:
        return f"{EDITED_PREFIX}-bg-removed-{timestamp_ms(now)}.png"
    return f"{EDITED_PREFIX}-{backdrop}-{timestamp_ms(now)}.jpg"
