"""State models for the headshot workflow and background edits."""

from dataclasses import dataclass
from enum import StrEnum

from headshot_studio.domain.generation import GeneratedImage
from headshot_studio.domain.images import UploadedImage
from headshot_studio.domain.styles import DEFAULT_STYLE, Style


class Screen(StrEnum):
    """Primary screens of the workflow."""

    UPLOAD = "UPLOAD"
    CONFIGURE = "CONFIGURE"
    GENERATING = "GENERATING"
    RESULT = "RESULT"


@dataclass
class Session:
    """Mutable state owned by a workflow controller.

    ``generated_image`` is only set on the RESULT screen and
    ``original_image`` is set on every screen except UPLOAD.
    """

    screen: Screen = Screen.UPLOAD
    original_image: UploadedImage | None = None
    generated_image: GeneratedImage | None = None
    selected_style: Style = DEFAULT_STYLE
    custom_prompt: str = ""
    last_error: str | None = None


class EditState(StrEnum):
    """States of the background edit sub-workflow."""

    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    EDITED = "EDITED"
    FAILED = "FAILED"


class Backdrop(StrEnum):
    """Backdrops available when exporting a background edit."""

    TRANSPARENT = "transparent"
    WHITE = "white"
    GREY = "grey"
    DARK = "dark"
    BLUE = "blue"
    GREEN = "green"

    @property
    def color(self) -> str | None:
        """Hex fill color, or None for the transparent backdrop."""
        return BACKDROP_COLORS[self]


BACKDROP_COLORS: dict[Backdrop, str | None] = {
    Backdrop.TRANSPARENT: None,
    Backdrop.WHITE: "#ffffff",
    Backdrop.GREY: "#94a3b8",
    Backdrop.DARK: "#1e293b",
    Backdrop.BLUE: "#dbeafe",
    Backdrop.GREEN: "#22c55e",
}


@dataclass(frozen=True)
class BackgroundEditSnapshot:
    """Read-only view of a background edit."""

    state: EditState
    selected_backdrop: Backdrop
    has_processed_image: bool
    last_error: str | None

    @property
    def busy(self) -> bool:
        return self.state is EditState.PROCESSING
