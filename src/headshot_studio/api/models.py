"""Pydantic models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel

from headshot_studio.domain.styles import Style
from headshot_studio.domain.workflow import (
    Backdrop,
    BackgroundEditSnapshot,
    EditState,
    Screen,
    Session,
)


class StyleModel(BaseModel):
    """Catalog entry exposed to the browser."""

    id: str
    name: str
    description: str
    prompt_template: str
    preview_color: str
    icon: str | None = None
    is_custom: bool = False

    @classmethod
    def from_style(cls, style: Style) -> "StyleModel":
        return cls(
            id=style.id,
            name=style.name,
            description=style.description,
            prompt_template=style.prompt_template,
            preview_color=style.preview_color,
            icon=style.icon,
            is_custom=style.is_custom,
        )


class ImageInfo(BaseModel):
    """Metadata about an image held by a session."""

    mime_type: str
    size_bytes: int
    width: int | None = None
    height: int | None = None


class BackgroundEditModel(BaseModel):
    """Background edit sub-workflow state."""

    state: EditState
    selected_backdrop: Backdrop
    busy: bool
    has_processed_image: bool
    last_error: str | None = None

    @classmethod
    def from_snapshot(cls, snapshot: BackgroundEditSnapshot) -> "BackgroundEditModel":
        return cls(
            state=snapshot.state,
            selected_backdrop=snapshot.selected_backdrop,
            busy=snapshot.busy,
            has_processed_image=snapshot.has_processed_image,
            last_error=snapshot.last_error,
        )


class SessionModel(BaseModel):
    """Workflow session state."""

    id: UUID
    screen: Screen
    selected_style_id: str
    custom_prompt: str
    last_error: str | None = None
    original_image: ImageInfo | None = None
    generated_image: ImageInfo | None = None
    background_edit: BackgroundEditModel | None = None

    @classmethod
    def from_session(
        cls,
        session_id: UUID,
        session: Session,
        background_edit: BackgroundEditSnapshot | None = None,
    ) -> "SessionModel":
        original = session.original_image
        generated = session.generated_image
        return cls(
            id=session_id,
            screen=session.screen,
            selected_style_id=session.selected_style.id,
            custom_prompt=session.custom_prompt,
            last_error=session.last_error,
            original_image=(
                ImageInfo(
                    mime_type=original.mime_type,
                    size_bytes=len(original.content),
                    width=original.width,
                    height=original.height,
                )
                if original
                else None
            ),
            generated_image=(
                ImageInfo(
                    mime_type=generated.mime_type, size_bytes=len(generated.content)
                )
                if generated
                else None
            ),
            background_edit=(
                BackgroundEditModel.from_snapshot(background_edit)
                if background_edit
                else None
            ),
        )


class StyleSelection(BaseModel):
    """Request body for selecting a style."""

    style_id: str


class PromptUpdate(BaseModel):
    """Request body for the custom prompt."""

    text: str


class BackdropSelection(BaseModel):
    """Request body for choosing a backdrop."""

    backdrop: Backdrop
