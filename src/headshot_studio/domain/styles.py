"""Headshot style catalog."""

from dataclasses import dataclass

CUSTOM_STYLE_ID = "custom"


@dataclass(frozen=True)
class Style:
    """A named preset pairing a description with a prompt template."""

    id: str
    name: str
    description: str
    prompt_template: str
    preview_color: str
    icon: str | None = None

    @property
    def is_custom(self) -> bool:
        """Return whether the prompt is authored by the user."""
        return self.id == CUSTOM_STYLE_ID


HEADSHOT_STYLES: tuple[Style, ...] = (
    Style(
        id="corporate-grey",
        name="Corporate Grey",
        description="Professional grey studio backdrop, suit and tie or formal blouse.",
        prompt_template=(
            "Transform this person into a professional corporate headshot. "
            "They should be wearing a sharp, dark business suit. "
            "The background should be a clean, neutral grey studio backdrop. "
            "High quality, photorealistic, 8k resolution, soft studio lighting."
        ),
        preview_color="#94a3b8",
        icon="🏢",
    ),
    Style(
        id="modern-office",
        name="Modern Tech",
        description=(
            "Casual yet professional look with a blurred modern office background."
        ),
        prompt_template=(
            "Transform this person into a modern tech industry professional. "
            "They should be wearing smart casual attire like a polo or blazer "
            "with a t-shirt. The background should be a bright, blurred modern "
            "open-plan office with glass and greenery. Natural lighting, "
            "approachable vibe."
        ),
        preview_color="#bfdbfe",
        icon="💻",
    ),
    Style(
        id="outdoor-natural",
        name="Outdoor Natural",
        description="Fresh outdoor setting with natural lighting and bokeh.",
        prompt_template=(
            "Transform this person into a professional outdoor portrait. "
            "They should be wearing business casual clothing. The background "
            "should be a blurred park or city street with beautiful natural "
            "bokeh and golden hour lighting. Warm, friendly, and trustworthy."
        ),
        preview_color="#bbf7d0",
        icon="🌳",
    ),
    Style(
        id="islamic-traditional",
        name="Islamic Traditional",
        description="Traditional attire with Panjabi, Tupi, and well-groomed beard.",
        prompt_template=(
            "Transform this person into a dignified professional portrait with "
            "traditional Islamic styling. The subject should be wearing a crisp "
            "Panjabi and a prayer cap (Tupi). Feature a well-groomed beard (Dari). "
            "The background should be a clean, neutral studio backdrop. "
            "High quality, photorealistic, 8k resolution, soft studio lighting."
        ),
        preview_color="#a7f3d0",
        icon="🕌",
    ),
    Style(
        id="studio-black",
        name="Dramatic Black",
        description="High-contrast studio lighting with a black background.",
        prompt_template=(
            "Transform this person into a dramatic, high-end studio portrait. "
            "Dark, solid black background. Rim lighting on the hair and "
            "shoulders. Serious and confident expression. Wearing a black "
            "turtleneck or dark formal wear. Artistic and bold."
        ),
        preview_color="#0f172a",
        icon="🎭",
    ),
    Style(
        id=CUSTOM_STYLE_ID,
        name="Custom Prompt",
        description="Describe your own style or edit.",
        prompt_template="",
        preview_color="#6366f1",
        icon="✨",
    ),
)

DEFAULT_STYLE = HEADSHOT_STYLES[0]

_STYLES_BY_ID = {style.id: style for style in HEADSHOT_STYLES}


def get_style(style_id: str) -> Style | None:
    """Return a catalog style by id, if present."""
    return _STYLES_BY_ID.get(style_id)
