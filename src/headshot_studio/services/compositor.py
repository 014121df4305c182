"""Flatten background-removed images onto a solid backdrop."""

import io

from PIL import Image, ImageColor, UnidentifiedImageError

from headshot_studio.domain.errors import CompositingError

JPEG_QUALITY = 95


def composite(
    image_bytes: bytes, color: str | None, quality: int = JPEG_QUALITY
) -> bytes:
    """Return the image flattened onto ``color`` as JPEG.

    When ``color`` is ``None`` the input is returned unchanged, keeping its
    alpha channel and original encoding.
    """
    if color is None:
        return image_bytes

    try:
        with Image.open(io.BytesIO(image_bytes)) as source:
            foreground = source.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise CompositingError() from exc

    fill = ImageColor.getrgb(color)[:3]
    canvas = Image.new("RGB", foreground.size, fill)
    canvas.paste(foreground, mask=foreground.getchannel("A"))

    output = io.BytesIO()
    canvas.save(output, format="JPEG", quality=quality)
    return output.getvalue()
