"""ImageInspector implemented with Pillow."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from printops.domain.exceptions import ValidationError
from printops.domain.gateway.image_inspector import ImageInspector, ImageMetadata

# Pillow reports no density for many formats; print shops assume screen dpi.
DEFAULT_DPI = 72


class PillowImageInspector(ImageInspector):

    def inspect(self, content: bytes) -> ImageMetadata:
        try:
            with Image.open(BytesIO(content)) as img:
                dpi = img.info.get("dpi")
                density = int(round(float(dpi[0]))) if isinstance(dpi, tuple) and dpi[0] else DEFAULT_DPI
                return ImageMetadata(
                    width=img.width,
                    height=img.height,
                    format=img.format or "UNKNOWN",
                    density=density,
                )
        except (UnidentifiedImageError, OSError) as exc:
            raise ValidationError(
                "Design file is not a readable image", fields=("file",)
            ) from exc
