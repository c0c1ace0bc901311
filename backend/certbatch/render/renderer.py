"""
Certificate renderer - composite one record onto the template image

Responsibilities:
1. Decode the template bytes to an RGBA canvas of native size
2. Draw each field right-aligned in its scaled region, wrapping as needed
3. Encode the canvas as PNG and write it under the output directory

Test points:
- test_output_matches_template_size: output decodes to template dimensions
- test_unset_region_is_skipped: zero-sized regions draw nothing
- test_invalid_template_raises_decode_error
- test_existing_output_dir_is_tolerated
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from ..config import get_config
from ..interfaces import (
    DecodeError,
    ICertificateRenderer,
    ITextShaper,
    LayoutError,
    OutputIOError,
)
from ..models import RenderJob, ScaledRegion
from .shaping import get_shaper

logger = logging.getLogger(__name__)


class CertificateRenderer(ICertificateRenderer):
    """Pillow-based certificate renderer"""

    def __init__(
        self,
        shaper: ITextShaper | None = None,
        output_dir: str | Path | None = None,
        font_path: str | None = None,
        text_color: tuple[int, int, int] | None = None,
    ):
        config = get_config()
        self.shaper = shaper or get_shaper(config.render.shaper)
        self.output_dir = Path(output_dir or config.output.output_dir)
        self.font_path = font_path or config.render.font_path
        self.text_color = tuple(text_color or config.render.text_color)
        self.line_spacing = config.render.line_spacing

    def render(self, job: RenderJob) -> Path:
        """Compose, encode and write one certificate"""
        canvas = self.compose(job)
        data = self.encode(canvas)
        path = self.save(job.output_name, data)
        logger.info(f"saved {path}")
        return path

    def compose(self, job: RenderJob) -> Image.Image:
        """Draw every field of job.record onto a copy of the template"""
        template = self.decode_template(job.template)
        canvas = Image.new("RGBA", template.size, (0, 0, 0, 0))
        canvas.alpha_composite(template)

        font = self._load_font(job.font_size)
        draw = ImageDraw.Draw(canvas)

        if len(job.record) != len(job.regions):
            logger.debug(
                f"{job.output_name}: {len(job.record)} fields for {len(job.regions)} regions"
            )

        for (column, value), region in zip(job.record.items(), job.regions):
            if region.is_empty:
                logger.debug(f"skipping {column}")
                continue
            self.draw_field(draw, value, region, font, job.font_size)

        return canvas

    @staticmethod
    def decode_template(template: bytes) -> Image.Image:
        try:
            with Image.open(io.BytesIO(template)) as image:
                image.load()
                return image.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise DecodeError(f"Template image cannot be decoded: {e}") from e

    def _load_font(self, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        try:
            if self.font_path:
                return ImageFont.truetype(self.font_path, size)
            return ImageFont.load_default(size=size)
        except (OSError, ValueError) as e:
            raise LayoutError(f"Cannot load typeface {self.font_path or '<default>'}: {e}") from e

    def draw_field(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        region: ScaledRegion,
        font,
        font_size: float,
    ) -> None:
        """Paint one value right-aligned inside the region's box"""
        line_height = font_size * self.line_spacing
        for i, line in enumerate(self.wrap(draw, text, font, region.width)):
            shaped = self.shaper.shape(line)
            line_width = draw.textlength(shaped, font=font)
            x = region.origin.x + region.width - line_width
            y = region.origin.y + i * line_height
            draw.text((x, y), shaped, font=font, fill=self.text_color)

    def wrap(self, draw: ImageDraw.ImageDraw, text: str, font, width: float) -> list[str]:
        """
        Greedy word wrap in logical order.

        Widths are measured on the shaped line so joined forms are counted
        as drawn. A word wider than the box gets a line of its own.
        """
        lines: list[str] = []
        for paragraph in text.splitlines():
            words = paragraph.split()
            if not words:
                continue
            current = words[0]
            for word in words[1:]:
                candidate = f"{current} {word}"
                if draw.textlength(self.shaper.shape(candidate), font=font) <= width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)
        return lines

    def encode(self, canvas: Image.Image) -> bytes:
        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, filename: str, data: bytes) -> Path:
        """Write under output_dir, creating it on demand"""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputIOError(f"Cannot create output dir {self.output_dir}: {e}") from e

        path = self.output_dir / filename
        try:
            path.write_bytes(data)
        except OSError as e:
            raise OutputIOError(f"Cannot write {path}: {e}") from e
        return path
