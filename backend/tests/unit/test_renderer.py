"""
Certificate renderer unit tests
"""

import io
from pathlib import Path

import pytest
from PIL import Image, ImageChops, ImageDraw, ImageFont

from certbatch.interfaces import DecodeError, LayoutError, OutputIOError
from certbatch.models import Point, RenderJob, ScaledRegion
from certbatch.render import CertificateRenderer, ReverseTextShaper


def _job(template: bytes, record: dict, regions: list[ScaledRegion], name: str = "1-Omar.png") -> RenderJob:
    return RenderJob(record=record, regions=regions, template=template, output_name=name, font_size=40)


NAME_REGION = ScaledRegion(origin=Point(x=250, y=250), width=500)


def _ink_bbox(rendered: Image.Image, template: Image.Image):
    return ImageChops.difference(rendered.convert("RGB"), template.convert("RGB")).getbbox()


class TestCompose:
    """Compositing tests"""

    def test_unset_region_is_skipped(self, template_bytes, template_image):
        """Empty regions leave the template untouched"""
        job = _job(template_bytes, {"id": "1", "name": "Omar"}, [ScaledRegion(), ScaledRegion()])
        canvas = CertificateRenderer().compose(job)
        assert _ink_bbox(canvas, template_image) is None

    def test_text_drawn_in_region(self, template_bytes, template_image):
        job = _job(template_bytes, {"id": "1", "name": "Omar"}, [ScaledRegion(), NAME_REGION])
        canvas = CertificateRenderer().compose(job)
        left, top, right, bottom = _ink_bbox(canvas, template_image)
        assert left >= 250
        assert top >= 245
        assert right <= 750 + 2

    def test_right_aligned(self, template_bytes, template_image):
        """Short text hugs the right edge of the box"""
        job = _job(template_bytes, {"name": "Omar"}, [NAME_REGION])
        canvas = CertificateRenderer().compose(job)
        left, _, right, _ = _ink_bbox(canvas, template_image)
        assert right >= 750 - 15
        assert left > 500

    def test_arabic_text_drawn(self, template_bytes, template_image):
        job = _job(template_bytes, {"name": "عمر"}, [NAME_REGION])
        canvas = CertificateRenderer(shaper=ReverseTextShaper()).compose(job)
        assert canvas.size == (800, 600)
        assert _ink_bbox(canvas, template_image) is not None

    def test_jpeg_template(self):
        buffer = io.BytesIO()
        Image.new("RGB", (320, 200), (200, 180, 40)).save(buffer, format="JPEG")
        canvas = CertificateRenderer().compose(_job(buffer.getvalue(), {"name": "x"}, [ScaledRegion()]))
        assert canvas.size == (320, 200)

    def test_invalid_template_raises_decode_error(self):
        with pytest.raises(DecodeError):
            CertificateRenderer().compose(_job(b"not an image", {"name": "Omar"}, [NAME_REGION]))

    def test_bad_font_raises_layout_error(self, template_bytes, tmp_path: Path):
        renderer = CertificateRenderer(font_path=str(tmp_path / "missing.ttf"))
        with pytest.raises(LayoutError):
            renderer.compose(_job(template_bytes, {"name": "Omar"}, [NAME_REGION]))


class TestWrap:
    """Word wrap tests"""

    @pytest.fixture
    def draw_and_font(self):
        return ImageDraw.Draw(Image.new("RGB", (10, 10))), ImageFont.load_default(size=40)

    def test_fits_on_one_line(self, draw_and_font):
        draw, font = draw_and_font
        assert CertificateRenderer().wrap(draw, "one two three", font, 10000) == ["one two three"]

    def test_narrow_box_breaks_every_word(self, draw_and_font):
        draw, font = draw_and_font
        assert CertificateRenderer().wrap(draw, "one two three", font, 1) == ["one", "two", "three"]

    def test_empty_text(self, draw_and_font):
        draw, font = draw_and_font
        assert CertificateRenderer().wrap(draw, "", font, 100) == []

    def test_wrapped_text_spans_lines(self, template_bytes, template_image):
        region = ScaledRegion(origin=Point(x=100, y=100), width=120)
        job = _job(template_bytes, {"name": "Certificate of attendance"}, [region])
        _, top, _, bottom = _ink_bbox(CertificateRenderer().compose(job), template_image)
        assert bottom - top > 40 * 1.2


class TestRender:
    """Encode and write tests"""

    def test_output_matches_template_size(self, template_bytes, output_dir: Path):
        path = CertificateRenderer().render(_job(template_bytes, {"id": "1", "name": "Omar"}, [ScaledRegion(), NAME_REGION]))
        assert path == output_dir / "1-Omar.png"
        with Image.open(path) as image:
            assert image.format == "PNG"
            assert image.size == (800, 600)

    def test_existing_output_dir_is_tolerated(self, template_bytes, output_dir: Path):
        output_dir.mkdir(parents=True)
        renderer = CertificateRenderer()
        renderer.render(_job(template_bytes, {"name": "a"}, [NAME_REGION], name="a.png"))
        renderer.render(_job(template_bytes, {"name": "b"}, [NAME_REGION], name="b.png"))
        assert sorted(p.name for p in output_dir.iterdir()) == ["a.png", "b.png"]

    def test_unwritable_output_raises(self, template_bytes, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        renderer = CertificateRenderer(output_dir=blocker)
        with pytest.raises(OutputIOError, match="Cannot create output dir"):
            renderer.render(_job(template_bytes, {"name": "Omar"}, [NAME_REGION]))

    def test_jpeg_template_written_as_png(self, output_dir: Path):
        """The RGBA canvas is always encoded as PNG"""
        buffer = io.BytesIO()
        Image.new("RGB", (320, 200), (200, 180, 40)).save(buffer, format="JPEG")
        path = CertificateRenderer().render(_job(buffer.getvalue(), {"name": "x"}, [NAME_REGION], name="x.png"))
        with Image.open(path) as image:
            assert image.format == "PNG"
            assert image.mode == "RGBA"
