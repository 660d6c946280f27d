"""Tests for image-to-glyph conversion."""

from navim.rendering.images import (
    GLYPH_RAMP,
    AsciiImage,
    AsciiImageConverter,
    brightness_to_glyph,
    scaled_size,
)


class TestGlyphRamp:
    def test_ramp_has_ten_glyphs(self):
        assert len(GLYPH_RAMP) == 10

    def test_extremes(self):
        assert brightness_to_glyph(0) == GLYPH_RAMP[0]
        assert brightness_to_glyph(255) == GLYPH_RAMP[-1]

    def test_midpoint_uses_floor(self):
        # 128 * 9 / 255 = 4.5 -> index 4
        assert brightness_to_glyph(128) == GLYPH_RAMP[4]


class TestScaledSize:
    def test_aspect_ratio_with_cell_correction(self):
        assert scaled_size(1000, 500, 60) == (60, 15)

    def test_narrow_image_is_not_upscaled(self):
        assert scaled_size(40, 80, 60) == (40, 40)

    def test_half_rows_round_up(self):
        # 60 * 9 / 60 / 2 = 4.5
        assert scaled_size(60, 9, 60) == (60, 5)

    def test_half_row_image_is_accepted(self, image_factory):
        block = AsciiImageConverter().convert(image_factory(60, 9))

        assert block is not None
        assert block.height == 5


class TestConverter:
    def test_converts_to_expected_size(self, image_factory):
        block = AsciiImageConverter(max_width=60).convert(image_factory(1000, 500))

        assert block is not None
        assert (block.width, block.height) == (60, 15)
        assert len(block.rows) == 15
        assert all(len(row) == 60 for row in block.rows)

    def test_gradient_runs_dark_to_light(self, image_bytes):
        block = AsciiImageConverter().convert(image_bytes)

        assert block is not None
        assert block.rows[0][0] in GLYPH_RAMP[:2]
        assert block.rows[0][-1] in GLYPH_RAMP[-2:]

    def test_bordered_output(self, image_bytes):
        block = AsciiImageConverter().convert(image_bytes)
        lines = block.lines()

        assert lines[0] == "┌" + "─" * 60 + "┐"
        assert lines[-1] == "└" + "─" * 60 + "┘"
        assert all(line.startswith("│") and line.endswith("│") for line in lines[1:-1])
        assert str(block) == "\n".join(lines)

    def test_max_width_override(self, image_factory):
        block = AsciiImageConverter(max_width=60).convert(image_factory(1000, 500), max_width=20)

        assert block is not None
        assert (block.width, block.height) == (20, 5)

    def test_rejects_too_tall(self, image_factory):
        # 60 * 1000 / 100 / 2 = 300 rows
        assert AsciiImageConverter().convert(image_factory(100, 1000)) is None

    def test_rejects_too_short(self, image_factory):
        # 60 * 50 / 1000 / 2 = 1.5 -> 2 rows
        assert AsciiImageConverter().convert(image_factory(1000, 50)) is None

    def test_rejects_too_narrow(self, image_factory):
        assert AsciiImageConverter().convert(image_factory(8, 40)) is None

    def test_undecodable_bytes(self):
        assert AsciiImageConverter().convert(b"definitely not an image") is None

    def test_jpeg_input(self, image_factory):
        block = AsciiImageConverter().convert(image_factory(300, 150, "JPEG"))

        assert isinstance(block, AsciiImage)
        assert block.height == 15
