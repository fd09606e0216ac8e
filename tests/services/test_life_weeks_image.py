"""Tests for the life_weeks_image share card service."""

import io
from datetime import date, datetime

import pytest
from PIL import Image

from life_weeks.domain.errors import ImageExportFailure
from life_weeks.services.life_stats import compute_statistics
from life_weeks.services.life_weeks_image import (
    COMPACT_SIZE,
    DARK_PALETTE,
    LIGHT_PALETTE,
    MAX_GRID_ROWS,
    RENDER_SCALE,
    WIDE_SIZE,
    build_stat_cards,
    build_subtitle,
    export_share_image,
    grid_row_count,
    render_share_image,
    share_filename,
    share_image_bytes,
)


def _colors(image):
    width, height = image.size
    return {color for _, color in image.getcolors(maxcolors=width * height)}


class TestStatCards:
    def test_sixteen_cards(self, stats_2000):
        cards = build_stat_cards(stats_2000)
        assert len(cards) == 16

    def test_card_values(self, stats_2000):
        cards = dict(build_stat_cards(stats_2000))
        assert cards["Days Lived"] == "8,766"
        assert cards["Heartbeats"] == "884M"
        assert cards["Earth Orbits"] == "24.00"
        assert cards["Sleep Years"] == "8"
        assert cards["Degrees Possible"] == "12"
        assert cards["Weeks Left"] == "3,428"

    def test_subtitle(self, stats_2000):
        assert build_subtitle(stats_2000) == (
            "24.0 years old • 27% lived • 3,428 weeks remaining"
        )

    def test_share_filename(self):
        assert share_filename(date(2024, 1, 1)) == "my-life-in-weeks-2024-01-01.png"


class TestRenderShareImage:
    def test_wide_dimensions(self, stats_2000):
        image = render_share_image(stats_2000)
        assert image.size == (WIDE_SIZE[0] * RENDER_SCALE, WIDE_SIZE[1] * RENDER_SCALE)
        assert image.mode == "RGB"

    def test_compact_dimensions(self, stats_2000):
        image = render_share_image(stats_2000, compact=True)
        assert image.size == (
            COMPACT_SIZE[0] * RENDER_SCALE,
            COMPACT_SIZE[1] * RENDER_SCALE,
        )

    def test_light_background(self, stats_2000):
        image = render_share_image(stats_2000)
        assert image.getpixel((0, 0)) == LIGHT_PALETTE.background

    def test_dark_background(self, stats_2000):
        image = render_share_image(stats_2000, dark_mode=True)
        assert image.getpixel((0, 0)) == DARK_PALETTE.background

    def test_grid_colors_present(self, stats_2000):
        colors = _colors(render_share_image(stats_2000))
        assert LIGHT_PALETTE.past in colors
        assert LIGHT_PALETTE.current in colors
        assert LIGHT_PALETTE.future in colors

    def test_newborn_renders(self, stats_newborn):
        image = render_share_image(stats_newborn, dark_mode=True, compact=True)
        assert DARK_PALETTE.current in _colors(image)


class TestGridRows:
    def test_ninety_year_horizon(self, stats_2000):
        assert grid_row_count(stats_2000) == 90

    def test_long_horizon_is_capped(self):
        stats = compute_statistics("1900-01-01", datetime(2024, 1, 1))
        assert stats.max_age_years == 134
        assert grid_row_count(stats) == MAX_GRID_ROWS

    def test_capped_grid_renders(self):
        stats = compute_statistics("1900-01-01", datetime(2024, 1, 1))
        image = render_share_image(stats)
        assert image.size == (WIDE_SIZE[0] * RENDER_SCALE, WIDE_SIZE[1] * RENDER_SCALE)


class TestShareImageBytes:
    def test_png_encoded(self, stats_2000):
        data = share_image_bytes(stats_2000)
        assert data.startswith(b"\x89PNG")
        image = Image.open(io.BytesIO(data))
        assert image.format == "PNG"


class TestExportShareImage:
    def test_writes_dated_png(self, stats_2000, tmp_path):
        path = export_share_image(stats_2000, tmp_path, date(2024, 1, 1))
        assert path == tmp_path / "my-life-in-weeks-2024-01-01.png"
        assert path.exists()
        assert Image.open(path).format == "PNG"

    def test_creates_output_dir(self, stats_2000, tmp_path):
        output_dir = tmp_path / "nested" / "exports"
        path = export_share_image(stats_2000, output_dir, date(2024, 1, 1), dark_mode=True)
        assert path.parent == output_dir
        assert path.exists()

    def test_custom_filename(self, stats_2000, tmp_path):
        path = export_share_image(
            stats_2000, tmp_path, date(2024, 1, 1), filename="card.png"
        )
        assert path.name == "card.png"

    def test_unwritable_destination_raises(self, stats_2000, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ImageExportFailure):
            export_share_image(stats_2000, blocker / "sub", date(2024, 1, 1))
