"""
Test suite for PNG export.
"""

import os
from datetime import datetime

import numpy as np
import pytest

from chart_exporter import (
    TITLE_BAND_HEIGHT,
    compose_export_image,
    export_chart,
    export_filename,
)
from chart_models import ChartSurface

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def solid_surface():
    """A 200x100 surface filled with pure red."""
    pixels = np.zeros((100, 200, 4), dtype=np.uint8)
    pixels[..., 0] = 255
    pixels[..., 3] = 255
    return ChartSurface("area", 200, 100, pixels, b"", dark_mode=False, dpi=100)


class TestExportFilename:

    def test_area_and_bar_names(self):
        day = datetime(2025, 1, 15)
        assert export_filename("area", day) == "chart-area-2025-01-15.png"
        assert export_filename("bar", day) == "chart-bar-2025-01-15.png"

    def test_defaults_to_today(self):
        name = export_filename("bar")
        assert name.startswith("chart-bar-")
        datetime.strptime(name[len("chart-bar-"):-len(".png")], "%Y-%m-%d")

    def test_unknown_chart_type(self):
        with pytest.raises(ValueError):
            export_filename("pie")


class TestComposeExportImage:

    def test_adds_title_band(self, solid_surface):
        image = compose_export_image(solid_surface, "Queue", dark_mode=False)

        assert image.height == 100 + TITLE_BAND_HEIGHT
        assert image.pixels.shape == (160, 200, 4)
        assert image.png_bytes.startswith(PNG_SIGNATURE)

    def test_chart_pixels_are_copied_below_band(self, solid_surface):
        image = compose_export_image(solid_surface, "", dark_mode=False)

        assert tuple(image.pixels[TITLE_BAND_HEIGHT + 50, 100][:3]) == (255, 0, 0)
        assert tuple(image.pixels[-1, -1][:3]) == (255, 0, 0)

    def test_band_background_follows_theme(self, solid_surface):
        light = compose_export_image(solid_surface, "", dark_mode=False)
        dark = compose_export_image(solid_surface, "", dark_mode=True)

        assert tuple(light.pixels[5, 190][:3]) == (255, 255, 255)
        assert tuple(dark.pixels[5, 190][:3]) == (0x1f, 0x29, 0x37)


class TestExportChart:

    def test_writes_png(self, tmp_path, solid_surface):
        day = datetime(2025, 1, 15)
        path = export_chart(solid_surface, "Entry vs Exit Queue", False, str(tmp_path / "out"), today=day)

        assert path == os.path.join(str(tmp_path / "out"), "chart-area-2025-01-15.png")
        with open(path, "rb") as fh:
            assert fh.read(8) == PNG_SIGNATURE

    def test_missing_surface_exports_nothing(self, tmp_path):
        assert export_chart(None, "title", False, str(tmp_path)) is None
        assert os.listdir(tmp_path) == []

    def test_empty_surface_exports_nothing(self, tmp_path):
        empty = ChartSurface("bar", 0, 0, np.zeros((0, 0, 4), dtype=np.uint8), b"")
        assert export_chart(empty, "title", False, str(tmp_path)) is None

    def test_unwritable_directory_returns_none(self, tmp_path, solid_surface):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert export_chart(solid_surface, "title", False, str(blocker / "sub")) is None

    def test_rendered_chart_round_trip(self, tmp_path, renderer, example_points, bar_settings):
        surface = renderer.render_bar_chart(example_points, bar_settings)
        path = export_chart(surface, bar_settings.chart_title, False, str(tmp_path))

        assert os.path.basename(path).startswith("chart-bar-")
        assert os.path.getsize(path) > 0
