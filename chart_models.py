"""
Data types shared by the parser, renderers, exporter and session.
"""

from dataclasses import dataclass, fields
from typing import Optional

import numpy as np

AREA_CHART = "area"
BAR_CHART = "bar"
CHART_TYPES = (AREA_CHART, BAR_CHART)


@dataclass(frozen=True)
class DataPoint:
    """One row of pasted data: a label and up to two values."""
    date: str
    series1: float
    series2: float = 0.0


@dataclass
class SeriesSettings:
    """Names, colors and titles for one chart type."""
    series1_name: str
    series2_name: str
    series1_color: str
    series2_color: str
    chart_title: str
    y_axis_label: str

    @classmethod
    def field_names(cls):
        return tuple(f.name for f in fields(cls))

    def copy(self) -> "SeriesSettings":
        return SeriesSettings(**{name: getattr(self, name) for name in self.field_names()})


def default_area_settings() -> SeriesSettings:
    return SeriesSettings(
        series1_name="Entry Queue",
        series2_name="Exit Queue",
        series1_color="#14b8a6",
        series2_color="#ef4444",
        chart_title="Entry vs Exit Queue",
        y_axis_label="Eth Queued",
    )


def default_bar_settings() -> SeriesSettings:
    return SeriesSettings(
        series1_name="Entry Queue",
        series2_name="Exit Queue",
        series1_color="#3b82f6",
        series2_color="#f59e0b",
        chart_title="Entry vs Exit Queue",
        y_axis_label="Eth Queued",
    )


@dataclass(eq=False)
class ChartSurface:
    """A rendered chart: its RGBA pixels plus the same image encoded as PNG."""
    chart_type: str
    width: int
    height: int
    pixels: np.ndarray
    png_bytes: bytes
    dark_mode: bool = False
    dpi: Optional[int] = None
