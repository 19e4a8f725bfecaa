"""
Pixel geometry for the area and bar charts.

Everything here is plain arithmetic on the parsed data so it can be checked
without drawing anything. Coordinates are canvas pixels: the origin is the
top-left corner and y grows downwards.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from chart_data_parser import dataset_to_frame
from chart_models import AREA_CHART, BAR_CHART, CHART_TYPES, DataPoint, SeriesSettings
from color_utils import legend_line_color_for, line_color_for, outline_color_for
from datetime_utils import format_axis_label

PADDING = {"top": 40, "right": 40, "bottom": 60, "left": 80}

GRID_DIVISIONS = 5
LABEL_FRACTIONS = (0.2, 0.4, 0.6, 0.8)
X_LABEL_GAP = 10
Y_LABEL_GAP = 10
Y_TITLE_X = 25

BAR_PADDING_RATIO = 0.1

LEGEND_Y = 15
LEGEND_START_OFFSET = -100
LEGEND_SPACING = 130
LEGEND_LINE_LENGTH = 25
LEGEND_LINE_TEXT_GAP = 30
LEGEND_SWATCH_SIZE = (20, 10)
LEGEND_SWATCH_TEXT_GAP = 25

AREA_FILL_ALPHA = 0.4

THEME_COLORS = {
    False: {
        "background": "#ffffff",
        "grid": "#f0f0f0",
        "axis_text": "#666666",
        "axis_title": "#374151",
        "legend_text": "#1f2937",
        "title": "#1f2937",
    },
    True: {
        "background": "#1f2937",
        "grid": "#374151",
        "axis_text": "#d1d5db",
        "axis_title": "#e5e7eb",
        "legend_text": "#f9fafb",
        "title": "#f9fafb",
    },
}


def theme_colors(dark_mode: bool) -> dict:
    return THEME_COLORS[bool(dark_mode)]


@dataclass(frozen=True)
class PlotArea:
    """The rectangle inside the fixed margins."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @classmethod
    def for_surface(cls, width: float, height: float) -> "PlotArea":
        return cls(
            left=PADDING["left"],
            top=PADDING["top"],
            width=width - PADDING["left"] - PADDING["right"],
            height=height - PADDING["top"] - PADDING["bottom"],
        )


@dataclass(frozen=True)
class SeriesScale:
    """Maxima of both series and which of them are drawn."""
    max_series1: float
    max_series2: float

    @property
    def max_value(self) -> float:
        return max(self.max_series1, self.max_series2, 1)

    @property
    def show_series1(self) -> bool:
        return self.max_series1 > 0

    @property
    def show_series2(self) -> bool:
        return self.max_series2 > 0

    @property
    def active_series(self) -> int:
        return int(self.show_series1) + int(self.show_series2)


@dataclass(frozen=True)
class AxisLabel:
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class SeriesPath:
    """Fill polygon and stroke points for one area series."""
    series: int
    fill_color: str
    line_color: str
    polygon: List[Tuple[float, float]]
    line: List[Tuple[float, float]]


@dataclass(frozen=True)
class BarRect:
    series: int
    x: float
    y: float
    width: float
    height: float
    fill_color: str
    edge_color: str


@dataclass(frozen=True)
class LegendEntry:
    series: int
    label: str
    swatch_x: float
    text_x: float
    y: float
    color: str
    edge_color: str


def compute_scale(points: List[DataPoint]) -> SeriesScale:
    """Series maxima over the dataset; an empty dataset scales to zero."""
    if not points:
        return SeriesScale(0.0, 0.0)
    frame = dataset_to_frame(points)
    return SeriesScale(float(frame["series1"].max()), float(frame["series2"].max()))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_axis_value(value: float) -> str:
    """Y axis tick text: thousands are shown as '<n>K'."""
    if value >= 1000:
        return f"{_round_half_up(value / 1000)}K"
    return str(_round_half_up(value))


def y_axis_ticks(plot: PlotArea, max_value: float) -> List[AxisLabel]:
    """Gridline labels from max_value at the top down to 0 at the bottom."""
    ticks = []
    for i in range(GRID_DIVISIONS + 1):
        value = max_value - (max_value / GRID_DIVISIONS) * i
        y = plot.top + (plot.height / GRID_DIVISIONS) * i
        ticks.append(AxisLabel(plot.left - Y_LABEL_GAP, y, format_axis_value(value)))
    return ticks


def gridline_positions(plot: PlotArea) -> List[float]:
    return [plot.top + (plot.height / GRID_DIVISIONS) * i for i in range(GRID_DIVISIONS + 1)]


def label_indices(count: int) -> List[int]:
    """
    Indices of the points that get an X axis label.

    First, last and the points at 20/40/60/80% of the dataset, truncated.
    Small datasets can repeat an index.
    """
    if count <= 0:
        return []
    return [0] + [int(count * fraction) for fraction in LABEL_FRACTIONS] + [count - 1]


def point_x(plot: PlotArea, count: int, index: int) -> float:
    """X of a point on the area chart; points span the full plot width."""
    if count <= 1:
        return plot.left
    return plot.left + (plot.width / (count - 1)) * index


def value_y(plot: PlotArea, value: float, max_value: float) -> float:
    return plot.bottom - (value / max_value) * plot.height


def bar_group_width(plot: PlotArea, count: int) -> float:
    return plot.width / count


def bar_slot_center(plot: PlotArea, count: int, index: int) -> float:
    group_width = bar_group_width(plot, count)
    return plot.left + group_width * index + group_width / 2


class ChartLayout:
    """
    Geometry for one chart type over one dataset.

    Args:
        points: Parsed data points (may be empty)
        settings: Names, colors and titles for this chart type
        chart_type: "area" or "bar"
        width: Surface width in pixels
        height: Surface height in pixels
        dark_mode: Use the dark palette
    """

    def __init__(self, points: List[DataPoint], settings: SeriesSettings, chart_type: str,
                 width: float, height: float, dark_mode: bool = False):
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type: {chart_type}")
        self.points = list(points)
        self.settings = settings
        self.chart_type = chart_type
        self.width = width
        self.height = height
        self.dark_mode = dark_mode
        self.plot = PlotArea.for_surface(width, height)
        self.scale = compute_scale(self.points)
        self.colors = theme_colors(dark_mode)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def count(self) -> int:
        return len(self.points)

    def y_ticks(self) -> List[AxisLabel]:
        return y_axis_ticks(self.plot, self.scale.max_value)

    def gridlines(self) -> List[float]:
        return gridline_positions(self.plot)

    def y_axis_title(self) -> AxisLabel:
        return AxisLabel(Y_TITLE_X, self.plot.center_y, self.settings.y_axis_label)

    def x_labels(self) -> List[AxisLabel]:
        labels = []
        y = self.plot.bottom + X_LABEL_GAP
        for index in label_indices(self.count):
            if index >= self.count:
                continue
            if self.chart_type == AREA_CHART:
                x = point_x(self.plot, self.count, index)
            else:
                x = bar_slot_center(self.plot, self.count, index)
            labels.append(AxisLabel(x, y, format_axis_label(self.points[index].date)))
        return labels

    def _series_values(self, series: int) -> List[float]:
        if series == 1:
            return [point.series1 for point in self.points]
        return [point.series2 for point in self.points]

    def _series_color(self, series: int) -> str:
        if series == 1:
            return self.settings.series1_color
        return self.settings.series2_color

    def _series_name(self, series: int) -> str:
        if series == 1:
            return self.settings.series1_name
        return self.settings.series2_name

    def _is_visible(self, series: int) -> bool:
        return self.scale.show_series1 if series == 1 else self.scale.show_series2

    def visible_series(self) -> List[int]:
        return [series for series in (1, 2) if self._is_visible(series)]

    def area_paths(self) -> List[SeriesPath]:
        """Visible area series in drawing order: series 2 below series 1."""
        if self.chart_type != AREA_CHART or self.is_empty:
            return []

        paths = []
        for series in (2, 1):
            if not self._is_visible(series):
                continue
            line = [
                (point_x(self.plot, self.count, index), value_y(self.plot, value, self.scale.max_value))
                for index, value in enumerate(self._series_values(series))
            ]
            polygon = [(self.plot.left, self.plot.bottom)] + line + [(self.plot.right, self.plot.bottom)]
            color = self._series_color(series)
            paths.append(SeriesPath(series, color, line_color_for(color, series), polygon, line))
        return paths

    def bar_rects(self) -> List[BarRect]:
        """Bars for every point; series 1 sits left of series 2 within a group."""
        if self.chart_type != BAR_CHART or self.is_empty:
            return []

        group_width = bar_group_width(self.plot, self.count)
        bar_padding = group_width * BAR_PADDING_RATIO
        usable_width = group_width - bar_padding
        bar_width = usable_width / 2 if self.scale.active_series > 1 else usable_width

        rects = []
        for index, point in enumerate(self.points):
            group_x = self.plot.left + group_width * index + bar_padding / 2
            offset = 0.0
            for series, value in ((1, point.series1), (2, point.series2)):
                if not self._is_visible(series):
                    continue
                bar_height = (value / self.scale.max_value) * self.plot.height
                color = self._series_color(series)
                rects.append(BarRect(
                    series=series,
                    x=group_x + offset,
                    y=self.plot.bottom - bar_height,
                    width=bar_width,
                    height=bar_height,
                    fill_color=color,
                    edge_color=outline_color_for(color),
                ))
                offset += bar_width
        return rects

    def legend_entries(self) -> List[LegendEntry]:
        """One entry per visible series, centred above the plot."""
        entries = []
        offset = 0
        text_gap = LEGEND_LINE_TEXT_GAP if self.chart_type == AREA_CHART else LEGEND_SWATCH_TEXT_GAP
        for series in self.visible_series():
            swatch_x = self.plot.center_x + LEGEND_START_OFFSET + offset
            color = self._series_color(series)
            if self.chart_type == AREA_CHART:
                color = legend_line_color_for(color, series)
                edge_color = color
            else:
                edge_color = outline_color_for(color)
            entries.append(LegendEntry(
                series=series,
                label=self._series_name(series),
                swatch_x=swatch_x,
                text_x=swatch_x + text_gap,
                y=LEGEND_Y,
                color=color,
                edge_color=edge_color,
            ))
            offset += LEGEND_SPACING
        return entries
