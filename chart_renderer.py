"""
Chart rendering module for the spreadsheet chart generator.
Draws the area and grouped bar charts with matplotlib onto a fixed pixel surface.
"""

import io
import logging
from typing import Optional, List

import numpy as np
import seaborn as sns
import matplotlib
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from chart_layout import (
    AREA_FILL_ALPHA,
    LEGEND_LINE_LENGTH,
    LEGEND_SWATCH_SIZE,
    ChartLayout,
)
from chart_models import AREA_CHART, BAR_CHART, ChartSurface, DataPoint, SeriesSettings
from color_utils import with_alpha
from error_handler import ChartRenderError, handle_render_error

logger = logging.getLogger('chart_generator.renderer')



class ChartRenderer:
    """Draws area and bar charts for a parsed dataset."""

    FONTS = {
        'axis': {'size': 12, 'weight': 'normal'},
        'axis_title': {'size': 14, 'weight': 'bold'},
        'legend': {'size': 12, 'weight': 'bold'},
    }

    LINE_WIDTHS = {
        'grid': 1,
        'series': 2,
        'legend': 3,
        'bar_edge': 1,
    }

    def __init__(self, width: int = 800, height: int = 400, dpi: int = 100):
        """Initialize the chart renderer for a surface of width x height pixels."""
        self.width = int(width)
        self.height = int(height)
        self.dpi = int(dpi)

        sns.set_theme(style="white")
        matplotlib.rcParams.update({
            'font.family': 'sans-serif',
            'font.sans-serif': ['Inter', 'Arial', 'DejaVu Sans', 'sans-serif'],
            'savefig.pad_inches': 0,
        })

    def _pt(self, pixels: float) -> float:
        """Convert canvas pixels to points, the unit matplotlib sizes text and lines in."""
        return pixels * 72.0 / self.dpi

    def _new_figure(self, background: str):
        # Not registered with pyplot; renders may run on the debounce timer thread
        fig = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(fig)
        fig.patch.set_facecolor(background)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_axis_off()
        ax.set_facecolor(background)
        return fig, ax

    def _text(self, ax, x, y, text, font, color, **kwargs):
        ax.text(
            x, y, text,
            fontsize=self._pt(self.FONTS[font]['size']),
            fontweight=self.FONTS[font]['weight'],
            color=color,
            **kwargs
        )

    def _draw_scaffold(self, ax, layout: ChartLayout):
        """Gridlines, Y axis labels and the rotated Y axis title."""
        colors = layout.colors
        plot = layout.plot

        for y in layout.gridlines():
            ax.plot(
                [plot.left, plot.right], [y, y],
                color=colors['grid'],
                linewidth=self._pt(self.LINE_WIDTHS['grid']),
            )

        for tick in layout.y_ticks():
            self._text(ax, tick.x, tick.y, tick.text, 'axis', colors['axis_text'],
                       ha='right', va='center')

        title = layout.y_axis_title()
        self._text(ax, title.x, title.y, title.text, 'axis_title', colors['axis_title'],
                   ha='center', va='center', rotation=90)

    def _draw_x_labels(self, ax, layout: ChartLayout):
        for label in layout.x_labels():
            self._text(ax, label.x, label.y, label.text, 'axis', layout.colors['axis_text'],
                       ha='center', va='top')

    def _draw_area_series(self, ax, layout: ChartLayout):
        paths = layout.area_paths()

        for path in paths:
            xs, ys = zip(*path.polygon)
            ax.fill(xs, ys, color=with_alpha(path.fill_color, AREA_FILL_ALPHA), linewidth=0)

        for path in paths:
            xs, ys = zip(*path.line)
            ax.plot(
                xs, ys,
                color=path.line_color,
                linewidth=self._pt(self.LINE_WIDTHS['series']),
                solid_capstyle='round',
                solid_joinstyle='round',
            )

    def _draw_bars(self, ax, layout: ChartLayout):
        for bar in layout.bar_rects():
            ax.add_patch(Rectangle(
                (bar.x, bar.y), bar.width, bar.height,
                facecolor=bar.fill_color,
                edgecolor=bar.edge_color,
                linewidth=self._pt(self.LINE_WIDTHS['bar_edge']),
            ))

    def _draw_legend(self, ax, layout: ChartLayout):
        swatch_width, swatch_height = LEGEND_SWATCH_SIZE
        for entry in layout.legend_entries():
            if layout.chart_type == AREA_CHART:
                ax.plot(
                    [entry.swatch_x, entry.swatch_x + LEGEND_LINE_LENGTH], [entry.y, entry.y],
                    color=entry.color,
                    linewidth=self._pt(self.LINE_WIDTHS['legend']),
                    solid_capstyle='round',
                )
            else:
                ax.add_patch(Rectangle(
                    (entry.swatch_x, entry.y - swatch_height / 2), swatch_width, swatch_height,
                    facecolor=entry.color,
                    edgecolor=entry.edge_color,
                    linewidth=self._pt(self.LINE_WIDTHS['bar_edge']),
                ))
            self._text(ax, entry.text_x, entry.y, entry.label, 'legend', layout.colors['legend_text'],
                       ha='left', va='center')

    def _rasterize(self, fig, chart_type: str, dark_mode: bool) -> ChartSurface:
        canvas = fig.canvas
        canvas.draw()
        pixels = np.asarray(canvas.buffer_rgba()).copy()

        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=self.dpi, facecolor=fig.get_facecolor())
        buf.seek(0)

        return ChartSurface(
            chart_type=chart_type,
            width=self.width,
            height=self.height,
            pixels=pixels,
            png_bytes=buf.getvalue(),
            dark_mode=dark_mode,
            dpi=self.dpi,
        )

    def build_layout(self, points: List[DataPoint], settings: SeriesSettings,
                     chart_type: str, dark_mode: bool = False) -> ChartLayout:
        return ChartLayout(points, settings, chart_type, self.width, self.height, dark_mode)

    @handle_render_error
    def render(self, points: List[DataPoint], settings: SeriesSettings,
               chart_type: str, dark_mode: bool = False) -> Optional[ChartSurface]:
        """
        Render one chart type for the dataset.

        Args:
            points: Parsed data points
            settings: Names, colors and titles for this chart type
            chart_type: "area" or "bar"
            dark_mode: Use the dark palette

        Returns:
            Optional[ChartSurface]: The rendered surface, or None when there
            is nothing to draw
        """
        if not points:
            return None
        if chart_type not in (AREA_CHART, BAR_CHART):
            raise ChartRenderError(f"Unknown chart type: {chart_type}")

        layout = self.build_layout(points, settings, chart_type, dark_mode)
        if layout.plot.width <= 0 or layout.plot.height <= 0:
            raise ChartRenderError(
                f"Surface {self.width}x{self.height} is too small for the chart margins"
            )

        fig, ax = self._new_figure(layout.colors['background'])
        self._draw_scaffold(ax, layout)
        if chart_type == AREA_CHART:
            self._draw_area_series(ax, layout)
        else:
            self._draw_bars(ax, layout)
        self._draw_x_labels(ax, layout)
        self._draw_legend(ax, layout)
        surface = self._rasterize(fig, chart_type, dark_mode)

        logger.debug("Rendered %s chart with %d point(s)", chart_type, len(points))
        return surface

    def render_area_chart(self, points: List[DataPoint], settings: SeriesSettings,
                          dark_mode: bool = False) -> Optional[ChartSurface]:
        return self.render(points, settings, AREA_CHART, dark_mode)

    def render_bar_chart(self, points: List[DataPoint], settings: SeriesSettings,
                         dark_mode: bool = False) -> Optional[ChartSurface]:
        return self.render(points, settings, BAR_CHART, dark_mode)
