"""
PNG export of rendered charts.

The exported image is the live chart surface with a title band above it.
"""

import io
import logging
import os
from datetime import datetime
from typing import Optional

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from chart_layout import theme_colors
from chart_models import CHART_TYPES, ChartSurface
from datetime_utils import iso_date
from error_handler import ChartExportError, handle_render_error

logger = logging.getLogger('chart_generator.exporter')

TITLE_BAND_HEIGHT = 60
TITLE_POSITION = (24, 20)
TITLE_FONT_SIZE = 18


def export_filename(chart_type: str, today: Optional[datetime] = None) -> str:
    """Download file name, e.g. chart-area-2025-01-15.png"""
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type: {chart_type}")
    return f"chart-{chart_type}-{iso_date(today)}.png"


def compose_export_image(surface: ChartSurface, title: str, dark_mode: bool) -> ChartSurface:
    """
    Copy a rendered chart below a title band.

    Args:
        surface: The live chart surface
        title: Chart title drawn in the band
        dark_mode: Use the dark palette for the band and title

    Returns:
        ChartSurface: A surface TITLE_BAND_HEIGHT pixels taller than the input
    """
    dpi = surface.dpi or 100
    colors = theme_colors(dark_mode)
    total_height = surface.height + TITLE_BAND_HEIGHT

    fig = Figure(figsize=(surface.width / dpi, total_height / dpi), dpi=dpi)
    canvas = FigureCanvasAgg(fig)
    fig.patch.set_facecolor(colors['background'])
    # figimage offsets are measured from the bottom-left corner
    fig.figimage(surface.pixels, xo=0, yo=0, origin='upper', resize=False)

    title_x, title_y = TITLE_POSITION
    fig.text(
        title_x / surface.width,
        1 - title_y / total_height,
        title,
        ha='left',
        va='top',
        fontsize=TITLE_FONT_SIZE * 72.0 / dpi,
        fontweight='bold',
        color=colors['title'],
    )

    canvas.draw()
    pixels = np.asarray(canvas.buffer_rgba()).copy()

    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=dpi, facecolor=colors['background'])

    return ChartSurface(
        chart_type=surface.chart_type,
        width=surface.width,
        height=total_height,
        pixels=pixels,
        png_bytes=buf.getvalue(),
        dark_mode=dark_mode,
        dpi=dpi,
    )


@handle_render_error
def export_chart(surface: Optional[ChartSurface], title: str, dark_mode: bool,
                 output_dir: str, today: Optional[datetime] = None) -> Optional[str]:
    """
    Write a rendered chart with its title to output_dir as a PNG file.

    Returns:
        Optional[str]: Path of the written file, or None if there is no
        rendered chart to export
    """
    if surface is None:
        logger.info("Nothing to export: chart has not been rendered")
        return None
    if surface.pixels is None or surface.pixels.size == 0:
        raise ChartExportError(f"{surface.chart_type} chart surface is empty")

    image = compose_export_image(surface, title, dark_mode)

    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, export_filename(surface.chart_type, today))
    with open(path, 'wb') as fh:
        fh.write(image.png_bytes)

    logger.info("Exported %s chart to %s", surface.chart_type, path)
    return path
