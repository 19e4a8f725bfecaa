"""
The chart generator session: pasted data, per-chart settings, theme and the
most recently rendered charts.

Every change to the dataset, the settings or the theme schedules a debounced
re-render of both charts.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from chart_data_parser import (
    DEFAULT_EXAMPLE_DATA,
    EXIT_QUEUE_EXAMPLE,
    describe_separator,
    example_text,
    parse_spreadsheet_data,
)
from chart_exporter import export_chart
from chart_models import (
    AREA_CHART,
    BAR_CHART,
    CHART_TYPES,
    ChartSurface,
    DataPoint,
    SeriesSettings,
    default_area_settings,
    default_bar_settings,
)
from chart_renderer import ChartRenderer
from color_utils import is_hex_color
from error_handler import safe_execute
from render_scheduler import DEFAULT_DELAY_SECONDS, RenderScheduler
from theme_store import ThemeStore

logger = logging.getLogger('chart_generator.session')

COLOR_FIELDS = ("series1_color", "series2_color")


class ChartSession:
    """
    State for one user editing one dataset.

    Args:
        renderer: Renderer used for both chart types
        theme_store: Where the dark mode preference is loaded from and saved to
        render_delay: Debounce delay in seconds
    """

    def __init__(self, renderer: Optional[ChartRenderer] = None,
                 theme_store: Optional[ThemeStore] = None,
                 render_delay: float = DEFAULT_DELAY_SECONDS):
        self.renderer = renderer or ChartRenderer()
        self.theme_store = theme_store
        self.pasted_data = ""
        self.parsed_data: List[DataPoint] = []
        self.settings: Dict[str, SeriesSettings] = {
            AREA_CHART: default_area_settings(),
            BAR_CHART: default_bar_settings(),
        }
        self.active_chart_type = AREA_CHART
        self.dark_mode = theme_store.load() if theme_store else False
        self.surfaces: Dict[str, Optional[ChartSurface]] = {AREA_CHART: None, BAR_CHART: None}
        self._surface_lock = threading.Lock()  # Guards surfaces and _published_generation
        self._published_generation = -1
        self._state_lock = threading.RLock()  # Guards parsed_data, settings and dark_mode
        self._theme_listeners: List[Callable[[bool], None]] = []
        self.scheduler = RenderScheduler(self.render_now, render_delay)

    # Settings

    @property
    def area_settings(self) -> SeriesSettings:
        return self.settings[AREA_CHART]

    @property
    def bar_settings(self) -> SeriesSettings:
        return self.settings[BAR_CHART]

    @property
    def current_settings(self) -> SeriesSettings:
        return self.settings[self.active_chart_type]

    def set_active_chart_type(self, chart_type: str) -> None:
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type: {chart_type}")
        self.active_chart_type = chart_type

    def update_settings(self, chart_type: Optional[str] = None, **changes) -> SeriesSettings:
        """
        Change fields of one chart's settings, the active chart by default.

        Raises:
            ValueError: For an unknown chart type, field, or a malformed color
        """
        chart_type = chart_type or self.active_chart_type
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type: {chart_type}")

        valid_fields = SeriesSettings.field_names()
        for name, value in changes.items():
            if name not in valid_fields:
                raise ValueError(f"Unknown setting: {name}")
            if name in COLOR_FIELDS and not is_hex_color(value):
                raise ValueError(f"{name} must be a #rrggbb color, got {value!r}")

        settings = self.settings[chart_type]
        with self._state_lock:
            for name, value in changes.items():
                setattr(settings, name, value)

        self.scheduler.schedule()
        return settings

    def _set_series_names(self, series1_name: str, series2_name: str) -> None:
        with self._state_lock:
            for settings in self.settings.values():
                settings.series1_name = series1_name
                settings.series2_name = series2_name

    # Data

    def handle_data_change(self, text: str) -> List[DataPoint]:
        """Store the pasted text and re-parse it."""
        with self._state_lock:
            self.pasted_data = text
            self.parsed_data = parse_spreadsheet_data(text, self.settings.values())
        logger.info("Parsed %d data point(s)", len(self.parsed_data))
        self.scheduler.schedule()
        return self.parsed_data

    def load_example_data(self) -> List[DataPoint]:
        with self._state_lock:
            self.parsed_data = list(DEFAULT_EXAMPLE_DATA)
            self.pasted_data = example_text()
        self._set_series_names("Entry Queue", "Exit Queue")
        self.scheduler.schedule()
        return self.parsed_data

    def load_exit_queue_example(self) -> List[DataPoint]:
        self.handle_data_change(EXIT_QUEUE_EXAMPLE)
        with self._state_lock:
            for settings in self.settings.values():
                settings.series1_name = "Exit Queue"
                settings.series2_name = ""
                settings.chart_title = "Exit Queue Over Time"
                settings.y_axis_label = "Exit Queue Value"
        self.scheduler.schedule()
        return self.parsed_data

    def clear_data(self) -> None:
        with self._state_lock:
            self.pasted_data = ""
            self.parsed_data = []
        self.scheduler.schedule()

    def status_line(self) -> str:
        return f"{len(self.parsed_data)} data points parsed | {describe_separator(self.pasted_data)}"

    # Theme

    def on_theme_change(self, callback: Callable[[bool], None]) -> None:
        """Register a callback invoked with the new dark mode flag."""
        self._theme_listeners.append(callback)

    def set_dark_mode(self, dark_mode: bool) -> None:
        dark_mode = bool(dark_mode)
        if dark_mode == self.dark_mode:
            return
        with self._state_lock:
            self.dark_mode = dark_mode
        if self.theme_store:
            self.theme_store.save(dark_mode)
        for callback in self._theme_listeners:
            safe_execute(callback, dark_mode, context="Theme listener")
        self.scheduler.schedule()

    def toggle_dark_mode(self) -> bool:
        self.set_dark_mode(not self.dark_mode)
        return self.dark_mode

    # Rendering

    def render_now(self) -> Dict[str, Optional[ChartSurface]]:
        """
        Render both charts immediately; an empty dataset clears them.

        The charts are drawn from a snapshot of the data, settings and theme.
        A render that finishes after a newer one was requested is discarded,
        and the newest published surfaces are returned instead.
        """
        generation = self.scheduler.generation
        with self._state_lock:
            points = list(self.parsed_data)
            settings = {chart_type: self.settings[chart_type].copy() for chart_type in CHART_TYPES}
            dark_mode = self.dark_mode

        surfaces = {
            chart_type: self.renderer.render(points, settings[chart_type], chart_type, dark_mode)
            for chart_type in CHART_TYPES
        }
        with self._surface_lock:
            if generation < self._published_generation:
                logger.debug("Discarding render %d, render %d is newer",
                             generation, self._published_generation)
                return dict(self.surfaces)
            self._published_generation = generation
            self.surfaces = surfaces
        return surfaces

    def is_current(self) -> bool:
        """True when the published surfaces reflect the latest requested render."""
        with self._surface_lock:
            return self._published_generation >= self.scheduler.generation

    def surface(self, chart_type: str) -> Optional[ChartSurface]:
        with self._surface_lock:
            return self.surfaces.get(chart_type)

    def export(self, chart_type: str, output_dir: str) -> Optional[str]:
        """Write one chart, with its title, as a PNG; None if it has not been rendered."""
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unknown chart type: {chart_type}")
        if not self.scheduler.flush() and not self.is_current():
            # A render is still running on the timer thread
            self.render_now()
        with self._state_lock:
            title = self.settings[chart_type].chart_title
            dark_mode = self.dark_mode
        return export_chart(
            self.surface(chart_type),
            title,
            dark_mode,
            output_dir,
        )

    def close(self) -> None:
        self.scheduler.cancel()
