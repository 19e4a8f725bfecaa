"""
Test suite for chart geometry.
A 400x300 surface gives a plot area of 280x200 starting at (80, 40).
"""

import pytest

from chart_layout import (
    ChartLayout,
    PlotArea,
    SeriesScale,
    compute_scale,
    format_axis_value,
    label_indices,
    point_x,
)
from chart_models import AREA_CHART, BAR_CHART, DataPoint


def make_layout(points, settings, chart_type, dark_mode=False):
    return ChartLayout(points, settings, chart_type, 400, 300, dark_mode)


class TestScale:

    def test_all_zero_dataset_scales_to_one(self):
        scale = compute_scale([DataPoint("a", 0, 0), DataPoint("b", 0, 0)])
        assert scale.max_value == 1
        assert not scale.show_series1
        assert not scale.show_series2

    def test_max_value_covers_both_series(self, example_points):
        scale = compute_scale(example_points)
        assert scale.max_series1 == 89184
        assert scale.max_series2 == 136160
        assert scale.max_value == 136160
        assert scale.show_series1 and scale.show_series2
        assert scale.active_series == 2

    def test_fractional_values_below_one(self):
        assert SeriesScale(0.5, 0.25).max_value == 1

    def test_negative_only_series_is_hidden(self):
        scale = compute_scale([DataPoint("a", 5, -3)])
        assert scale.show_series1
        assert not scale.show_series2


class TestAxes:

    def test_plot_area_uses_fixed_margins(self):
        plot = PlotArea.for_surface(400, 300)
        assert (plot.left, plot.top, plot.width, plot.height) == (80, 40, 280, 200)
        assert plot.right == 360
        assert plot.bottom == 240

    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (999, "999"),
        (0.6, "1"),
        (1000, "1K"),
        (81696, "82K"),
        (136160, "136K"),
    ])
    def test_format_axis_value(self, value, expected):
        assert format_axis_value(value) == expected

    def test_y_ticks_run_from_max_to_zero(self, example_points, area_settings):
        ticks = make_layout(example_points, area_settings, AREA_CHART).y_ticks()

        assert [tick.text for tick in ticks] == ["136K", "109K", "82K", "54K", "27K", "0"]
        assert [tick.y for tick in ticks] == [40, 80, 120, 160, 200, 240]
        assert all(tick.x == 70 for tick in ticks)

    def test_gridlines_split_plot_into_five_bands(self, example_points, area_settings):
        layout = make_layout(example_points, area_settings, AREA_CHART)
        assert layout.gridlines() == [40, 80, 120, 160, 200, 240]

    def test_y_axis_title(self, example_points, area_settings):
        area_settings.y_axis_label = "Queued"
        title = make_layout(example_points, area_settings, AREA_CHART).y_axis_title()
        assert (title.x, title.y, title.text) == (25, 140, "Queued")

    def test_label_indices(self):
        assert label_indices(15) == [0, 3, 6, 9, 12, 14]
        assert label_indices(1) == [0, 0, 0, 0, 0, 0]
        assert label_indices(0) == []

    def test_label_indices_keep_duplicates_for_small_datasets(self):
        assert label_indices(3) == [0, 0, 1, 1, 2, 2]

    def test_area_x_labels_are_formatted_dates(self, example_points, area_settings):
        labels = make_layout(example_points, area_settings, AREA_CHART).x_labels()

        assert [label.text for label in labels] == ["Jan 1", "Jan 4", "Jan 7", "Jan 10", "Jan 13", "Jan 15"]
        assert [label.x for label in labels] == [80, 140, 200, 260, 320, 360]
        assert all(label.y == 250 for label in labels)

    def test_bar_x_labels_are_slot_centres(self, area_settings):
        points = [DataPoint("Q1", 1), DataPoint("Q2", 2), DataPoint("Q3", 3), DataPoint("Q4", 4)]
        labels = make_layout(points, area_settings, BAR_CHART).x_labels()

        assert [label.text for label in labels] == ["Q1", "Q1", "Q2", "Q3", "Q4", "Q4"]
        assert [label.x for label in labels] == [115, 115, 185, 255, 325, 325]

    def test_single_point_area_chart_starts_at_left_margin(self):
        plot = PlotArea.for_surface(400, 300)
        assert point_x(plot, 1, 0) == 80


class TestAreaGeometry:

    def test_series2_is_drawn_below_series1(self, example_points, area_settings):
        paths = make_layout(example_points, area_settings, AREA_CHART).area_paths()

        assert [path.series for path in paths] == [2, 1]
        assert paths[0].fill_color == "#ef4444"
        assert paths[0].line_color == "#dc2626"
        assert paths[1].fill_color == "#14b8a6"
        assert paths[1].line_color == "#0d9488"

    def test_swapped_default_colors_use_the_formula(self, example_points, area_settings):
        area_settings.series1_color = "#ef4444"
        area_settings.series2_color = "#14b8a6"
        paths = make_layout(example_points, area_settings, AREA_CHART).area_paths()

        assert {path.series: path.line_color for path in paths} == {1: "#bc1111", 2: "#008573"}

    def test_polygon_closes_along_the_baseline(self, area_settings):
        points = [DataPoint("a", 0), DataPoint("b", 50), DataPoint("c", 100)]
        path = make_layout(points, area_settings, AREA_CHART).area_paths()[0]

        assert path.line == [(80, 240), (220, 140), (360, 40)]
        assert path.polygon[0] == (80, 240)
        assert path.polygon[-1] == (360, 240)
        assert path.polygon[1:-1] == path.line

    def test_all_zero_series2_is_omitted(self, single_series_points, area_settings):
        layout = make_layout(single_series_points, area_settings, AREA_CHART)

        assert [path.series for path in layout.area_paths()] == [1]
        assert [entry.series for entry in layout.legend_entries()] == [1]

    def test_all_zero_dataset_draws_no_series(self, area_settings):
        layout = make_layout([DataPoint("a", 0), DataPoint("b", 0)], area_settings, AREA_CHART)
        assert layout.area_paths() == []
        assert layout.legend_entries() == []
        assert layout.y_ticks()[0].text == "1"

    def test_area_layout_has_no_bars(self, example_points, area_settings):
        assert make_layout(example_points, area_settings, AREA_CHART).bar_rects() == []


class TestBarGeometry:

    def test_two_series_share_the_group(self, bar_settings):
        points = [DataPoint("a", 100, 50), DataPoint("b", 50, 100)]
        rects = make_layout(points, bar_settings, BAR_CHART).bar_rects()

        # group 140px, 14px padding, two 63px bars
        assert [rect.series for rect in rects] == [1, 2, 1, 2]
        assert [rect.x for rect in rects] == pytest.approx([87, 150, 227, 290])
        assert [rect.width for rect in rects] == pytest.approx([63, 63, 63, 63])
        assert rects[0].height == 200
        assert rects[0].y == 40
        assert rects[1].height == 100
        assert rects[1].y == 140

    def test_single_series_takes_full_width(self, single_series_points, bar_settings):
        rects = make_layout(single_series_points, bar_settings, BAR_CHART).bar_rects()

        assert {rect.series for rect in rects} == {1}
        assert len(rects) == 4
        assert all(rect.width == pytest.approx(63) for rect in rects)

    def test_bar_colors(self, example_points, bar_settings):
        rects = make_layout(example_points, bar_settings, BAR_CHART).bar_rects()
        series1 = next(rect for rect in rects if rect.series == 1)
        series2 = next(rect for rect in rects if rect.series == 2)

        assert series1.fill_color == "#3b82f6"
        assert series1.edge_color == "#084fc3"
        assert series2.fill_color == "#f59e0b"

    def test_bar_layout_has_no_area_paths(self, example_points, bar_settings):
        assert make_layout(example_points, bar_settings, BAR_CHART).area_paths() == []


class TestLegend:

    def test_area_legend_entries(self, example_points, area_settings):
        entries = make_layout(example_points, area_settings, AREA_CHART).legend_entries()

        assert [entry.label for entry in entries] == ["Entry Queue", "Exit Queue"]
        assert [entry.swatch_x for entry in entries] == [120, 250]
        assert [entry.text_x for entry in entries] == [150, 280]
        assert [entry.color for entry in entries] == ["#0d9488", "#dc2626"]
        assert all(entry.y == 15 for entry in entries)

    def test_area_legend_darkens_already_dark_line_colors(self, example_points, area_settings):
        area_settings.series1_color = "#0d9488"
        entries = make_layout(example_points, area_settings, AREA_CHART).legend_entries()

        assert entries[0].color == "#006155"

    def test_bar_legend_entries(self, example_points, bar_settings):
        entries = make_layout(example_points, bar_settings, BAR_CHART).legend_entries()

        assert [entry.text_x for entry in entries] == [145, 275]
        assert entries[0].color == "#3b82f6"
        assert entries[0].edge_color == "#084fc3"

    def test_only_series2_visible_starts_at_first_slot(self, bar_settings):
        points = [DataPoint("a", 0, 4), DataPoint("b", 0, 2)]
        entries = make_layout(points, bar_settings, BAR_CHART).legend_entries()

        assert [entry.series for entry in entries] == [2]
        assert entries[0].swatch_x == 120


class TestLayoutValidation:

    def test_unknown_chart_type(self, example_points, area_settings):
        with pytest.raises(ValueError):
            ChartLayout(example_points, area_settings, "pie", 400, 300)

    def test_theme_palettes(self, example_points, area_settings):
        assert make_layout(example_points, area_settings, AREA_CHART).colors["background"] == "#ffffff"
        assert make_layout(example_points, area_settings, AREA_CHART, True).colors["background"] == "#1f2937"
