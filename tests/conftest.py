import os
import sys

import pytest

# Make the project modules importable when running from a checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chart_data_parser import DEFAULT_EXAMPLE_DATA  # noqa: E402
from chart_models import DataPoint, default_area_settings, default_bar_settings  # noqa: E402
from chart_renderer import ChartRenderer  # noqa: E402


@pytest.fixture
def example_points():
    return list(DEFAULT_EXAMPLE_DATA)


@pytest.fixture
def single_series_points():
    return [
        DataPoint("2023-05-29", 32, 0),
        DataPoint("2023-05-30", 32, 0),
        DataPoint("2023-05-31", 160, 0),
        DataPoint("2023-06-01", 0, 0),
    ]


@pytest.fixture
def area_settings():
    return default_area_settings()


@pytest.fixture
def bar_settings():
    return default_bar_settings()


@pytest.fixture
def renderer():
    return ChartRenderer(width=400, height=300, dpi=100)
