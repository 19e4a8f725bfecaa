"""
Parsing of data pasted from a spreadsheet (TSV) or CSV into chart data points.

Parsing is lenient: rows that cannot be used are skipped and numbers that
cannot be read become 0, so any input produces a (possibly empty) dataset.
"""

import logging
import math
import re
from typing import Iterable, List, Tuple

import pandas as pd

from chart_models import DataPoint, SeriesSettings

logger = logging.getLogger('chart_generator.parser')

TAB = "\t"
COMMA = ","

# Leading decimal number, the same prefix a spreadsheet-style float read accepts
LEADING_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

DEFAULT_EXAMPLE_DATA = [
    DataPoint("2025-01-01", 68704, 416),
    DataPoint("2025-01-02", 38080, 448),
    DataPoint("2025-01-03", 2464, 640),
    DataPoint("2025-01-04", 5888, 128),
    DataPoint("2025-01-05", 256, 544),
    DataPoint("2025-01-06", 14208, 288),
    DataPoint("2025-01-07", 8800, 28448),
    DataPoint("2025-01-08", 2112, 136160),
    DataPoint("2025-01-09", 51840, 42048),
    DataPoint("2025-01-10", 71296, 544),
    DataPoint("2025-01-11", 89184, 42464),
    DataPoint("2025-01-12", 53056, 480),
    DataPoint("2025-01-13", 11232, 480),
    DataPoint("2025-01-14", 1568, 96),
    DataPoint("2025-01-15", 66240, 13696),
]

EXIT_QUEUE_EXAMPLE = """Date\tExit Queue
2023-05-21\t0
2023-05-22\t0
2023-05-23\t0
2023-05-24\t0
2023-05-25\t0
2023-05-26\t0
2023-05-27\t0
2023-05-28\t0
2023-05-29\t32
2023-05-30\t32
2023-05-31\t160
2023-06-01\t0
2023-06-02\t0
2023-06-03\t32
2023-06-04\t0
2023-06-05\t0
2023-06-06\t480
2023-06-07\t11584
2023-06-08\t320
2023-06-09\t10528"""


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def example_text() -> str:
    """The built-in example dataset as tab separated text with a header row."""
    rows = [
        f"{point.date}\t{_format_number(point.series1)}\t{_format_number(point.series2)}"
        for point in DEFAULT_EXAMPLE_DATA
    ]
    return "Date\tEntry Queue\tExit Queue\n" + "\n".join(rows)


def coerce_number(value_str: str) -> float:
    """
    Read the leading number of a field, the way a spreadsheet paste is read.

    "12.5" -> 12.5, "12abc" -> 12.0, "abc" -> 0.0. Anything unreadable or
    non-finite becomes 0.0.
    """
    match = LEADING_NUMBER_PATTERN.match(value_str.strip())
    if not match:
        return 0.0
    try:
        number = float(match.group(0))
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def detect_separator(input_text: str) -> str:
    """Tab if the first non-empty line contains a tab, otherwise comma."""
    lines = _split_lines(input_text)
    if lines and TAB in lines[0]:
        return TAB
    return COMMA


def describe_separator(input_text: str) -> str:
    """Short description of the delimiter found anywhere in the pasted text."""
    if TAB in input_text:
        return "Tab-separated (from spreadsheet)"
    if COMMA in input_text:
        return "Comma-separated"
    return "No data"


def derive_series_names(headers: List[str]) -> Tuple[str, str]:
    """
    Series names taken from the header row.

    Column 1 names series 1; column 2, when present, names series 2,
    otherwise series 2 gets an empty name.
    """
    series1_name = headers[1] if len(headers) >= 2 else ""
    series2_name = headers[2] if len(headers) >= 3 else ""
    return series1_name, series2_name


def _split_lines(input_text: str) -> List[str]:
    return [line for line in input_text.strip().splitlines() if line.strip()]


def _parse_row(line: str, separator: str):
    values = [value.strip() for value in line.split(separator)]
    if len(values) < 2 or not values[0] or not values[1]:
        return None

    series2 = coerce_number(values[2]) if len(values) >= 3 else 0.0
    return DataPoint(date=values[0], series1=coerce_number(values[1]), series2=series2)


def parse_spreadsheet_data(
    input_text: str,
    settings: Iterable[SeriesSettings] = ()
) -> List[DataPoint]:
    """
    Parse pasted spreadsheet (TSV) or CSV text into data points.

    Args:
        input_text: Raw pasted text; the first line is the header row
        settings: Settings objects that receive the series names derived
            from the header (both chart types share them). Colors and titles
            are left untouched.

    Returns:
        List[DataPoint]: Parsed points in input order, empty when the text
        has no header plus data row or fewer than two columns
    """
    lines = _split_lines(input_text)
    if len(lines) < 2:
        return []

    separator = TAB if TAB in lines[0] else COMMA

    headers = [header.strip() for header in lines[0].split(separator)]
    if len(headers) < 2:
        return []

    series1_name, series2_name = derive_series_names(headers)
    for series_settings in settings:
        series_settings.series1_name = series1_name
        series_settings.series2_name = series2_name

    data = []
    skipped = 0
    for line in lines[1:]:
        point = _parse_row(line, separator)
        if point is None:
            skipped += 1
            continue
        data.append(point)

    if skipped:
        logger.debug("Skipped %d row(s) without a label and value", skipped)
    logger.debug("Parsed %d data point(s) using %r separator", len(data), separator)
    return data


def dataset_to_frame(points: List[DataPoint]) -> pd.DataFrame:
    """Points as a DataFrame with date, series1 and series2 columns."""
    return pd.DataFrame(
        {
            "date": [point.date for point in points],
            "series1": [float(point.series1) for point in points],
            "series2": [float(point.series2) for point in points],
        },
        columns=["date", "series1", "series2"],
    )
