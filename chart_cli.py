#!/usr/bin/env python3
"""
Spreadsheet Chart Generator CLI

Turns data copied from a spreadsheet (tab separated) or a CSV file into an
area chart and a grouped bar chart, saved as PNG files.

Usage:
    # Render both charts from a pasted export
    python chart_cli.py --input queue.tsv

    # Built-in example, dark theme, bar chart only
    python chart_cli.py --example --dark --chart bar

    # Read from stdin with a custom title
    pbpaste | python chart_cli.py --title "Validator Queue" --y-label "ETH"
"""

import argparse
import logging
import sys
from typing import List, Optional

import config
from chart_models import CHART_TYPES
from chart_renderer import ChartRenderer
from chart_session import ChartSession
from config_validator import validate_config
from error_handler import ConfigurationError
from logging_config import setup_logging
from theme_store import ThemeStore

logger = logging.getLogger('chart_generator.cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render pasted spreadsheet data as area and bar charts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--input', '-i', help="Tab or comma separated file (default: stdin)")
    source.add_argument('--example', action='store_true', help="Use the built-in two-series example")
    source.add_argument('--exit-queue-example', action='store_true',
                        help="Use the built-in single-series example")

    parser.add_argument('--chart', choices=list(CHART_TYPES) + ['both'], default='both',
                        help="Which chart to export (default: both)")

    theme = parser.add_mutually_exclusive_group()
    theme.add_argument('--dark', dest='dark_mode', action='store_true', default=None,
                       help="Use the dark theme (saved as the preference)")
    theme.add_argument('--light', dest='dark_mode', action='store_false', default=None,
                       help="Use the light theme (saved as the preference)")

    parser.add_argument('--title', help="Chart title drawn above the exported chart")
    parser.add_argument('--y-label', help="Y axis title")
    parser.add_argument('--series1-name', help="Legend name of the first series")
    parser.add_argument('--series2-name', help="Legend name of the second series")
    parser.add_argument('--series1-color', help="First series color as #rrggbb")
    parser.add_argument('--series2-color', help="Second series color as #rrggbb")

    parser.add_argument('--output-dir', '-o', default=None,
                        help=f"Directory for PNG files (default: {config.export_dir})")
    parser.add_argument('--width', type=int, default=None, help="Chart width in pixels")
    parser.add_argument('--height', type=int, default=None, help="Chart height in pixels")
    parser.add_argument('--no-log-file', action='store_true', help="Log to the console only")
    parser.add_argument('--verbose', '-v', action='store_true', help="Enable debug logging")

    return parser


def _read_input(args) -> Optional[str]:
    if args.input:
        with open(args.input, 'r', encoding='utf-8') as fh:
            return fh.read()
    if sys.stdin is not None and not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def _settings_changes(args) -> dict:
    changes = {
        'chart_title': args.title,
        'y_axis_label': args.y_label,
        'series1_name': args.series1_name,
        'series2_name': args.series2_name,
        'series1_color': args.series1_color,
        'series2_color': args.series2_color,
    }
    return {name: value for name, value in changes.items() if value is not None}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_to_file=config.log_to_file and not args.no_log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        validate_config(config)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}")
        return 1

    renderer = ChartRenderer(
        width=args.width or config.chart_width,
        height=args.height or config.chart_height,
        dpi=config.chart_dpi,
    )
    session = ChartSession(
        renderer=renderer,
        theme_store=ThemeStore(config.theme_db_path),
        render_delay=config.render_debounce_ms / 1000.0,
    )

    try:
        if args.example:
            session.load_example_data()
        elif args.exit_queue_example:
            session.load_exit_queue_example()
        else:
            try:
                text = _read_input(args)
            except OSError as e:
                print(f"❌ Could not read input: {e}")
                return 1
            if text is None:
                parser.print_usage()
                print("💡 Paste data on stdin, or pass --input FILE or --example")
                return 2
            session.handle_data_change(text)

        if args.dark_mode is not None:
            session.set_dark_mode(args.dark_mode)

        chart_types = CHART_TYPES if args.chart == 'both' else (args.chart,)
        changes = _settings_changes(args)
        if changes:
            for chart_type in chart_types:
                try:
                    session.update_settings(chart_type, **changes)
                except ValueError as e:
                    print(f"❌ {e}")
                    return 2

        session.scheduler.cancel()
        session.render_now()
        print(session.status_line())

        if not session.parsed_data:
            print(config.MESSAGES['no_data'])
            print(config.MESSAGES['no_data_hint'].format(chart_type=" and ".join(chart_types)))
            return 0

        output_dir = args.output_dir or config.export_dir
        failed = False
        for chart_type in chart_types:
            path = session.export(chart_type, output_dir)
            if path:
                print(config.MESSAGES['exported'].format(chart_type=chart_type, path=path))
            else:
                logger.warning("No %s chart was exported", chart_type)
                failed = True
        return 1 if failed else 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
