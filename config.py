"""
Chart generator configuration using environment variables and .env file support.

This module loads configuration from environment variables with .env file taking precedence.
Every setting is optional; the defaults match the interactive chart generator.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
# Use override=True to prioritize .env file over system environment variables
load_dotenv(override=True)

# Chart surface size in pixels (optional)
# Environment variables: CHART_WIDTH, CHART_HEIGHT
# Default: 800x400, the size of the on-screen chart panel
chart_width = os.getenv('CHART_WIDTH', '800')
chart_height = os.getenv('CHART_HEIGHT', '400')

# Raster resolution (optional)
# Environment variable: CHART_DPI
chart_dpi = os.getenv('CHART_DPI', '100')

# Render debounce delay in milliseconds (optional)
# Environment variable: RENDER_DEBOUNCE_MS
render_debounce_ms = os.getenv('RENDER_DEBOUNCE_MS', '50')

# Directory that exported PNG files are written to (optional)
# Environment variable: EXPORT_DIR
export_dir = os.getenv('EXPORT_DIR', 'exports')

# SQLite file holding the persisted dark mode preference (optional)
# Environment variable: THEME_DB_PATH
theme_db_path = os.getenv('THEME_DB_PATH', os.path.join('data', 'preferences.db'))

# Write a timestamped log file under logs/ in addition to the console (optional)
# Environment variable: LOG_TO_FILE
log_to_file = os.getenv('LOG_TO_FILE', 'true').strip().lower() in ('1', 'true', 'yes', 'on')

# Status and placeholder messages
MESSAGES = {
    'no_data': "Paste your data to get started",
    'no_data_hint': "Copy your data from Google Sheets, Excel, or any spreadsheet and paste it in. "
                    "The {chart_type} chart will automatically update!",
    'exported': "Saved {chart_type} chart to {path}",
}
