import logging
import os

from error_handler import ConfigurationError

logger = logging.getLogger('chart_generator.config_validator')

DEFAULTS = {
    "chart_width": 800,
    "chart_height": 400,
    "chart_dpi": 100,
    "render_debounce_ms": 50,
}

# Smallest surface that still leaves a plot area inside the fixed margins
MIN_CHART_WIDTH = 200
MIN_CHART_HEIGHT = 150


def _validate_positive_int(config_module, attr_name, minimum=1, display_name=None):
    """Coerce a numeric configuration attribute to int, falling back to its default."""
    if display_name is None:
        display_name = attr_name.replace('_', ' ')

    default = DEFAULTS[attr_name]
    raw_value = getattr(config_module, attr_name, default)

    try:
        value = int(raw_value)
        if value < minimum:
            logger.warning(
                "%s in config ('%s') must be at least %d. Using default %d.",
                display_name, raw_value, minimum, default
            )
            value = default
    except (ValueError, TypeError):
        logger.warning("Invalid %s in config ('%s'), using default %d.", display_name, raw_value, default)
        value = default

    setattr(config_module, attr_name, value)
    return value


def _validate_export_dir(config_module):
    """Validate the export directory setting."""
    export_dir = getattr(config_module, "export_dir", "exports")
    if not isinstance(export_dir, str) or not export_dir.strip():
        logger.warning("export_dir in config is empty. Using default 'exports'.")
        config_module.export_dir = "exports"
        return

    if os.path.exists(export_dir) and not os.path.isdir(export_dir):
        raise ConfigurationError(f"Export path '{export_dir}' exists and is not a directory")


def _validate_theme_db_path(config_module):
    """Validate the theme preference database path."""
    db_path = getattr(config_module, "theme_db_path", None)
    if not db_path:
        default_path = os.path.join("data", "preferences.db")
        logger.warning("theme_db_path in config is empty. Using default '%s'.", default_path)
        config_module.theme_db_path = default_path
    elif os.path.isdir(db_path):
        raise ConfigurationError(f"Theme database path '{db_path}' is a directory")


def validate_config(config_module):
    """
    Validate the configuration module (config.py)

    Numeric settings are coerced in place; invalid values are replaced by
    their defaults with a warning.

    Args:
        config_module: The imported config module

    Returns:
        bool: True if the configuration is valid

    Raises:
        ConfigurationError: If a path setting points at something unusable
    """
    width = _validate_positive_int(config_module, "chart_width", MIN_CHART_WIDTH, "chart width")
    height = _validate_positive_int(config_module, "chart_height", MIN_CHART_HEIGHT, "chart height")
    _validate_positive_int(config_module, "chart_dpi", display_name="chart DPI")
    _validate_positive_int(config_module, "render_debounce_ms", minimum=0, display_name="render debounce")

    _validate_export_dir(config_module)
    _validate_theme_db_path(config_module)

    logger.info("Chart surface configured at %dx%d px", width, height)
    return True
