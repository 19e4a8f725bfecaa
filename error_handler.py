"""
Standardized error handling utilities for the chart generator.
Provides consistent error handling patterns and logging across all modules.

Failures never reach the user as exceptions: rendering and exporting degrade
to "nothing drawn" and the preference store falls back to its defaults.
"""

import logging
import sqlite3
from typing import Optional, Callable, Any
from functools import wraps

logger = logging.getLogger('chart_generator.error_handler')


class ErrorSeverity:
    """Error severity levels for consistent logging and handling."""
    CRITICAL = "critical"  # Application cannot continue
    HIGH = "error"        # A chart could not be produced
    MEDIUM = "warning"    # Functionality impacted but recoverable
    LOW = "info"          # Minor issues or expected behavior


class ChartError(Exception):
    """Base exception for chart generator errors."""
    pass


class ChartRenderError(ChartError):
    """Raised when a chart surface cannot be drawn."""
    pass


class ChartExportError(ChartError):
    """Raised when a rendered chart cannot be written out."""
    pass


class ConfigurationError(ChartError):
    """Custom exception for configuration-related errors."""
    pass


def handle_render_error(func: Callable) -> Callable:
    """
    Decorator for drawing and export entry points.

    Any failure is logged and the call returns None, so callers treat it the
    same way as an empty dataset.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ChartError as e:
            log_error_with_context(e, f"Chart error in {func.__name__}", ErrorSeverity.MEDIUM)
            return None
        except OSError as e:
            log_error_with_context(e, f"I/O error in {func.__name__}", ErrorSeverity.HIGH)
            return None
        except Exception as e:
            log_error_with_context(e, f"Unexpected error in {func.__name__}", ErrorSeverity.HIGH)
            return None

    return wrapper


def handle_preference_error(default: Any = None) -> Callable:
    """
    Decorator factory for preference store operations.

    SQLite failures are logged and ``default`` is returned instead.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except sqlite3.OperationalError as e:
                logger.error("Preference store operational error in %s: %s", func.__name__, e)
                return default
            except sqlite3.DatabaseError as e:
                logger.error("Preference store error in %s: %s", func.__name__, e)
                return default
        return wrapper
    return decorator


def log_error_with_context(
    error: Exception,
    context: str,
    severity: str = ErrorSeverity.MEDIUM,
    additional_info: Optional[dict] = None
) -> None:
    """
    Log an error with consistent formatting and context information.

    Args:
        error: The exception that occurred
        context: Description of where/when the error occurred
        severity: Error severity level
        additional_info: Additional context information to log
    """
    error_msg = f"{context}: {error}"

    if additional_info:
        error_msg += f" | Context: {additional_info}"

    log_func = getattr(logger, severity, logger.error)

    if severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
        log_func(error_msg, exc_info=True)
    else:
        log_func(error_msg)


def safe_execute(
    func: Callable,
    *args,
    context: str = "Operation",
    default_return: Any = None,
    severity: str = ErrorSeverity.MEDIUM,
    **kwargs
) -> Any:
    """
    Safely execute a function with standardized error handling.

    Args:
        func: Function to execute
        *args: Positional arguments for the function
        context: Description of the operation for logging
        default_return: Value to return if an error occurs
        severity: Error severity level
        **kwargs: Keyword arguments for the function

    Returns:
        Function result or default_return if an error occurs
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        log_error_with_context(e, context, severity)
        return default_return
