"""
Debounced rendering: a burst of changes results in a single render.
"""

import logging
import threading
from typing import Callable, Optional

from error_handler import ErrorSeverity, log_error_with_context

logger = logging.getLogger('chart_generator.render_scheduler')

DEFAULT_DELAY_SECONDS = 0.05


class RenderScheduler:
    """
    Runs ``callback`` once, ``delay`` seconds after the most recent
    ``schedule()`` call. Every new call cancels the pending one.

    ``generation`` increases on every ``schedule()`` and ``flush()``. A
    callback can read it when it starts and compare it with later values
    to tell whether a newer render has been requested since.
    """

    def __init__(self, callback: Callable[[], None], delay: float = DEFAULT_DELAY_SECONDS):
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()  # Guards _timer and _generation
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def schedule(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(self.delay, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> bool:
        """Run a pending render now instead of waiting for the timer."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        self.callback()
        return True

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                # Superseded by a newer schedule() or cancelled
                return
            self._timer = None
        try:
            self.callback()
        except Exception as e:
            log_error_with_context(e, "Scheduled render failed", ErrorSeverity.HIGH,
                                   {'delay': self.delay})
