"""
Signal Service.

Context managers for widget signal blocking, used when field values are
written programmatically and relation evaluation must not be triggered.

Key features:
1. Context manager guarantees signal unblocking
2. Supports single or multiple widgets
3. Conditional blocking for APIs with a ``silent`` flag
"""

from contextlib import contextmanager
import logging

from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for signal blocking around programmatic field updates.

    Examples:
        # Block signals (context manager):
        with SignalService.block_signals(field):
            field.set_value("US")

        # Multiple widgets:
        with SignalService.block_signals(country, state):
            country.set_value("US")
            state.set_value("CA")

        # Only when requested:
        with SignalService.block_signals_if(silent, *fields):
            ...
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals. Restores the previous blocking state."""
        previous = []
        for widget in widgets:
            if widget is not None:
                previous.append((widget, widget.blockSignals(True)))
                logger.debug(f"Blocked signals on {type(widget).__name__}")

        try:
            yield
        finally:
            for widget, was_blocked in reversed(previous):
                widget.blockSignals(was_blocked)
                logger.debug(f"Unblocked signals on {type(widget).__name__}")

    @staticmethod
    @contextmanager
    def block_signals_if(condition: bool, *widgets: QWidget):
        """Conditionally block signals based on a condition."""
        if condition:
            with SignalService.block_signals(*widgets):
                yield
        else:
            yield

