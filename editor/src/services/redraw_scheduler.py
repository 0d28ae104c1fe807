"""Coalesced redraw scheduling.

Mutations call request(); the scheduler makes sure the redraw callback
runs once per tick no matter how many requests arrived in between.
"""
from abc import ABC, abstractmethod

from constants import REDRAW_INTERVAL_MS


class RedrawScheduler(ABC):
    """Dirty flag plus a pluggable way to get called back later."""

    def __init__(self, redraw=None):
        self.redraw = redraw
        self.dirty = False
        self._pending = False
        self.redraw_count = 0

    def request(self):
        """Mark dirty and schedule a flush if one is not already pending."""
        self.dirty = True
        if not self._pending:
            self._pending = True
            self._schedule()

    def flush(self):
        """Run the redraw callback once if anything changed."""
        self._pending = False
        if not self.dirty:
            return False
        self.dirty = False
        self.redraw_count += 1
        if self.redraw is not None:
            self.redraw()
        return True

    @abstractmethod
    def _schedule(self):
        """Arrange for flush() to be called on the next tick."""
        pass


class ManualScheduler(RedrawScheduler):
    """Flushes only when run_pending() is called (tests, headless use)."""

    def _schedule(self):
        pass

    def run_pending(self):
        return self.flush()


class QtTimerScheduler(RedrawScheduler):
    """Flushes from the Qt event loop after one frame interval."""

    def __init__(self, redraw=None, interval_ms=REDRAW_INTERVAL_MS):
        super().__init__(redraw)
        self.interval_ms = interval_ms

    def _schedule(self):
        from PyQt5.QtCore import QTimer
        QTimer.singleShot(self.interval_ms, self.flush)
