"""SessionTicker — drives ``TripSessionModel.tick`` on a fixed period."""

from __future__ import annotations

import logging
import threading
import time

_logger = logging.getLogger(__name__)


class SessionTicker:
    """Calls ``model.tick()`` every *interval_s* seconds on a daemon thread.

    Parameters
    ----------
    model:
        Object with ``tick()`` — normally a
        :class:`~mg4_dashboard.session.model.TripSessionModel`.
    interval_s:
        Tick period in seconds.
    """

    def __init__(self, model, interval_s: float = 5.0) -> None:
        self._model = model
        self._interval = interval_s
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background tick thread."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="SessionTicker")
        self._thread.start()

    def stop(self) -> None:
        """Signal the tick thread to stop and join it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        # first tick after one full period, like a UI interval timer
        while not self._stop_event.wait(self._interval):
            t0 = time.monotonic()
            try:
                self._model.tick()
            except Exception:
                _logger.exception("Session tick failed")
            elapsed = time.monotonic() - t0
            if elapsed > self._interval:
                _logger.warning("Session tick took %.2fs (interval %.2fs)", elapsed, self._interval)
