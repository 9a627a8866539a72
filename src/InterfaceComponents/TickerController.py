"""Auto-progress ticker for the verifier UI.

Wraps a Textual interval timer so the app only deals with
running / paused state and the step speed.
"""

from typing import Callable


class TickerController:
    """Owns the interval timer that advances verification one step per tick."""

    DEFAULT_INTERVAL = 0.5
    MIN_INTERVAL = 0.05
    MAX_INTERVAL = 3.0
    SPEED_DELTA = 0.05

    def __init__(self, app):
        self.app = app
        self.interval = self.DEFAULT_INTERVAL
        self.running = False
        self._timer = None
        self._on_tick: Callable | None = None

    def start(self, on_tick: Callable) -> None:
        """Creates the (paused) timer. Must be called once the app is mounted."""
        self._on_tick = on_tick
        self._rebuild_timer()

    def pause(self) -> None:
        self.running = False
        if self._timer:
            self._timer.pause()

    def resume(self) -> None:
        self.running = True
        if self._timer:
            self._timer.resume()

    def toggle(self) -> bool:
        """Flips between running and paused; returns the new running state."""
        if self.running:
            self.pause()
        else:
            self.resume()
        return self.running

    def increase_speed(self) -> float:
        """Shortens the interval. Returns the interval in seconds."""
        self.interval = round(max(self.MIN_INTERVAL, self.interval - self.SPEED_DELTA), 2)
        self._rebuild_timer()
        return self.interval

    def decrease_speed(self) -> float:
        """Lengthens the interval. Returns the interval in seconds."""
        self.interval = round(min(self.MAX_INTERVAL, self.interval + self.SPEED_DELTA), 2)
        self._rebuild_timer()
        return self.interval

    def _rebuild_timer(self) -> None:
        if self._on_tick is None:
            return
        if self._timer:
            self._timer.stop()
        self._timer = self.app.set_interval(
            self.interval,
            self._on_tick,
            pause=not self.running,
        )
