"""A terminal progress bar updated from a background thread."""

from __future__ import annotations

import logging
import math
import os
import signal
import sys
import threading
import time
from typing import Optional, TextIO

_logger = logging.getLogger(__name__)

DEFAULT_SCREEN_WIDTH = 80
_DEFAULT_FILL_WIDTH = 10
_FRACTIONAL_CHARACTERS = ("", "▏", "▎", "▍", "▌", "▋", "▊", "▉")
_BUSY_PERIOD = -3000

_resized = threading.Event()
_monitoring_resize = False


def _on_resize(signum, frame) -> None:
    _resized.set()


def _watch_resize() -> None:
    global _monitoring_resize
    if _monitoring_resize or not hasattr(signal, "SIGWINCH"):
        return
    if threading.current_thread() is not threading.main_thread():
        return
    signal.signal(signal.SIGWINCH, _on_resize)
    _monitoring_resize = True


def terminal_width() -> int:
    """Width of the terminal attached to standard output, or 80 if unknown."""
    try:
        width = os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return DEFAULT_SCREEN_WIDTH
    return width or DEFAULT_SCREEN_WIDTH


def format_duration(milliseconds: float) -> str:
    """A short human-readable duration, e.g. ``500ms``, ``1.5s`` or ``2m``."""
    if math.isnan(milliseconds):
        return "?"
    if math.isinf(milliseconds):
        return "∞"
    value = float(milliseconds)
    for suffix, factor in (("ms", 1000.0), ("s", 60.0), ("m", 60.0), ("h", 24.0)):
        if abs(value) < factor:
            return f"{value:.3g}{suffix}"
        value /= factor
    return f"{value:.3g}d"


def _round(x: float) -> int:
    return int(math.floor(x + 0.5))


def _silent() -> bool:
    logger: Optional[logging.Logger] = _logger
    while logger is not None and logger is not logging.root:
        if logger.level:
            return logger.level > logging.INFO
        logger = logger.parent
    return False


class Progress:
    """A progress bar that redraws itself until the work is done.

    A zero or negative ``total_work`` shows a bouncing "busy" bar instead.
    Use as a context manager, or call :meth:`set_done` when finished.
    """

    def __init__(self, title: str, total_work: int = 0, stream: Optional[TextIO] = None) -> None:
        self.title = title
        self._stream = stream if stream is not None else sys.stdout
        self._num_steps = total_work if total_work != 0 else _BUSY_PERIOD
        self._steps_done = 0
        self._lock = threading.Lock()
        self._exit = threading.Event()
        self._finished = False

        self._stream.flush()
        _watch_resize()
        self._write("\033[?25l")

        self._thread = threading.Thread(target=self._update, name="progress", daemon=True)
        self._thread.start()

    @property
    def total_work(self) -> int:
        return self._num_steps

    @property
    def steps_done(self) -> int:
        return self._steps_done

    def step(self, amount: int = 1) -> None:
        """Record ``amount`` more steps of completed work."""
        with self._lock:
            self._steps_done += amount

    def set_done(self) -> None:
        """Mark the work as complete and wait for the final redraw."""
        with self._lock:
            self._steps_done = self._num_steps
        self._exit.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()
        if not self._finished:
            self._finished = True
            self._write("\033[?25h")

    def __enter__(self) -> "Progress":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.set_done()

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def _update(self) -> None:
        start = time.monotonic()
        screen_width = bar_width = title_width = 0

        def reset_bar() -> None:
            nonlocal screen_width, bar_width, title_width
            screen_width = terminal_width() or DEFAULT_SCREEN_WIDTH
            title_width = min(len(self.title), screen_width // 2)
            bar_width = max(1, screen_width - 32 - title_width)

        reset_bar()
        while True:
            if _resized.is_set():
                _resized.clear()
                reset_bar()

            elapsed = (time.monotonic() - start) * 1000.0
            with self._lock:
                steps = self._steps_done
            fraction = min(max(steps / self._num_steps, 0.0), 1.0)
            done = self._exit.is_set() or fraction >= 1.0
            busy = self._num_steps < 0

            if not _silent():
                title = self.title[:title_width]
                if busy or done:
                    bounce = (1.0 - math.cos(-elapsed / self._num_steps * math.pi * 2)) * 0.5
                    fill_width = min(bar_width, bar_width if done else _DEFAULT_FILL_WIDTH)
                    left_padding = _round(bounce * (bar_width - fill_width))
                    remaining_width = screen_width - title_width - 2 - bar_width - 1
                    time_text = f" ({format_duration(elapsed)})"
                    line = (
                        f"\r{title} │{' ' * left_padding}{'█' * fill_width}"
                        f"{' ' * (bar_width - left_padding - fill_width)}│"
                        f"{time_text.ljust(remaining_width)}"
                    )
                else:
                    whole_width = int(math.floor(fraction * bar_width))
                    remainder = math.fmod(fraction * bar_width, 1.0)
                    part = int(math.floor(remainder * len(_FRACTIONAL_CHARACTERS)))
                    frac_text = _FRACTIONAL_CHARACTERS[part]
                    eta = elapsed / fraction - elapsed if fraction > 0 else math.inf
                    remaining_width = screen_width - title_width - 2 - bar_width - 1 - 5
                    time_text = (
                        f" ({format_duration(elapsed)}/"
                        f"{format_duration(max(0.0, elapsed + eta))})"
                    )
                    line = (
                        f"\r{title} │{'█' * whole_width}"
                        f"{frac_text.ljust(bar_width - whole_width)}│"
                        f"{_round(fraction * 100):>4d}%{time_text.ljust(remaining_width)}"
                    )
                if done:
                    line += "\n"
                self._write(line)

            if done:
                return
            delay_ms = min(max(elapsed * 0.01, 40.0), 10000.0)
            self._exit.wait(delay_ms / 1000.0)