"""A thread-safe stopwatch with elapsed-time and ETA reporting."""

from __future__ import annotations

import threading
import time

NS_PER_S = 1_000_000_000
_SECONDS_PER_DAY = 60 * 60 * 24


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_mod(a: int, b: int) -> int:
    """Remainder matching division that rounds toward zero."""
    return a - b * _trunc_div(a, b)


def now_str(prefix: str = "", suffix: str = "") -> str:
    """Return the current wall-clock time in milliseconds since the epoch."""
    microseconds = time.time_ns() // 1000
    return f"{prefix}{microseconds // 1000}{suffix}"


def hms_str(t: int) -> str:
    """Format a number of seconds as ``h:mm:ss``, with days when needed."""
    t = int(t)
    days = _trunc_div(t, _SECONDS_PER_DAY)
    t = _trunc_mod(t, _SECONDS_PER_DAY)
    h = _trunc_div(t, 3600)
    m = _trunc_mod(_trunc_div(t, 60), 60)
    s = _trunc_mod(t, 60)
    clock = f"{h:2d}:{m:02d}:{s:02d}"
    if days == 0:
        return clock
    if days == 1:
        return f"{days} day, {clock}"
    return f"{days} days {clock}"


def hms_ns_str(ns: int) -> str:
    """Format a number of nanoseconds as ``h:mm:ss``."""
    return hms_str(int(ns) // NS_PER_S)


class Timer:
    """A stopwatch that accumulates time over several start/stop cycles."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._t0 = 0
        self._running = False
        self._elapsed_ns = 0
        self._last_ns = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def last_ns(self) -> int:
        """Length of the most recently completed run, in nanoseconds."""
        return self._last_ns

    def start(self) -> None:
        """Start the timer; it must not already be running."""
        with self._lock:
            if self._running:
                raise RuntimeError("timer is already running")
            self._t0 = time.monotonic_ns()
            self._running = True

    def stop(self) -> None:
        """Stop the timer and add the current run to the total."""
        with self._lock:
            if not self._running:
                raise RuntimeError("timer is not running")
            self._last_ns = time.monotonic_ns() - self._t0
            self._elapsed_ns += self._last_ns
            self._running = False

    def lap(self) -> None:
        """Record the current run and immediately begin a new one."""
        self.stop()
        self.start()

    def running_nanoseconds(self) -> int:
        """Nanoseconds since the timer was last started."""
        return time.monotonic_ns() - self._t0

    def elapsed_nanoseconds(self) -> int:
        """Total nanoseconds accumulated, including the current run."""
        with self._lock:
            if self._running:
                return self._elapsed_ns + self.running_nanoseconds()
            return self._elapsed_ns

    def elapsed_seconds(self) -> float:
        return self.elapsed_nanoseconds() / NS_PER_S

    def elapsed_text(self) -> str:
        return hms_str(int(self.elapsed_seconds()))

    def eta(self, fraction_done: float) -> float:
        """Seconds until completion, or -1 if it cannot be estimated."""
        t = self.elapsed_seconds()
        if t <= 0 or fraction_done <= 0:
            return -1
        return t / fraction_done - t

    def eta_text(self, fraction_done: float) -> str:
        e = self.eta(fraction_done)
        if e < 0:
            return "n/a"
        return hms_str(int(e))

    def _eta_struct(self, fraction_done: float) -> time.struct_time:
        when = int(self.eta(fraction_done)) + int(time.time())
        return time.localtime(when)

    def eta_time(self, fraction_done: float) -> str:
        """Local clock time at which the job is expected to finish."""
        return time.strftime("%H:%M:%S", self._eta_struct(fraction_done))

    def eta_date(self, fraction_done: float) -> str:
        """Local date and time at which the job is expected to finish."""
        return time.strftime("%Y-%m-%d %H:%M:%S", self._eta_struct(fraction_done))