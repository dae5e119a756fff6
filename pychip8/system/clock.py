"""Wall-clock pacing for the CPU, the timers and the display."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CPU_HZ = 700
TIMER_HZ = 60
REFRESH_HZ = 60


@dataclass
class Cadence:
    """Fixed-rate event source driven by elapsed seconds.

    Fractional events carry over between calls so long runs stay on rate.
    """

    hz: float
    _budget: float = 0.0

    def __post_init__(self) -> None:
        if self.hz < 0:
            raise ValueError("rate must not be negative")

    def advance(self, elapsed: float) -> int:
        """Return how many events fell due in ``elapsed`` seconds."""

        if elapsed <= 0 or self.hz == 0:
            return 0
        self._budget += elapsed * self.hz
        due = int(self._budget)
        self._budget -= due
        return due

    def reset(self) -> None:
        self._budget = 0.0


@dataclass
class ClockRates:
    """Independent rates in Hertz."""

    cpu_hz: float = DEFAULT_CPU_HZ
    timer_hz: float = TIMER_HZ
    refresh_hz: float = REFRESH_HZ


@dataclass(frozen=True)
class ClockTicks:
    cpu_steps: int
    timer_ticks: int
    refreshes: int


class MachineClock:
    """Split elapsed time into CPU steps, timer ticks and display refreshes.

    ``max_elapsed`` bounds catch-up after the host stalls (debugger, window
    drag) so the machine does not try to replay seconds of work in one frame.
    """

    def __init__(self, rates: ClockRates | None = None, *, max_elapsed: float = 0.25) -> None:
        self.rates = rates or ClockRates()
        self._max_elapsed = max_elapsed
        self._cpu = Cadence(self.rates.cpu_hz)
        self._timers = Cadence(self.rates.timer_hz)
        self._refresh = Cadence(self.rates.refresh_hz)

    def advance(self, elapsed: float) -> ClockTicks:
        elapsed = min(max(elapsed, 0.0), self._max_elapsed)
        return ClockTicks(
            cpu_steps=self._cpu.advance(elapsed),
            timer_ticks=self._timers.advance(elapsed),
            refreshes=self._refresh.advance(elapsed),
        )

    def reset(self) -> None:
        self._cpu.reset()
        self._timers.reset()
        self._refresh.reset()


__all__ = [
    "Cadence",
    "ClockRates",
    "ClockTicks",
    "DEFAULT_CPU_HZ",
    "MachineClock",
    "REFRESH_HZ",
    "TIMER_HZ",
]
