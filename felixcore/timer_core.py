"""One of the system timers, free running or linked to the previous one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

_U64 = (1 << 64) - 1

Trigger = Callable[[int, bool], None]


@dataclass(frozen=True)
class TimerAction:
    """Request to fire timer ``timer`` at ``tick``."""

    timer: int
    tick: int


class TimerCore:
    """Counter with backup value, reload, linking and borrow signalling."""

    # Control A bits
    ENABLE_INT = 0b10000000
    RESET_DONE = 0b01000000
    ENABLE_RELOAD = 0b00010000
    ENABLE_COUNT = 0b00001000
    AUD_CLOCK_MASK = 0b00000111
    AUD_LINKING = 0b00000111

    # Control B bits
    TIMER_DONE = 0b00001000
    LAST_CLOCK = 0b00000100
    BORROW_IN = 0b00000010
    BORROW_OUT = 0b00000001

    def __init__(self, number: int, trigger: Trigger) -> None:
        self.number = number
        self._trigger = trigger
        self._base_tick = 0
        self._expected_tick = 0
        self._borrow_in_tick = 0
        self._borrow_out_tick = 0
        self._enable_int = False
        self._reset_done = False
        self._enable_reload = False
        self._enable_count = False
        self._linking = False
        self._aud_shift = 0
        self._value = 0
        self._backup = 0
        self._timer_done = False
        self._last_clock = False
        self._borrow_in = False
        self._borrow_out = False

    def set_backup(self, tick: int, value: int) -> TimerAction | None:
        self._backup = value & 0xFF
        self._value = 0
        return self._compute_action(tick)

    def set_control_a(self, tick: int, value: int) -> TimerAction | None:
        self._enable_int = (value & self.ENABLE_INT) != 0
        self._reset_done = (value & self.RESET_DONE) != 0
        self._enable_reload = (value & self.ENABLE_RELOAD) != 0
        self._enable_count = (value & self.ENABLE_COUNT) != 0
        self._linking = (value & self.AUD_LINKING) == self.AUD_LINKING
        self._aud_shift = value & self.AUD_CLOCK_MASK
        if self._reset_done:
            self._timer_done = False
        return self._compute_action(tick)

    def set_count(self, tick: int, value: int) -> TimerAction | None:
        self._value = value & 0xFF
        return self._compute_action(tick)

    def set_control_b(self, tick: int, value: int) -> TimerAction | None:
        self._timer_done = (value & self.TIMER_DONE) != 0
        self._last_clock = (value & self.LAST_CLOCK) != 0
        self._borrow_in = (value & self.BORROW_IN) != 0
        self._borrow_out = (value & self.BORROW_OUT) != 0
        return self._compute_action(tick)

    def get_backup(self, tick: int) -> int:
        return self._backup

    def get_control_a(self, tick: int) -> int:
        return (
            (self.ENABLE_INT if self._enable_int else 0)
            | (self.RESET_DONE if self._reset_done else 0)
            | (self.ENABLE_RELOAD if self._enable_reload else 0)
            | (self.ENABLE_COUNT if self._enable_count else 0)
            | self._aud_shift
        )

    def get_count(self, tick: int) -> int:
        if not self._linking:
            period = (1 << self._aud_shift) * 16
            remaining = (self._expected_tick - tick) & _U64
            self._value = (remaining // period - 1) & 0xFF
        return self._value

    def get_control_b(self, tick: int) -> int:
        self._borrow_in = ((tick - self._borrow_in_tick) & _U64) < 16
        self._borrow_out = ((tick - self._borrow_out_tick) & _U64) < 16
        self._last_clock = self.get_count(tick) == 0
        return (
            (self.TIMER_DONE if self._timer_done else 0)
            | (self.LAST_CLOCK if self._last_clock else 0)
            | (self.BORROW_IN if self._borrow_in else 0)
            | (self.BORROW_OUT if self._borrow_out else 0)
        )

    def fire_action(self, tick: int) -> TimerAction | None:
        """Expire the timer if ``tick`` is when it was due; return the next firing."""
        if tick != self._expected_tick:
            return None
        self._timer_done = True
        self._borrow_out_tick = tick
        self._trigger(tick, self._enable_int)
        return self._compute_action(tick)

    def borrow_in(self, tick: int) -> None:
        """Count one borrow from the timer this one is linked to."""
        self._borrow_in_tick = tick
        if not (self._enable_count and self._linking) or (
            self._timer_done and not self._enable_reload
        ):
            return
        if self._value > 0:
            self._value -= 1
            self._last_clock = self._value == 0
        else:
            if self._last_clock:
                self._last_clock = False
                self._timer_done = True
                self._trigger(tick, self._enable_int)
            if self._enable_reload:
                self._value = self._backup

    def _compute_action(self, tick: int) -> TimerAction | None:
        if not self._enable_count or self._linking or (
            self._timer_done and not self._enable_reload
        ):
            return None
        if self._value == 0 or self._enable_reload:
            self._value = self._backup
        if self._value == 0:
            return None
        self._base_tick = tick
        self._expected_tick = self._base_tick + (1 + self._value) * (1 << self._aud_shift) * 16
        return TimerAction(self.number, self._expected_tick)