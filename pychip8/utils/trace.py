"""Execution trace buffer fed from the host loop."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List

from .debug import debug_log


@dataclass(frozen=True)
class TraceEntry:
    pc: int
    word: int | None
    mnemonic: str
    i: int
    v: tuple[int, ...]
    sp: int
    delay_timer: int
    sound_timer: int
    cycles: int
    waiting: bool = False
    note: str = ""

    def format(self) -> str:
        word = "----" if self.word is None else f"{self.word:04X}"
        flags = [flag for flag in ("WAIT" if self.waiting else "", self.note) if flag]
        registers = "".join(f"{value:02X}" for value in self.v)
        return (
            f"pc={self.pc:04X} op={word} {self.mnemonic or '?':<16} cycle={self.cycles} "
            f"I={self.i:04X} SP={self.sp:02d} DT={self.delay_timer:02X} ST={self.sound_timer:02X} "
            f"V={registers} flags={','.join(flags) or '-'}"
        )


class TraceRecorder:
    """Keep the last ``capacity`` executed instructions.

    :meth:`record_result` has the signature of a
    :data:`pychip8.system.machine.StepObserver`, so a recorder can be passed
    straight to ``Machine.run_slice``.
    """

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._entries: Deque[TraceEntry] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def record_step(
        self,
        state,
        word: int | None,
        *,
        mnemonic: str = "",
        waiting: bool = False,
        note: str = "",
    ) -> None:
        """Append ``state`` (anything shaped like a ``StateSnapshot``)."""

        self._entries.append(
            TraceEntry(
                pc=state.pc & 0xFFFF,
                word=None if word is None else word & 0xFFFF,
                mnemonic=mnemonic,
                i=state.i & 0xFFFF,
                v=tuple(value & 0xFF for value in state.v),
                sp=state.sp,
                delay_timer=state.delay_timer,
                sound_timer=state.sound_timer,
                cycles=state.cycles,
                waiting=waiting,
                note=note,
            )
        )

    def record_result(self, before, result) -> None:
        instruction = result.instruction
        self.record_step(
            before,
            result.word,
            mnemonic=instruction.disassemble() if instruction is not None else "",
            waiting=result.waiting,
            note="" if result.error is None else type(result.error).__name__,
        )

    def entries(self, limit: int | None = None) -> Iterator[TraceEntry]:
        """Yield entries oldest first, optionally only the last ``limit``."""

        items = list(self._entries)
        if limit is not None:
            items = items[len(items) - min(len(items), max(limit, 0)) :]
        return iter(items)

    def last_entry(self) -> TraceEntry | None:
        return self._entries[-1] if self._entries else None

    def format_entries(self, limit: int | None = None) -> List[str]:
        return [entry.format() for entry in self.entries(limit)]

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, "%s", line)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["TraceEntry", "TraceRecorder"]
