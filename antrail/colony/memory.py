"""PositionMemory — fixed-depth ring of recently visited cells."""

from __future__ import annotations

from collections.abc import Iterator

from antrail.world.food import Position


class PositionMemory:
    """The last ``size`` positions an ant moved to, oldest first.

    The ring is pre-filled so it is full from the start; every push
    overwrites the oldest slot.
    """

    __slots__ = ("_slots", "_head")

    def __init__(self, start: Position, size: int = 3) -> None:
        if size < 1:
            msg = f"memory size must be >= 1, got {size}"
            raise ValueError(msg)
        self._slots: list[Position] = [start] * size
        self._head = 0  # index of the oldest entry

    def push(self, pos: Position) -> None:
        """Record a new position, evicting the oldest."""
        self._slots[self._head] = pos
        self._head = (self._head + 1) % len(self._slots)

    def __contains__(self, pos: object) -> bool:
        return pos in self._slots

    def __iter__(self) -> Iterator[Position]:
        n = len(self._slots)
        for i in range(n):
            yield self._slots[(self._head + i) % n]

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"PositionMemory({list(self)!r})"
