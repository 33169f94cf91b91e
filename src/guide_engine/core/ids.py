from __future__ import annotations

from typing import Callable

# Author ids live below ENGINE_ID_FLOOR, engine ids at or above it.
ENGINE_ID_FLOOR = 0x80000000
ENGINE_ID_CEILING = 0xFFFFFFFA


def is_author_id(value: int) -> bool:
    return 0 < value < ENGINE_ID_FLOOR


class IdAllocator:
    """Counts down through the engine id range, wrapping at the floor.

    ``in_use`` reports ids that are still live so a wrapped counter never
    hands out an id that is currently owned by a pending timer.
    """

    def __init__(
        self,
        in_use: Callable[[int], bool] | None = None,
        start: int = ENGINE_ID_CEILING,
    ):
        if not ENGINE_ID_FLOOR <= start <= ENGINE_ID_CEILING:
            raise ValueError(f"start {start:#x} outside the engine id range")
        self._next = start
        self._in_use = in_use or (lambda _value: False)

    def allocate(self) -> int:
        span = ENGINE_ID_CEILING - ENGINE_ID_FLOOR + 1
        for _ in range(span):
            value = self._next
            self._next = value - 1 if value > ENGINE_ID_FLOOR else ENGINE_ID_CEILING
            if not self._in_use(value):
                return value
        raise RuntimeError("engine id range exhausted")

    def peek(self) -> int:
        return self._next
