from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from .ids import IdAllocator
from .ports import TimerLoopPort

logger = logging.getLogger(__name__)


class TimerEntry:
    __slots__ = ("id", "delay_ms", "generation", "_handle", "_registry")

    def __init__(self, registry: "TimerRegistry", timer_id: int, delay_ms: float, generation: int):
        self.id = timer_id
        self.delay_ms = delay_ms
        self.generation = generation
        self._handle: asyncio.TimerHandle | None = None
        self._registry = registry

    @property
    def active(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        self._registry.cancel_entry(self)

    def __repr__(self) -> str:
        return f"TimerEntry(id={self.id:#x}, delay_ms={self.delay_ms!r})"


class TimerRegistry:
    """Owns every pending deferred execution, keyed by timer id.

    Entries are removed before their callback runs, so a callback may
    schedule or cancel other entries freely. ``clear`` detaches the whole
    table first and bumps the generation, which makes any callback the loop
    has already queued for an older entry a no-op.
    """

    def __init__(self, loop: TimerLoopPort | None = None):
        self._loop = loop
        self._entries: dict[int, TimerEntry] = {}
        self._generation = 0
        self._effects: set[Any] = set()
        self.ids = IdAllocator(in_use=self.__contains__)

    @property
    def loop(self) -> TimerLoopPort:
        if self._loop is None:
            return asyncio.get_running_loop()
        return self._loop

    @property
    def generation(self) -> int:
        return self._generation

    def __contains__(self, timer_id: object) -> bool:
        return timer_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, timer_id: int) -> TimerEntry | None:
        return self._entries.get(timer_id)

    def ids_pending(self) -> list[int]:
        return list(self._entries)

    def schedule(
        self,
        delay_ms: float,
        callback: Callable[..., Any],
        *args: Any,
        timer_id: int | None = None,
    ) -> TimerEntry:
        if timer_id is None:
            timer_id = self.ids.allocate()
        previous = self._entries.get(timer_id)
        if previous is not None:
            logger.debug("Timer %#x replaced before firing", timer_id)
            self.cancel_entry(previous)

        delay_ms = max(0.0, float(delay_ms))
        entry = TimerEntry(self, timer_id, delay_ms, self._generation)
        entry._handle = self.loop.call_later(delay_ms / 1000.0, self._fire, entry, callback, args)
        self._entries[timer_id] = entry
        return entry

    def cancel(self, timer_id: int) -> bool:
        entry = self._entries.get(timer_id)
        if entry is None:
            return False
        self.cancel_entry(entry)
        return True

    def cancel_entry(self, entry: TimerEntry) -> None:
        if self._entries.get(entry.id) is entry:
            del self._entries[entry.id]
        handle, entry._handle = entry._handle, None
        if handle is not None:
            handle.cancel()

    def clear(self) -> int:
        entries = list(self._entries.values())
        self._entries = {}
        self._generation += 1
        for entry in entries:
            handle, entry._handle = entry._handle, None
            if handle is not None:
                handle.cancel()
        return len(entries)

    def _fire(self, entry: TimerEntry, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        if entry._handle is None or entry.generation != self._generation:
            return
        entry._handle = None
        if self._entries.get(entry.id) is entry:
            del self._entries[entry.id]
        try:
            result = callback(*args)
        except Exception:
            logger.exception("Guide timer %#x failed", entry.id)
            return
        if asyncio.iscoroutine(result):
            result = self.loop.create_task(result)
        if asyncio.isfuture(result):
            self._track(entry.id, result)

    def _track(self, timer_id: int, future: asyncio.Future) -> None:
        self._effects.add(future)

        def _done(done: asyncio.Future) -> None:
            self._effects.discard(done)
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                logger.error("Guide timer %#x failed", timer_id, exc_info=exc)

        future.add_done_callback(_done)

    @property
    def effects_pending(self) -> int:
        return len(self._effects)
