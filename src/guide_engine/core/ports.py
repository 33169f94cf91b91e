from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Hashable, Protocol

from .guide import GuideTable
from .types import EntityRef, EventKind, Location


class EventSourcePort(Protocol):
    def hook(self, kind: EventKind, handler: Callable[[Any], None]) -> None:
        ...


class EntityLookupPort(Protocol):
    def lookup_mob(self, entity_id: Any) -> EntityRef | None:
        ...

    def is_local_player(self, entity_id: Any) -> bool:
        ...

    def empty_source(self) -> Hashable:
        ...

    def compute_skill_id(self, event: Any) -> int:
        ...


class EffectSinkPort(Protocol):
    def spawn_collection(self, game_id: int, item_id: int, location: Location) -> Awaitable[None] | None:
        ...

    def despawn_collection(self, game_id: int) -> Awaitable[None] | None:
        ...

    def play_sound(self, sound_id: int) -> Awaitable[None] | None:
        ...

    def show_event_message(self, message: str) -> Awaitable[None] | None:
        ...

    def show_chat_notification(self, channel: int, author_name: str, message: str) -> Awaitable[None] | None:
        ...


class GuideSourcePort(Protocol):
    def load(self, zone_id: int) -> GuideTable:
        ...

    def reload(self, zone_id: int) -> GuideTable:
        ...


class SpeechPort(Protocol):
    def speak(self, text: str) -> None:
        ...


class TimerLoopPort(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        ...

    def create_task(self, coro: Any) -> Any:
        ...

    def run_in_executor(self, executor: Any, func: Callable[..., Any], *args: Any) -> Any:
        ...
