from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Mapping, Optional, Union

from .errors import InvalidActionError
from .ids import is_author_id
from .types import Location


class TextSubtype(str, Enum):
    MESSAGE = "message"
    NOTIFICATION = "notification"
    SPEECH = "speech"


@dataclass(frozen=True)
class SpawnAction:
    tag: ClassVar[str] = "spawn"

    item_id: Optional[int] = None
    sub_delay: Optional[float] = None
    delay: float = 0
    offset: float = 0.0
    distance: float = 0.0
    position: Optional[Location] = None


@dataclass(frozen=True)
class TextAction:
    tag: ClassVar[str] = "text"

    subtype: Optional[TextSubtype] = None
    message: Optional[str] = None
    delay: float = 0
    id: Optional[int] = None


@dataclass(frozen=True)
class SoundAction:
    tag: ClassVar[str] = "sound"

    id: Optional[int] = None
    delay: float = 0


@dataclass(frozen=True)
class StopTimerAction:
    tag: ClassVar[str] = "stop_timer"

    id: Optional[int] = None


@dataclass(frozen=True)
class CallbackAction:
    tag: ClassVar[str] = "func"

    fn: Optional[Callable[..., Any]] = None
    delay: float = 0
    id: Optional[int] = None


Action = Union[SpawnAction, TextAction, SoundAction, StopTimerAction, CallbackAction]

ACTION_TYPES: dict[str, type] = {
    cls.tag: cls for cls in (SpawnAction, TextAction, SoundAction, StopTimerAction, CallbackAction)
}
ACTION_TYPES_TUPLE = tuple(ACTION_TYPES.values())


def _number(raw: Mapping[str, Any], key: str, default: Any = None) -> Any:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidActionError(f"{key} must be a number, got {value!r}")
    return value


def _timer_id(raw: Mapping[str, Any]) -> int | None:
    value = _number(raw, "id")
    if not value:
        return None
    if not isinstance(value, int) or not is_author_id(value):
        raise InvalidActionError(f"timer id {value!r} is outside the author id range")
    return value


def _callback(raw: Mapping[str, Any], callbacks: Mapping[str, Callable[..., Any]] | None):
    value = raw.get("func")
    if value is None or callable(value):
        return value
    if isinstance(value, str):
        fn = (callbacks or {}).get(value)
        if fn is None:
            raise InvalidActionError(f"unknown callback {value!r}")
        return fn
    raise InvalidActionError(f"func must be callable or a callback name, got {value!r}")


def parse_action(
    raw: Any,
    callbacks: Mapping[str, Callable[..., Any]] | None = None,
) -> Action:
    """Build an Action from one authored guide entry.

    Unknown tags and sub types fail here. Fields a tag needs at execution
    time are left optional so the executor can report them per firing.
    """
    if isinstance(raw, ACTION_TYPES_TUPLE):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidActionError(f"action must be a mapping, got {type(raw).__name__}")

    tag = raw.get("type")
    if not isinstance(tag, str) or tag not in ACTION_TYPES:
        raise InvalidActionError(f"invalid action type {tag!r}")

    if tag == "spawn":
        pos = raw.get("pos")
        try:
            position = Location.from_value(pos) if pos is not None else None
        except (TypeError, ValueError) as exc:
            raise InvalidActionError(str(exc)) from exc
        item_id = _number(raw, "id")
        return SpawnAction(
            item_id=item_id or None,
            sub_delay=_number(raw, "sub_delay"),
            delay=_number(raw, "delay", 0),
            offset=_number(raw, "offset", 0.0),
            distance=_number(raw, "distance", 0.0),
            position=position,
        )

    if tag == "text":
        sub_type = raw.get("sub_type")
        subtype = None
        if sub_type is not None:
            try:
                subtype = TextSubtype(sub_type)
            except ValueError as exc:
                raise InvalidActionError(f"invalid sub_type for text action: {sub_type!r}") from exc
        message = raw.get("message")
        return TextAction(
            subtype=subtype,
            message=str(message) if message else None,
            delay=_number(raw, "delay", 0),
            id=_timer_id(raw),
        )

    if tag == "sound":
        return SoundAction(id=_timer_id(raw), delay=_number(raw, "delay", 0))

    if tag == "stop_timer":
        return StopTimerAction(id=_timer_id(raw))

    return CallbackAction(
        fn=_callback(raw, callbacks),
        delay=_number(raw, "delay", 0),
        id=_timer_id(raw),
    )

