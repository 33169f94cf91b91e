from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from .actions import (
    Action,
    CallbackAction,
    SoundAction,
    SpawnAction,
    StopTimerAction,
    TextAction,
    TextSubtype,
    parse_action,
)
from .errors import InvalidActionError
from .ports import EffectSinkPort, SpeechPort
from .timers import TimerEntry, TimerRegistry
from .types import EntityRef

logger = logging.getLogger(__name__)


def normalize_speed(speed: Any) -> float:
    try:
        value = float(speed)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value


def scaled_delay(delay: float | None, speed: float) -> float:
    return float(delay or 0) / speed


class ActionExecutor:
    def __init__(
        self,
        timers: TimerRegistry,
        effects: EffectSinkPort,
        *,
        speech: SpeechPort | None = None,
        chat_name: str = "Guide",
        notification_channel: int = 21,
    ):
        self._timers = timers
        self._effects = effects
        self._speech = speech
        self._chat_name = chat_name
        self._notification_channel = notification_channel

    def run(self, actions: Iterable[Action], entity: EntityRef, speed: float = 1.0) -> list[TimerEntry]:
        """Schedule a matched action sequence in source order."""
        speed = normalize_speed(speed)
        scheduled: list[TimerEntry] = []
        for action in actions:
            scheduled.extend(self.execute(action, entity, speed))
        return scheduled

    def execute(self, action: Action, entity: EntityRef, speed: float = 1.0) -> list[TimerEntry]:
        speed = normalize_speed(speed)
        if isinstance(action, SpawnAction):
            return self.spawn(action, entity, speed)
        if isinstance(action, TextAction):
            return self.text(action, entity, speed)
        if isinstance(action, SoundAction):
            return self.sound(action, entity, speed)
        if isinstance(action, StopTimerAction):
            self.stop_timer(action)
            return []
        if isinstance(action, CallbackAction):
            return self.callback(action, entity, speed)
        logger.warning("An action has invalid type: %r", action)
        return []

    def spawn(self, action: SpawnAction, entity: EntityRef, speed: float = 1.0) -> list[TimerEntry]:
        if not action.item_id:
            logger.warning("Spawn action needs an id")
            return []
        if not action.sub_delay:
            logger.warning("Spawn action needs a sub_delay")
            return []
        base = entity.location if entity is not None else None
        if action.position is not None:
            start = action.position
            if base is not None:
                start = start.offset(base.w - start.w)
        elif base is not None:
            start = base
        else:
            logger.warning("Spawn action %s has no position and entity has no location", action.item_id)
            return []

        location = start.offset(action.offset or 0.0, action.distance or 0.0)
        game_id = self._timers.ids.allocate()
        spawn_entry = self._timers.schedule(
            scaled_delay(action.delay, speed),
            self._effects.spawn_collection,
            game_id,
            action.item_id,
            location,
            timer_id=game_id,
        )
        despawn_entry = self._timers.schedule(
            scaled_delay(action.sub_delay, speed),
            self._effects.despawn_collection,
            game_id,
        )
        return [spawn_entry, despawn_entry]

    def text(
        self,
        action: TextAction | Mapping[str, Any],
        entity: EntityRef | None = None,
        speed: float = 1.0,
    ) -> list[TimerEntry]:
        if isinstance(action, Mapping):
            try:
                action = parse_action({"type": "text", **action})
            except InvalidActionError as exc:
                logger.warning("Text action is invalid: %s", exc)
                return []
        speed = normalize_speed(speed)
        if action.subtype is None:
            logger.warning("Text action needs a sub_type")
            return []
        if not action.message:
            logger.warning("Text action needs a message")
            return []

        delay = scaled_delay(action.delay, speed)
        if action.subtype is TextSubtype.MESSAGE:
            entry = self._timers.schedule(delay, self._effects.show_event_message, action.message, timer_id=action.id)
        elif action.subtype is TextSubtype.NOTIFICATION:
            entry = self._timers.schedule(
                delay,
                self._effects.show_chat_notification,
                self._notification_channel,
                self._chat_name,
                action.message,
                timer_id=action.id,
            )
        else:
            if self._speech is None:
                return []
            entry = self._timers.schedule(delay, self._speak, action.message, timer_id=action.id)
        return [entry]

    def sound(self, action: SoundAction, entity: EntityRef | None = None, speed: float = 1.0) -> list[TimerEntry]:
        if not action.id:
            logger.warning("Sound action needs an id")
            return []
        entry = self._timers.schedule(
            scaled_delay(action.delay, speed),
            self._effects.play_sound,
            action.id,
            timer_id=action.id,
        )
        return [entry]

    def stop_timer(self, action: StopTimerAction) -> bool:
        if not action.id:
            logger.warning("Stop timer action needs an id")
            return False
        if not self._timers.cancel(action.id):
            logger.warning("There isn't a timer with id %s active", action.id)
            return False
        return True

    def callback(self, action: CallbackAction, entity: EntityRef, speed: float = 1.0) -> list[TimerEntry]:
        if action.fn is None:
            logger.warning("Callback action needs a func")
            return []
        entry = self._timers.schedule(
            scaled_delay(action.delay, speed),
            action.fn,
            self.text,
            action,
            entity,
            timer_id=action.id,
        )
        return [entry]

    def _speak(self, message: str):
        if self._speech is None:
            return None
        return self._timers.loop.run_in_executor(None, self._speech.speak, message)
