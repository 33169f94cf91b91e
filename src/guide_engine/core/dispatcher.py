from __future__ import annotations

import logging
import math
from typing import Any

from .errors import GuideError, GuideNotFoundError
from .executor import ActionExecutor
from .keys import KeyPrefix, entity_class, resolve_key
from .ports import EntityLookupPort, EventSourcePort, GuideSourcePort
from .state import EngineState
from .timers import TimerEntry, TimerRegistry
from .types import AbnormalityEvent, BossGaugeEvent, EntityRef, EventKind, SkillCastEvent, ZoneLoadEvent

logger = logging.getLogger(__name__)


def health_percent(cur_hp: float, max_hp: float) -> int | None:
    if not max_hp or max_hp <= 0:
        return None
    return max(0, min(100, math.floor(cur_hp / max_hp * 100)))


class EventDispatcher:
    """Turns inbound events into scheduled guide actions."""

    def __init__(
        self,
        state: EngineState,
        entities: EntityLookupPort,
        guides: GuideSourcePort,
        executor: ActionExecutor,
        timers: TimerRegistry,
    ):
        self.state = state
        self._entities = entities
        self._guides = guides
        self._executor = executor
        self._timers = timers

    def bind(self, source: EventSourcePort) -> None:
        source.hook(EventKind.SKILL_CAST, self.on_skill_cast)
        source.hook(EventKind.ABNORMALITY_BEGIN, self.on_abnormality)
        source.hook(EventKind.ABNORMALITY_REFRESH, self.on_abnormality)
        source.hook(EventKind.BOSS_GAUGE, self.on_boss_gauge)
        source.hook(EventKind.ZONE_LOAD, self.on_zone_load)

    def handle_event(
        self,
        entity: EntityRef,
        event_id: int,
        category: str,
        prefix: KeyPrefix,
        debug: bool = False,
        speed: float = 1.0,
    ) -> list[TimerEntry]:
        key = resolve_key(entity, event_id, prefix)
        if debug:
            logger.info("%s: %s | Started by: %s | key: %s", category, event_id, entity_class(entity, prefix), key)
        actions = self.state.active_guide.get(key)
        if not actions:
            return []
        return self._executor.run(actions, entity, speed)

    def on_skill_cast(self, event: SkillCastEvent) -> list[TimerEntry]:
        if not self.state.active:
            return []
        entity = self._entities.lookup_mob(event.game_id)
        if entity is None:
            return []
        boss = entity.template_id % 1000 == 0
        debug = self.state.debugging("skill") or (boss and self.state.debugging("boss"))
        skill_id = self._entities.compute_skill_id(event)
        speed = event.speed if event.speed is not None else 1.0
        return self.handle_event(entity, skill_id, "Skill", KeyPrefix.SKILL, debug, speed)

    def on_abnormality(self, event: AbnormalityEvent) -> list[TimerEntry]:
        if not self.state.active:
            return []
        debug = self.state.debugging("abnormal")
        empty = self._entities.empty_source()
        source = empty if event.source is None else event.source
        on_me = self._entities.is_local_player(event.target)
        scheduled: list[TimerEntry] = []

        source_entity = self._entities.lookup_mob(source)
        if source_entity is not None and on_me:
            scheduled += self.handle_event(
                source_entity, event.id, "Abnormality", KeyPrefix.ABNORMALITY_FROM_MOB, debug
            )
        if on_me and source == empty:
            scheduled += self.handle_event(
                EntityRef.ZERO, event.id, "Abnormality", KeyPrefix.ABNORMALITY_FROM_SERVER, debug
            )
        target_entity = self._entities.lookup_mob(event.target)
        if target_entity is not None:
            scheduled += self.handle_event(
                target_entity, event.id, "Abnormality", KeyPrefix.ABNORMALITY_ON_MOB, debug
            )
        return scheduled

    def on_boss_gauge(self, event: BossGaugeEvent) -> list[TimerEntry]:
        if not self.state.active:
            return []
        entity = self._entities.lookup_mob(event.game_id)
        if entity is None:
            return []
        percent = health_percent(event.cur_hp, event.max_hp)
        if percent is None:
            return []
        return self.handle_event(entity, percent, "Health", KeyPrefix.HEALTH, self.state.debugging("hp"))

    def on_zone_load(self, event: ZoneLoadEvent) -> bool:
        cleared = self._timers.clear()
        if self.state.debugging():
            logger.info("Entered zone: %s (%d timers cleared)", event.zone, cleared)
        self.state.install_guide(event.zone, None)

        try:
            guide = self._guides.reload(event.zone)
        except GuideNotFoundError:
            logger.debug("No guide for zone %s", event.zone)
            guide = None
        except GuideError as exc:
            logger.warning("Guide for zone %s not loaded: %s", event.zone, exc)
            guide = None
        self.state.install_guide(event.zone, guide)
        return self.state.guide_found
