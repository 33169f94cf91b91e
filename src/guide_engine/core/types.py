from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Optional


class EventKind(str, Enum):
    SKILL_CAST = "skill_cast"
    ABNORMALITY_BEGIN = "abnormality_begin"
    ABNORMALITY_REFRESH = "abnormality_refresh"
    BOSS_GAUGE = "boss_gauge"
    ZONE_LOAD = "zone_load"


@dataclass(frozen=True)
class Location:
    x: float
    y: float
    z: float
    w: float = 0.0

    def offset(self, angle: float = 0.0, distance: float = 0.0) -> "Location":
        """Rotate the heading by ``angle`` radians, then step ``distance`` along it."""
        w = self.w + angle
        return replace(
            self,
            x=self.x + math.cos(w) * distance,
            y=self.y + math.sin(w) * distance,
            w=w,
        )

    @classmethod
    def from_value(cls, raw: Any) -> "Location":
        if isinstance(raw, Location):
            return raw
        if isinstance(raw, dict):
            return cls(
                x=float(raw.get("x", 0.0)),
                y=float(raw.get("y", 0.0)),
                z=float(raw.get("z", 0.0)),
                w=float(raw.get("w", 0.0)),
            )
        if isinstance(raw, (list, tuple)) and len(raw) in (3, 4):
            return cls(*(float(v) for v in raw))
        raise ValueError(f"not a location: {raw!r}")


@dataclass(frozen=True)
class EntityRef:
    hunting_zone_id: int
    template_id: int
    location: Optional[Location] = None

    ZERO: ClassVar["EntityRef"]


EntityRef.ZERO = EntityRef(hunting_zone_id=0, template_id=0)


@dataclass
class SkillCastEvent:
    game_id: Any
    skill: Any
    speed: float = 1.0


@dataclass
class AbnormalityEvent:
    target: Any
    id: int
    source: Any = None


@dataclass
class BossGaugeEvent:
    game_id: Any
    cur_hp: float
    max_hp: float


@dataclass
class ZoneLoadEvent:
    zone: int
