from __future__ import annotations

from enum import Enum

from .types import EntityRef


class KeyPrefix(str, Enum):
    SKILL = "s"
    ABNORMALITY_FROM_MOB = "am"
    ABNORMALITY_FROM_SERVER = "ae"
    ABNORMALITY_ON_MOB = "ab"
    HEALTH = "h"


def entity_class(entity: EntityRef | None, prefix: KeyPrefix | str) -> str:
    entity = entity or EntityRef.ZERO
    prefix = prefix.value if isinstance(prefix, KeyPrefix) else str(prefix)
    return f"{prefix}-{int(entity.hunting_zone_id)}-{int(entity.template_id)}"


def resolve_key(entity: EntityRef | None, event_id: int, prefix: KeyPrefix | str) -> str:
    """Return ``prefix-huntingZoneId-templateId-eventId``.

    A missing entity stands for the server itself and keys as zone 0,
    template 0.
    """
    return f"{entity_class(entity, prefix)}-{int(event_id)}"
