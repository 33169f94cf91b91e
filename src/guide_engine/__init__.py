from .bootstrap import create_guide_engine
from .core.actions import CallbackAction, SoundAction, SpawnAction, StopTimerAction, TextAction, TextSubtype
from .core.config import GuideConfig, load_config
from .core.engine import GuideEngine
from .core.guide import GuideTable
from .core.keys import KeyPrefix, resolve_key
from .core.types import AbnormalityEvent, BossGaugeEvent, EntityRef, EventKind, Location, SkillCastEvent, ZoneLoadEvent
from .guides import FileGuideSource, SQLAlchemyGuideSource

__all__ = [
    "create_guide_engine",
    "GuideEngine",
    "GuideConfig",
    "load_config",
    "GuideTable",
    "KeyPrefix",
    "resolve_key",
    "CallbackAction",
    "SoundAction",
    "SpawnAction",
    "StopTimerAction",
    "TextAction",
    "TextSubtype",
    "AbnormalityEvent",
    "BossGaugeEvent",
    "EntityRef",
    "EventKind",
    "Location",
    "SkillCastEvent",
    "ZoneLoadEvent",
    "FileGuideSource",
    "SQLAlchemyGuideSource",
]
