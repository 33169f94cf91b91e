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
from .config import GuideConfig, load_config
from .dispatcher import EventDispatcher
from .engine import GuideEngine
from .errors import GuideError, GuideLoadError, GuideNotFoundError, InvalidActionError, UnknownDebugFlagError
from .executor import ActionExecutor
from .guide import GuideTable
from .ids import ENGINE_ID_FLOOR, IdAllocator
from .keys import KeyPrefix, resolve_key
from .ports import EffectSinkPort, EntityLookupPort, EventSourcePort, GuideSourcePort, SpeechPort, TimerLoopPort
from .speech import probe_speech
from .state import EngineState
from .timers import TimerEntry, TimerRegistry
from .types import AbnormalityEvent, BossGaugeEvent, EntityRef, EventKind, Location, SkillCastEvent, ZoneLoadEvent

__all__ = [
    "Action",
    "CallbackAction",
    "SoundAction",
    "SpawnAction",
    "StopTimerAction",
    "TextAction",
    "TextSubtype",
    "parse_action",
    "GuideConfig",
    "load_config",
    "EventDispatcher",
    "GuideEngine",
    "GuideError",
    "GuideLoadError",
    "GuideNotFoundError",
    "InvalidActionError",
    "UnknownDebugFlagError",
    "ActionExecutor",
    "GuideTable",
    "ENGINE_ID_FLOOR",
    "IdAllocator",
    "KeyPrefix",
    "resolve_key",
    "EffectSinkPort",
    "EntityLookupPort",
    "EventSourcePort",
    "GuideSourcePort",
    "SpeechPort",
    "TimerLoopPort",
    "probe_speech",
    "EngineState",
    "TimerEntry",
    "TimerRegistry",
    "AbnormalityEvent",
    "BossGaugeEvent",
    "EntityRef",
    "EventKind",
    "Location",
    "SkillCastEvent",
    "ZoneLoadEvent",
]
