from __future__ import annotations

import logging

from .config import GuideConfig
from .dispatcher import EventDispatcher
from .errors import UnknownDebugFlagError
from .executor import ActionExecutor
from .ports import EffectSinkPort, EntityLookupPort, EventSourcePort, GuideSourcePort, SpeechPort, TimerLoopPort
from .state import EngineState
from .timers import TimerRegistry

logger = logging.getLogger(__name__)


class GuideEngine:
    def __init__(
        self,
        config: GuideConfig,
        entities: EntityLookupPort,
        effects: EffectSinkPort,
        guides: GuideSourcePort,
        speech: SpeechPort | None = None,
        loop: TimerLoopPort | None = None,
    ):
        self.config = config
        self.state = EngineState(enabled=config.enabled, debug=dict(config.debug))
        self.timers = TimerRegistry(loop)
        self.executor = ActionExecutor(
            self.timers,
            effects,
            speech=speech,
            chat_name=config.chat_name,
            notification_channel=config.notification_channel,
        )
        self.dispatcher = EventDispatcher(self.state, entities, guides, self.executor, self.timers)

    def bind(self, source: EventSourcePort) -> None:
        self.dispatcher.bind(source)

    def command(self, arg: str | None = None, sub_arg: str | None = None) -> str:
        """Operator toggle: ``guide`` flips the module, ``guide debug <flag>`` flips a flag."""
        if arg == "debug":
            try:
                value = self.state.toggle_debug(sub_arg or "")
            except UnknownDebugFlagError:
                return f"Invalid sub command for debug mode. {sub_arg}"
            return f"Guide module debug({sub_arg}) mode has been {'enabled' if value else 'disabled'}."
        enabled = self.state.toggle_enabled()
        logger.info("Guide module %s", "enabled" if enabled else "disabled")
        return f"Guide module has been {'enabled' if enabled else 'disabled'}."
