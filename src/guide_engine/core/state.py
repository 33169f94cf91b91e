from __future__ import annotations

from dataclasses import dataclass, field

from .errors import UnknownDebugFlagError
from .guide import GuideTable

DEFAULT_DEBUG_FLAGS = ("debug", "skill", "boss", "abnormal", "hp")


def default_debug_flags() -> dict[str, bool]:
    return {flag: False for flag in DEFAULT_DEBUG_FLAGS}


@dataclass
class EngineState:
    enabled: bool = True
    debug: dict[str, bool] = field(default_factory=default_debug_flags)
    active_guide: GuideTable = field(default_factory=GuideTable.empty)
    guide_found: bool = False
    zone_id: int | None = None

    def set_enabled(self, enabled: bool) -> bool:
        self.enabled = bool(enabled)
        return self.enabled

    def toggle_enabled(self) -> bool:
        return self.set_enabled(not self.enabled)

    def set_debug(self, flag: str, value: bool) -> bool:
        if flag not in self.debug:
            raise UnknownDebugFlagError(flag)
        self.debug[flag] = bool(value)
        return self.debug[flag]

    def toggle_debug(self, flag: str) -> bool:
        if flag not in self.debug:
            raise UnknownDebugFlagError(flag)
        return self.set_debug(flag, not self.debug[flag])

    def debugging(self, *flags: str) -> bool:
        return bool(self.debug.get("debug")) or any(self.debug.get(flag) for flag in flags)

    @property
    def active(self) -> bool:
        return self.enabled and self.guide_found

    def install_guide(self, zone_id: int, guide: GuideTable | None) -> None:
        self.zone_id = zone_id
        self.active_guide = guide if guide is not None else GuideTable.empty()
        self.guide_found = guide is not None
