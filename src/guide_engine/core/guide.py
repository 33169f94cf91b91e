from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from .actions import Action, parse_action
from .errors import GuideLoadError, InvalidActionError

logger = logging.getLogger(__name__)


class GuideTable(Mapping[str, tuple[Action, ...]]):
    """Read-only mapping of lookup key to the ordered actions it triggers."""

    __slots__ = ("_entries", "zone_id")

    def __init__(self, entries: Mapping[str, tuple[Action, ...]] | None = None, zone_id: int | None = None):
        self._entries = MappingProxyType(dict(entries or {}))
        self.zone_id = zone_id

    @classmethod
    def empty(cls) -> "GuideTable":
        return cls()

    @classmethod
    def from_mapping(
        cls,
        raw: Any,
        zone_id: int | None = None,
        callbacks: Mapping[str, Callable[..., Any]] | None = None,
    ) -> "GuideTable":
        if not isinstance(raw, Mapping):
            raise GuideLoadError(zone_id, f"guide must be a mapping, got {type(raw).__name__}")
        entries: dict[str, tuple[Action, ...]] = {}
        for key, actions in raw.items():
            if not isinstance(actions, (list, tuple)):
                raise GuideLoadError(zone_id, f"entry {key!r} must be a list of actions")
            parsed: list[Action] = []
            for position, item in enumerate(actions):
                try:
                    parsed.append(parse_action(item, callbacks))
                except InvalidActionError as exc:
                    logger.warning("Guide %s: dropping action %s[%d]: %s", zone_id, key, position, exc)
            entries[str(key)] = tuple(parsed)
        return cls(entries, zone_id=zone_id)

    def __getitem__(self, key: str) -> tuple[Action, ...]:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"GuideTable(zone_id={self.zone_id!r}, keys={len(self._entries)})"
