from __future__ import annotations

import json
import logging
import types
from pathlib import Path
from typing import Any, Callable, Mapping

from ..core.errors import GuideLoadError, GuideNotFoundError
from ..core.guide import GuideTable

logger = logging.getLogger(__name__)


class FileGuideSource:
    """Guides stored as ``<zone>.json`` or ``<zone>.py`` files in one directory.

    Python guides expose a ``GUIDE`` mapping and may use callables for
    ``func`` actions. They are compiled from the file text on every read and never
    registered in ``sys.modules`` or the bytecode cache, so an edited file is
    seen on the next ``reload``.
    """

    def __init__(self, directory: str | Path, callbacks: Mapping[str, Callable[..., Any]] | None = None):
        self.directory = Path(directory)
        self._callbacks = dict(callbacks or {})
        self._cache: dict[int, GuideTable] = {}

    def load(self, zone_id: int) -> GuideTable:
        cached = self._cache.get(zone_id)
        if cached is not None:
            return cached
        return self.reload(zone_id)

    def reload(self, zone_id: int) -> GuideTable:
        self._cache.pop(zone_id, None)
        table = GuideTable.from_mapping(self._read(zone_id), zone_id=zone_id, callbacks=self._callbacks)
        self._cache[zone_id] = table
        logger.debug("Loaded guide for zone %s (%d keys)", zone_id, len(table))
        return table

    def invalidate(self, zone_id: int | None = None) -> None:
        if zone_id is None:
            self._cache.clear()
        else:
            self._cache.pop(zone_id, None)

    def _read(self, zone_id: int) -> Any:
        json_path = self.directory / f"{zone_id}.json"
        if json_path.is_file():
            try:
                return json.loads(json_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise GuideLoadError(zone_id, str(exc)) from exc

        py_path = self.directory / f"{zone_id}.py"
        if py_path.is_file():
            return self._exec_module(zone_id, py_path)

        raise GuideNotFoundError(zone_id)

    def _exec_module(self, zone_id: int, path: Path) -> Any:
        module = types.ModuleType(f"_guide_{zone_id}")
        module.__file__ = str(path)
        try:
            source = path.read_text(encoding="utf-8")
            exec(compile(source, str(path), "exec"), module.__dict__)
        except Exception as exc:
            raise GuideLoadError(zone_id, f"{type(exc).__name__}: {exc}") from exc
        guide = getattr(module, "GUIDE", None)
        if guide is None:
            raise GuideLoadError(zone_id, f"{path.name} does not define GUIDE")
        return guide
