from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import GuideLoadError, GuideNotFoundError
from ..core.guide import GuideTable
from ..persistence.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyGuideSource:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        callbacks: Mapping[str, Callable[..., Any]] | None = None,
    ):
        self._uow_factory = uow_factory
        self._callbacks = dict(callbacks or {})
        self._cache: dict[int, GuideTable] = {}

    def load(self, zone_id: int) -> GuideTable:
        cached = self._cache.get(zone_id)
        if cached is not None:
            return cached
        return self.reload(zone_id)

    def reload(self, zone_id: int) -> GuideTable:
        self._cache.pop(zone_id, None)
        try:
            with self._uow_factory() as uow:
                raw = uow.guides.load_mapping(zone_id)
        except SQLAlchemyError as exc:
            raise GuideLoadError(zone_id, f"guide store unavailable: {exc}") from exc
        except ValueError as exc:
            raise GuideLoadError(zone_id, f"stored action is not valid JSON: {exc}") from exc
        if raw is None:
            raise GuideNotFoundError(zone_id)
        table = GuideTable.from_mapping(raw, zone_id=zone_id, callbacks=self._callbacks)
        self._cache[zone_id] = table
        return table

    def publish(
        self,
        zone_id: int,
        table: Mapping[str, Sequence[Mapping[str, Any]]],
        name: str | None = None,
    ) -> int:
        """Replace the stored guide for ``zone_id`` and return its new revision."""
        GuideTable.from_mapping(table, zone_id=zone_id, callbacks=self._callbacks)
        with self._uow_factory() as uow:
            guide = uow.guides.replace_entries(zone_id, table, name=name)
            revision = guide.revision
            uow.commit()
        self._cache.pop(zone_id, None)
        logger.info("Published guide for zone %s at revision %d", zone_id, revision)
        return revision
