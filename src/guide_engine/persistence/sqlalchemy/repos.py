from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from .models import Guide, GuideEntry


def _dump_action(action: Mapping[str, Any]) -> str:
    return json.dumps(dict(action), ensure_ascii=True, separators=(",", ":"))


class GuideRepo:
    def __init__(self, session: Session):
        self.session = session

    def get_by_zone(self, zone_id: int) -> Guide | None:
        stmt = select(Guide).where(Guide.zone_id == zone_id).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def create(self, zone_id: int, name: str = "") -> Guide:
        row = Guide(zone_id=zone_id, name=name)
        self.session.add(row)
        self.session.flush()
        return row

    def entries(self, guide_id: str) -> list[GuideEntry]:
        stmt = (
            select(GuideEntry)
            .where(GuideEntry.guide_id == guide_id)
            .order_by(GuideEntry.key, GuideEntry.position)
        )
        return list(self.session.execute(stmt).scalars().all())

    def load_mapping(self, zone_id: int) -> dict[str, list[Any]] | None:
        guide = self.get_by_zone(zone_id)
        if guide is None:
            return None
        table: dict[str, list[Any]] = {}
        for entry in self.entries(guide.id):
            table.setdefault(entry.key, []).append(json.loads(entry.action_json))
        return table

    def replace_entries(
        self,
        zone_id: int,
        table: Mapping[str, Sequence[Mapping[str, Any]]],
        name: str | None = None,
    ) -> Guide:
        guide = self.get_by_zone(zone_id)
        if guide is None:
            guide = self.create(zone_id, name or "")
        else:
            guide.revision += 1
            guide.updated_at = datetime.utcnow()
            if name is not None:
                guide.name = name
        self.session.execute(delete(GuideEntry).where(GuideEntry.guide_id == guide.id))
        for key, actions in table.items():
            for position, action in enumerate(actions):
                self.session.add(
                    GuideEntry(
                        guide_id=guide.id,
                        key=str(key),
                        position=position,
                        action_json=_dump_action(action),
                    )
                )
        self.session.flush()
        return guide

    def delete(self, zone_id: int) -> bool:
        guide = self.get_by_zone(zone_id)
        if guide is None:
            return False
        self.session.delete(guide)
        self.session.flush()
        return True
