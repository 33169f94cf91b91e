from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence


class GuideRepo(Protocol):
    def get_by_zone(self, zone_id: int): ...
    def create(self, zone_id: int, name: str = ""): ...
    def entries(self, guide_id: str): ...
    def load_mapping(self, zone_id: int) -> dict[str, list[Any]] | None: ...
    def replace_entries(
        self,
        zone_id: int,
        table: Mapping[str, Sequence[Mapping[str, Any]]],
        name: str | None = None,
    ): ...
    def delete(self, zone_id: int) -> bool: ...


class UnitOfWork(Protocol):
    guides: GuideRepo

    def commit(self) -> None: ...
    def rollback(self) -> None: ...

    def __enter__(self) -> "UnitOfWork": ...
    def __exit__(self, exc_type, exc, tb) -> None: ...
