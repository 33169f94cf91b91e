from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Guide(TimestampMixin, Base):
    __tablename__ = "ge_guides"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    zone_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    entries: Mapped[list["GuideEntry"]] = relationship(
        back_populates="guide",
        cascade="all, delete-orphan",
    )


class GuideEntry(Base):
    __tablename__ = "ge_guide_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guide_id: Mapped[str] = mapped_column(String(36), ForeignKey("ge_guides.id", ondelete="CASCADE"), nullable=False)
    key: Mapped[str] = mapped_column(String(128), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    action_json: Mapped[str] = mapped_column(Text, nullable=False)

    guide: Mapped[Guide] = relationship(back_populates="entries")

    __table_args__ = (
        UniqueConstraint("guide_id", "key", "position", name="uq_ge_guide_entry_key_position"),
    )


Index("ix_ge_guide_entry_guide_key", GuideEntry.guide_id, GuideEntry.key)
