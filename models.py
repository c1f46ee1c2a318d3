from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class GradeRun(Base):
    __tablename__ = "grade_runs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    total: Mapped[int] = mapped_column(Integer)
    correct: Mapped[int] = mapped_column(Integer)
    wrong: Mapped[int] = mapped_column(Integer)
    correct_ids: Mapped[list] = mapped_column(JSON)
    wrong_ids: Mapped[list] = mapped_column(JSON)
    items: Mapped[list] = mapped_column(JSON)  # per-pair results
    duration_ms: Mapped[int] = mapped_column(Integer, nullable=True)
