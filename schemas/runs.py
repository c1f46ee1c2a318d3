from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class GradeRunOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    total: int
    correct: int
    wrong: int
    correct_ids: list[int] = []
    wrong_ids: list[int] = []
    duration_ms: int | None = None
    # usually excluded in list views
    items: list[Any] | None = None
