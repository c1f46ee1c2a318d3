# primatrain/schemas/exercises.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from config import ATTEMPT_BUDGET, MAX_ATTEMPTS, MAX_EXERCISES

# ---------- Generate ----------


class GenerateRequest(BaseModel):
    count: int = Field(ge=1, le=MAX_EXERCISES)
    range: int = Field(ge=2, description="Operands are below this bound.")
    seed: Optional[int] = None
    max_attempts: Optional[int] = Field(default=None, ge=1, le=MAX_ATTEMPTS)

    @model_validator(mode="after")
    def check_attempt_budget(self):
        attempts = self.max_attempts or MAX_ATTEMPTS
        if self.count * attempts > ATTEMPT_BUDGET:
            raise ValueError(
                f"count * max_attempts must not exceed {ATTEMPT_BUDGET} (got {self.count * attempts})."
            )
        return self


class GenerateResponse(BaseModel):
    ok: bool
    requested: int
    generated: int
    exercises: List[str]
    answers: List[str]
    duration_ms: int


# ---------- Evaluate ----------


class EvaluateRequest(BaseModel):
    expr: str
    # If true, also enforce the generation rules (no negative subtraction,
    # proper-fraction division).
    strict: bool = False


class EvaluateResponse(BaseModel):
    ok: bool
    value: Optional[str] = None
    feedback: Optional[str] = None
