# primatrain/schemas/grading.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from grading import PairResult


class GradeRequest(BaseModel):
    exercises: List[str]
    answers: List[str]
    # Client may send it, but server computes its own duration anyway.
    duration_ms: Optional[int] = None


class GradeResponse(BaseModel):
    ok: bool
    total: int
    correct: List[int]
    wrong: List[int]
    accuracy: float
    results: List[PairResult]
    report: str
    run_id: Optional[int] = None
    duration_ms: int
