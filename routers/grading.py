from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from db import SessionLocal
from grading import GradeReport, grade as grade_batch
from models import GradeRun
from schemas.grading import GradeRequest, GradeResponse

logger = logging.getLogger("primatrain.api")

router = APIRouter(tags=["grading"])


def _save_run(report: GradeReport, duration_ms: int) -> Optional[int]:
    """Persist a graded batch; a database failure never fails the grading itself."""
    try:
        with SessionLocal() as db:
            run = GradeRun(
                total=report.total,
                correct=len(report.correct),
                wrong=len(report.wrong),
                correct_ids=report.correct,
                wrong_ids=report.wrong,
                items=[r.model_dump() for r in report.results],
                duration_ms=duration_ms,
            )
            db.add(run)
            db.commit()
            db.refresh(run)
            return run.id
    except SQLAlchemyError:
        logger.exception("could not save grade run")
        return None


@router.post("/grade", response_model=GradeResponse)
def grade(req: GradeRequest):
    t0 = time.perf_counter()

    # Blank lines carry no exercise; drop them before pairing by position.
    exercises = [line for line in req.exercises if line.strip()]
    answers = [line for line in req.answers if line.strip()]
    report = grade_batch(exercises, answers)

    measured_ms = int(round((time.perf_counter() - t0) * 1000))
    duration_ms = req.duration_ms if req.duration_ms is not None else measured_ms
    run_id = _save_run(report, duration_ms)

    return {
        "ok": True,
        "total": report.total,
        "correct": report.correct,
        "wrong": report.wrong,
        "accuracy": report.accuracy,
        "results": report.results,
        "report": report.format(),
        "run_id": run_id,
        "duration_ms": duration_ms,
    }
