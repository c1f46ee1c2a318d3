from __future__ import annotations

import re
import time
from typing import Optional

from fastapi import APIRouter

from config import MAX_ATTEMPTS
from errors import DivisionByZero, FormatError, ValidationFailure
from expressions import ExpressionEngine, evaluate as evaluate_expr, validate as validate_expr
from schemas.exercises import (
    EvaluateRequest,
    EvaluateResponse,
    GenerateRequest,
    GenerateResponse,
)

# --- Input validation -------------------------------------------------------------
LEN_LIMIT = 100
_INVALID_CHARS_MSG = (
    "Only exercise expressions using digits, spaces, + - × ÷ * ' / = and parentheses are allowed."
)
_ZERO_DIVISION_MSG = "Expression divides by zero."
_ALLOWED_RE = re.compile(r"^[0-9+\-−×÷*'/()=\s]{1,100}$")


def _validate_expr_text(s: str) -> Optional[str]:
    if s is None or not isinstance(s, str) or not s.strip():
        return "Expression required."
    if len(s) > LEN_LIMIT:
        return "Expression too long (> 100)."
    if _ALLOWED_RE.fullmatch(s) is None:
        return _INVALID_CHARS_MSG
    return None


router = APIRouter(tags=["exercises"])


@router.post("/generate", response_model=GenerateResponse)
def generate(req: GenerateRequest):
    t0 = time.perf_counter()

    engine = ExpressionEngine(req.range, seed=req.seed)
    found = engine.generate_many(req.count, req.max_attempts or MAX_ATTEMPTS)

    exercises = [f"{i}. {ex.expression}" for i, ex in enumerate(found, 1)]
    answers = [f"{i}. {ex.answer}" for i, ex in enumerate(found, 1)]

    return {
        "ok": len(found) == req.count,
        "requested": req.count,
        "generated": len(found),
        "exercises": exercises,
        "answers": answers,
        "duration_ms": int(round((time.perf_counter() - t0) * 1000)),
    }


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: EvaluateRequest):
    err = _validate_expr_text(req.expr)
    if err:
        return {"ok": False, "value": None, "feedback": err}
    text = req.expr.replace("=", "")
    try:
        val = validate_expr(text) if req.strict else evaluate_expr(text)
        return {"ok": True, "value": val.format()}
    except DivisionByZero:
        return {"ok": False, "value": None, "feedback": _ZERO_DIVISION_MSG}
    except (FormatError, ValidationFailure) as e:
        return {"ok": False, "value": None, "feedback": str(e)}
