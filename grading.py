# primatrain/grading.py
from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from errors import DivisionByZero, FormatError, ValidationFailure
from expressions import evaluate, validate
from fraction import ExactFraction

logger = logging.getLogger("primatrain.grading")

_ORDINAL_RE = re.compile(r"^[0-9]+\.\s+(.*)$", re.DOTALL)

_MISSING_EXERCISE_MSG = "Exercise line is empty."
_MISSING_ANSWER_MSG = "Answer required."
_BAD_EXERCISE_MSG = "Exercise could not be read: {err}"
_BAD_ANSWER_MSG = "Answer is not a number (use 3, 3/4 or 1'3/4)."
_ZERO_DIVISION_MSG = "Exercise divides by zero."
_RULE_BREAK_MSG = "Exercise breaks the generation rules ({err}); graded as written."


class PairResult(BaseModel):
    index: int
    correct: bool
    expected: Optional[str] = None
    answer: Optional[str] = None
    feedback: str = ""


class GradeReport(BaseModel):
    correct: List[int] = Field(default_factory=list)
    wrong: List[int] = Field(default_factory=list)
    results: List[PairResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.correct) + len(self.wrong)

    @property
    def accuracy(self) -> float:
        if not self.total:
            return 0.0
        return round(len(self.correct) / self.total * 100, 1)

    def format(self) -> str:
        """Grade.txt body."""
        return (
            f"Correct: {len(self.correct)} ({_join(self.correct)})\n"
            f"Wrong: {len(self.wrong)} ({_join(self.wrong)})\n"
        )


def _join(ids: Sequence[int]) -> str:
    return ", ".join(str(i) for i in ids)


def _strip_ordinal(line: str) -> str:
    m = _ORDINAL_RE.match(line)
    return m.group(1) if m else line


def parse_exercise_line(line: Optional[str]) -> Optional[str]:
    """'1. 3/4 + 1/2 =' -> '3/4 + 1/2'; None for a blank line."""
    if line is None or not line.strip():
        return None
    body = _strip_ordinal(line.strip())
    return body.replace("=", "").strip()


def parse_answer_line(line: Optional[str]) -> Optional[str]:
    """'1. 1'1/4' -> "1'1/4"; None for a blank line."""
    if line is None or not line.strip():
        return None
    return _strip_ordinal(line.strip()).strip()


def grade_pair(index: int, exercise_line: Optional[str], answer_line: Optional[str]) -> PairResult:
    exercise = parse_exercise_line(exercise_line)
    answer = parse_answer_line(answer_line)

    if exercise is None:
        return PairResult(index=index, correct=False, answer=answer, feedback=_MISSING_EXERCISE_MSG)

    try:
        expected = evaluate(exercise)
    except DivisionByZero:
        return PairResult(index=index, correct=False, answer=answer, feedback=_ZERO_DIVISION_MSG)
    except FormatError as e:
        return PairResult(
            index=index, correct=False, answer=answer, feedback=_BAD_EXERCISE_MSG.format(err=e)
        )
    expected_str = expected.format()

    # evaluate() folds an impossible subtraction to its magnitude; grade the
    # value as written but say so.
    feedback = ""
    try:
        validate(exercise)
    except ValidationFailure as e:
        feedback = _RULE_BREAK_MSG.format(err=e)
        logger.warning("exercise %d: %s", index, feedback)

    if answer is None:
        return PairResult(
            index=index, correct=False, expected=expected_str, feedback=_MISSING_ANSWER_MSG
        )

    try:
        given = ExactFraction.parse(answer)
    except (FormatError, DivisionByZero):
        return PairResult(
            index=index,
            correct=False,
            expected=expected_str,
            answer=answer,
            feedback=_BAD_ANSWER_MSG,
        )

    correct = given == expected
    if not correct:
        logger.info("exercise %d wrong: answered %s, expected %s", index, answer, expected_str)
    return PairResult(
        index=index, correct=correct, expected=expected_str, answer=answer, feedback=feedback
    )


def grade(exercises: Sequence[str], answers: Sequence[str]) -> GradeReport:
    """
    Pair exercises and answers by position (1-based) up to the shorter list.
    A pair that cannot be evaluated is wrong; the batch always completes.
    """
    report = GradeReport()
    total = min(len(exercises), len(answers))
    for i in range(total):
        res = grade_pair(i + 1, exercises[i], answers[i])
        report.results.append(res)
        (report.correct if res.correct else report.wrong).append(res.index)
    return report
