"""
Command-line front end.

    primatrain -n 10 -r 10              -> Exercises.txt, Answers.txt
    primatrain -e Exercises.txt -a Answers.txt  -> Grade.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from config import LOG_LEVEL, MAX_ATTEMPTS, MAX_EXERCISES
from expressions import ExpressionEngine
from grading import grade

logger = logging.getLogger("primatrain.cli")

EXERCISES_FILE = "Exercises.txt"
ANSWERS_FILE = "Answers.txt"
GRADE_FILE = "Grade.txt"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primatrain",
        description="Elementary arithmetic exercise generator and grader.",
        epilog="Generate with -n/-r, or grade with -e/-a.",
    )
    parser.add_argument("-n", type=int, metavar="COUNT", help="number of exercises to generate")
    parser.add_argument("-r", type=int, metavar="RANGE", help="operands are below this bound")
    parser.add_argument("-e", metavar="EXERCISEFILE", help="exercise file to grade")
    parser.add_argument("-a", metavar="ANSWERFILE", help="answer file to grade")
    parser.add_argument("--seed", type=int, default=None, help="fix the random source")
    parser.add_argument(
        "--out-dir", default=".", help="directory the output files are written to"
    )
    return parser


def read_lines(path: Path) -> List[str]:
    """Non-blank lines of a UTF-8 text file."""
    with path.open("r", encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


def write_lines(path: Path, lines: Sequence[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def generate_files(count: int, range_bound: int, out_dir: Path, seed: Optional[int] = None) -> int:
    engine = ExpressionEngine(range_bound, seed=seed)
    found = engine.generate_many(count, MAX_ATTEMPTS)

    write_lines(out_dir / EXERCISES_FILE, [f"{i}. {ex.expression}" for i, ex in enumerate(found, 1)])
    write_lines(out_dir / ANSWERS_FILE, [f"{i}. {ex.answer}" for i, ex in enumerate(found, 1)])

    logger.info("generated %d of %d exercises (range 1-%d)", len(found), count, range_bound)
    if len(found) < count:
        logger.warning("range %d ran out of distinct exercises", range_bound)
    return len(found)


def grade_files(exercise_file: Path, answer_file: Path, out_dir: Path) -> int:
    exercises = read_lines(exercise_file)
    answers = read_lines(answer_file)

    report = grade(exercises, answers)
    (out_dir / GRADE_FILE).parent.mkdir(parents=True, exist_ok=True)
    (out_dir / GRADE_FILE).write_text(report.format(), encoding="utf-8")

    logger.info(
        "graded %d: %d correct, %d wrong (%.1f%%)",
        report.total,
        len(report.correct),
        len(report.wrong),
        report.accuracy,
    )
    return report.total


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    opts = parser.parse_args(argv)
    out_dir = Path(opts.out_dir)

    if opts.e or opts.a:
        if not (opts.e and opts.a):
            parser.error("grading needs both -e and -a")
        try:
            grade_files(Path(opts.e), Path(opts.a), out_dir)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("cannot read input: %s", e)
            return 1
        return 0

    if opts.n is None or opts.r is None:
        parser.error("generation needs both -n and -r")
    if opts.r <= 1:
        parser.error("-r must be greater than 1")
    if not 0 < opts.n <= MAX_EXERCISES:
        parser.error(f"-n must be between 1 and {MAX_EXERCISES}")

    try:
        generate_files(opts.n, opts.r, out_dir, seed=opts.seed)
    except OSError as e:
        logger.error("cannot write output: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
