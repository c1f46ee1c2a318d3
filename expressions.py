# primatrain/expressions.py
from __future__ import annotations

import logging
import random
import re
from typing import Callable, List, NamedTuple, Optional, Set, Union

from errors import DivisionByZero, FormatError, ParseError, ValidationFailure
from fraction import ExactFraction

logger = logging.getLogger("primatrain.expressions")

PLUS, MINUS, TIMES, DIVIDE = "+", "-", "×", "÷"
OPERATORS = (PLUS, MINUS, TIMES, DIVIDE)
PRECEDENCE = {PLUS: 1, MINUS: 1, TIMES: 2, DIVIDE: 2}

# ASCII / typographic spellings accepted on input, normalized to the above.
_OPERATOR_ALIASES = {"−": MINUS, "*": TIMES}

_TOKEN_RE = re.compile(r"\s*(?:(?P<paren>[()])|(?P<op>[+\-−×÷*])|(?P<operand>[^\s()+\-−×÷*]+))")

# Inner candidate loop per operator count.
CANDIDATES_PER_ATTEMPT = 50

Token = Union[ExactFraction, str]
Step = Callable[[str, ExactFraction, ExactFraction], ExactFraction]


class Exercise(NamedTuple):
    expression: str  # "<text> ="
    answer: str


# --- Tokenizing -------------------------------------------------------------------


def tokenize(text: str) -> List[Token]:
    """
    Split expression text into operands (already ExactFraction), operators and
    parentheses. Raises ParseError on characters that form no token, and
    FormatError when an operand is not a valid number.
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError("Empty expression.")

    tokens: List[Token] = []
    pos, end = 0, len(text.rstrip())
    while pos < end:
        m = _TOKEN_RE.match(text, pos)
        if m is None or m.end() == pos:
            raise ParseError(f"Unexpected input at position {pos}: {text[pos:]!r}")
        if m.group("paren"):
            tokens.append(m.group("paren"))
        elif m.group("op"):
            op = m.group("op")
            tokens.append(_OPERATOR_ALIASES.get(op, op))
        else:
            tokens.append(ExactFraction.parse(m.group("operand")))
        pos = m.end()
    return tokens


# --- Evaluation -------------------------------------------------------------------


def apply_operator(op: str, left: ExactFraction, right: ExactFraction) -> ExactFraction:
    if op == PLUS:
        return left.add(right)
    if op == MINUS:
        return left.subtract(right)
    if op == TIMES:
        return left.multiply(right)
    if op == DIVIDE:
        return left.divide(right)
    raise ParseError(f"Unknown operator: {op!r}")


def checked_operator(op: str, left: ExactFraction, right: ExactFraction) -> ExactFraction:
    """apply_operator() plus the exercise rules for '-' and '÷'."""
    if op == MINUS and not left.greater_or_equal(right):
        raise ValidationFailure(f"{left} - {right} would be negative.")
    if op == DIVIDE:
        if right.is_zero():
            raise ValidationFailure(f"{left} ÷ {right} divides by zero.")
        quotient = left.divide(right)
        if not quotient.is_proper_fraction() or quotient.is_zero():
            raise ValidationFailure(f"{left} ÷ {right} = {quotient} is not a proper fraction.")
        return quotient
    return apply_operator(op, left, right)


def _reduce_flat(tokens: List[Token], step: Step) -> ExactFraction:
    """Apply operators strictly left to right over operand/operator/operand..."""
    if not tokens or len(tokens) % 2 == 0:
        raise ParseError("Expression must alternate operands and operators.")

    current = tokens[0]
    if not isinstance(current, ExactFraction):
        raise ParseError(f"Expected a number, got {current!r}.")
    for i in range(1, len(tokens), 2):
        op, operand = tokens[i], tokens[i + 1]
        if not isinstance(op, str) or op not in PRECEDENCE:
            raise ParseError(f"Expected an operator, got {op}.")
        if not isinstance(operand, ExactFraction):
            raise ParseError(f"Expected a number, got {operand!r}.")
        current = step(op, current, operand)
    return current


def reduce_tokens(tokens: List[Token], step: Step = apply_operator) -> ExactFraction:
    """
    Resolve the innermost/rightmost-opening parenthesised group first,
    substitute its value, repeat; then reduce what is left left-to-right.
    """
    work = list(tokens)
    while "(" in work:
        start = len(work) - 1 - work[::-1].index("(")
        try:
            stop = work.index(")", start)
        except ValueError:
            raise ParseError("Unbalanced parentheses.") from None
        inner = work[start + 1 : stop]
        if not inner:
            raise ParseError("Empty parentheses.")
        work[start : stop + 1] = [_reduce_flat(inner, step)]
    if ")" in work:
        raise ParseError("Unbalanced parentheses.")
    return _reduce_flat(work, step)


def evaluate(text: str) -> ExactFraction:
    """
    Value of a free-text exercise expression, e.g. "(1/2 + 1'1/3) × 2".

    Operators are applied strictly left to right once parentheses are
    resolved. No exercise rules are checked: a subtraction that would go
    negative yields its magnitude.
    """
    return reduce_tokens(tokenize(text))


def validate(text: str) -> ExactFraction:
    """Like evaluate(), but raises ValidationFailure when a step breaks the rules."""
    return reduce_tokens(tokenize(text), checked_operator)


def dedup_key(expression: str, result: ExactFraction) -> str:
    return re.sub(r"[\s()]", "", expression) + "=" + result.format()


# --- Generation -------------------------------------------------------------------


def needs_parentheses(op1: str, op2: str) -> bool:
    """
    Two-operator form: group the first pair when op2 binds tighter than op1,
    so left-to-right evaluation matches the usual reading.
    """
    return PRECEDENCE[op2] > PRECEDENCE[op1]


def _pair(a: str, op: str, b: str) -> str:
    return f"({a} {op} {b})"


class ExpressionEngine:
    """
    Random exercise generator for one session.

    Leaf operands are naturals in [1, range - 1] or proper fractions with a
    denominator in [2, range - 1]. Candidates are sampled, validated and
    deduplicated against every exercise this instance has already produced.
    """

    def __init__(
        self,
        range_bound: int,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        if range_bound < 2:
            raise ValueError("Range must be at least 2.")
        self.range_bound = range_bound
        self.random = rng if rng is not None else random.Random(seed)
        self._seen: Set[str] = set()

    @property
    def seen_keys(self) -> frozenset:
        return frozenset(self._seen)

    # Shared with grading so both paths evaluate identically.
    evaluate = staticmethod(evaluate)
    validate = staticmethod(validate)

    def generate(self, max_attempts: int = 100) -> Optional[Exercise]:
        for _ in range(max_attempts):
            operator_count = self.random.randint(1, 3)
            try:
                candidate = self._candidate(operator_count)
            except (DivisionByZero, FormatError):
                continue
            if candidate is None:
                continue
            expression, result = candidate
            key = dedup_key(expression, result)
            if key in self._seen:
                continue
            self._seen.add(key)
            return Exercise(expression + " =", result.format())

        logger.debug(
            "no expression found after %d attempts (range=%d, seen=%d)",
            max_attempts,
            self.range_bound,
            len(self._seen),
        )
        return None

    def _candidate(self, operator_count: int):
        for _ in range(CANDIDATES_PER_ATTEMPT):
            ops = [self.random_operator() for _ in range(operator_count)]
            nums = [self.random_operand().format() for _ in range(operator_count + 1)]
            expression = self.build(ops, nums)
            try:
                result = validate(expression)
            except ValidationFailure:
                continue
            return expression, result
        return None

    def random_operator(self) -> str:
        return self.random.choice(OPERATORS)

    def random_operand(self) -> ExactFraction:
        r = self.range_bound
        if r <= 2 or self.random.random() < 0.5:
            return ExactFraction(self.random.randint(1, r - 1))
        denominator = self.random.randint(2, r - 1)
        numerator = self.random.randint(1, denominator - 1)
        return ExactFraction(numerator, denominator)

    def build(self, ops: List[str], nums: List[str]) -> str:
        if len(ops) == 1:
            return f"{nums[0]} {ops[0]} {nums[1]}"

        if len(ops) == 2:
            if needs_parentheses(ops[0], ops[1]):
                return f"{_pair(nums[0], ops[0], nums[1])} {ops[1]} {nums[2]}"
            return f"{nums[0]} {ops[0]} {nums[1]} {ops[1]} {nums[2]}"

        if len(ops) == 3:
            a, b, c, d = nums
            op1, op2, op3 = ops
            layout = self.random.randrange(4)
            if layout == 1:
                return f"{_pair(a, op1, b)} {op2} {c} {op3} {d}"
            if layout == 2:
                return f"{a} {op1} {_pair(b, op2, c)} {op3} {d}"
            if layout == 3:
                return f"{_pair(a, op1, b)} {op2} {_pair(c, op3, d)}"
            return f"{a} {op1} {b} {op2} {c} {op3} {d}"

        raise ValueError(f"Expressions have 1 to 3 operators, got {len(ops)}.")

    def generate_many(self, count: int, max_attempts: int = 100) -> List[Exercise]:
        """Up to `count` exercises; slots where generation gives up are skipped."""
        out: List[Exercise] = []
        for _ in range(count):
            ex = self.generate(max_attempts)
            if ex is not None:
                out.append(ex)
        return out
