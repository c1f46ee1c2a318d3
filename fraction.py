# primatrain/fraction.py
from __future__ import annotations

import math
import re
from typing import Tuple

from errors import DivisionByZero, FormatError

_MIXED_RE = re.compile(r"([0-9]+)'([0-9]+)/([0-9]+)")
_SIMPLE_RE = re.compile(r"([0-9]+)/([0-9]+)")
_NATURAL_RE = re.compile(r"([0-9]+)")

# Per-part digit cap, well below int() string-conversion limits.
MAX_DIGITS = 200

_ZERO_DENOMINATOR_MSG = "Denominator cannot be zero."
_ZERO_DIVISOR_MSG = "Cannot divide by zero."


class ExactFraction:
    """
    Non-negative rational number kept as (whole, numerator, denominator).

    Every instance is normalized on construction: numerator < denominator,
    the fraction part is in lowest terms and a zero numerator has
    denominator 1. Signs are dropped (absolute value), there is no negative
    representation.
    """

    __slots__ = ("_whole", "_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1, whole: int = 0):
        if denominator == 0:
            raise DivisionByZero(_ZERO_DENOMINATOR_MSG)
        whole, numerator, denominator = abs(whole), abs(numerator), abs(denominator)

        if numerator >= denominator:
            whole += numerator // denominator
            numerator %= denominator

        g = math.gcd(numerator, denominator)
        numerator //= g
        denominator //= g
        if numerator == 0:
            denominator = 1

        object.__setattr__(self, "_whole", whole)
        object.__setattr__(self, "_numerator", numerator)
        object.__setattr__(self, "_denominator", denominator)

    @classmethod
    def mixed(cls, whole: int, numerator: int, denominator: int) -> "ExactFraction":
        return cls(numerator, denominator, whole=whole)

    def __setattr__(self, name, value):
        raise AttributeError("ExactFraction is immutable")

    # --- fields -------------------------------------------------------------------

    @property
    def whole(self) -> int:
        return self._whole

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def improper(self) -> Tuple[int, int]:
        """(whole * denominator + numerator, denominator)"""
        return self._whole * self._denominator + self._numerator, self._denominator

    # --- arithmetic ---------------------------------------------------------------

    def add(self, other: "ExactFraction") -> "ExactFraction":
        n1, d1 = self.improper()
        n2, d2 = other.improper()
        return ExactFraction(n1 * d2 + n2 * d1, d1 * d2)

    def subtract(self, other: "ExactFraction") -> "ExactFraction":
        # A negative difference folds to its magnitude; callers that must not
        # go below zero check greater_or_equal() first.
        n1, d1 = self.improper()
        n2, d2 = other.improper()
        return ExactFraction(n1 * d2 - n2 * d1, d1 * d2)

    def multiply(self, other: "ExactFraction") -> "ExactFraction":
        n1, d1 = self.improper()
        n2, d2 = other.improper()
        return ExactFraction(n1 * n2, d1 * d2)

    def divide(self, other: "ExactFraction") -> "ExactFraction":
        n1, d1 = self.improper()
        n2, d2 = other.improper()
        if n2 == 0:
            raise DivisionByZero(_ZERO_DIVISOR_MSG)
        return ExactFraction(n1 * d2, d1 * n2)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide

    # --- predicates ---------------------------------------------------------------

    def greater_or_equal(self, other: "ExactFraction") -> bool:
        n1, d1 = self.improper()
        n2, d2 = other.improper()
        return n1 * d2 >= n2 * d1

    def is_proper_fraction(self) -> bool:
        return self._whole == 0 and self._numerator < self._denominator

    def is_zero(self) -> bool:
        return self._whole == 0 and self._numerator == 0

    def is_negative(self) -> bool:
        return False

    # --- comparison ---------------------------------------------------------------

    def _cross(self, other: object) -> Tuple[int, int]:
        n1, d1 = self.improper()
        n2, d2 = other.improper()  # type: ignore[attr-defined]
        return n1 * d2, n2 * d1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        left, right = self._cross(other)
        return left == right

    def __lt__(self, other: "ExactFraction") -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        left, right = self._cross(other)
        return left < right

    def __le__(self, other: "ExactFraction") -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        left, right = self._cross(other)
        return left <= right

    def __gt__(self, other: "ExactFraction") -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        left, right = self._cross(other)
        return left > right

    def __ge__(self, other: "ExactFraction") -> bool:
        if not isinstance(other, ExactFraction):
            return NotImplemented
        return self.greater_or_equal(other)

    def __hash__(self) -> int:
        return hash(self.improper())

    # --- text ---------------------------------------------------------------------

    def format(self) -> str:
        if self._whole == 0:
            return "0" if self._numerator == 0 else f"{self._numerator}/{self._denominator}"
        if self._numerator == 0:
            return str(self._whole)
        return f"{self._whole}'{self._numerator}/{self._denominator}"

    __str__ = format

    def __repr__(self) -> str:
        return f"ExactFraction({self.format()!r})"

    @classmethod
    def parse(cls, text: str) -> "ExactFraction":
        """Parse "W'N/D", "N/D" or a bare natural number."""
        if not isinstance(text, str):
            raise FormatError(f"Expected text, got {type(text).__name__}.")
        s = text.strip()

        m = _MIXED_RE.fullmatch(s) or _SIMPLE_RE.fullmatch(s) or _NATURAL_RE.fullmatch(s)
        if m is None:
            raise FormatError(f"Not a number: {text!r}")
        parts = m.groups()
        if any(len(p) > MAX_DIGITS for p in parts):
            raise FormatError(f"Number too long (> {MAX_DIGITS} digits).")

        values = [int(p) for p in parts]
        if len(values) == 3:
            return cls(values[1], values[2], whole=values[0])
        return cls(*values)
