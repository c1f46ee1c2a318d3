from __future__ import annotations


class DivisionByZero(ZeroDivisionError):
    """A fraction was built with, or divided by, a zero value."""


class FormatError(ValueError):
    """Operand text is not a natural number, N/D or W'N/D."""


class ParseError(FormatError):
    """An expression token stream is malformed."""


class ValidationFailure(ValueError):
    """A candidate expression breaks an exercise constraint (retry signal)."""
