# -----------------------------------------------------------------------------
#  errors.py
#  Error taxonomy shared by every bignat module
# -----------------------------------------------------------------------------

from __future__ import annotations


class BigNatError(Exception):
    pass


class ParseError(BigNatError, ValueError):
    """Input is not a decimal natural number (must match ^[0-9]+$)."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"cannot parse {text}")


class DivisionByZero(BigNatError, ZeroDivisionError):
    pass


class Underflow(BigNatError, ArithmeticError):
    pass


class InvalidRange(BigNatError, ValueError):
    pass


class InvalidArgument(BigNatError, ValueError):
    pass


class RangeError(BigNatError, ValueError):
    pass


class InvalidCallbackResult(BigNatError, TypeError):
    pass


class NotFound(BigNatError, LookupError):
    pass


class Cancelled(BigNatError):
    pass


class ConfigError(BigNatError):
    pass
