# -----------------------------------------------------------------------------
#  natural.py
#  BigNat: arbitrary-precision natural numbers on decimal digits
# -----------------------------------------------------------------------------

"""
A BigNat stores its value as a tuple of decimal digits, least significant
digit first, with no trailing zero digits. Zero is the empty tuple, so every
value has exactly one representation:

    31415926  ->  (6, 2, 9, 5, 1, 4, 1, 3)
    0         ->  ()

Values are immutable; every operation returns a new BigNat.
"""

from __future__ import annotations

import math
import random as _random
import re
from collections.abc import Callable
from typing import Union

from bignat.errors import DivisionByZero, InvalidArgument, InvalidRange, ParseError, Underflow

BASE = 10
_DIGITS_RE = re.compile(r"[0-9]+")
_MANTISSA_DIGITS = 17
_RANDOM_RADIX = 2 ** 32
_LN2 = math.log(2)
_LN10 = math.log(10)

Digits = tuple[int, ...]
Castable = Union["BigNat", int, str]


# --- digit kernels (little-endian, canonical in and out) ---------------------


def _trim(d: list[int]) -> Digits:
    i = len(d)
    while i and d[i - 1] == 0:
        i -= 1
    return tuple(d[:i])


def _cmp(a: Digits, b: Digits) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def _add(a: Digits, b: Digits) -> Digits:
    if len(a) < len(b):
        a, b = b, a
    out: list[int] = []
    carry = 0
    nb = len(b)
    for i, x in enumerate(a):
        carry, digit = divmod(x + (b[i] if i < nb else 0) + carry, BASE)
        out.append(digit)
    if carry:
        out.append(carry)
    return tuple(out)


def _sub(a: Digits, b: Digits) -> Digits:
    """a - b for a >= b."""
    out: list[int] = []
    borrow = 0
    nb = len(b)
    for i, x in enumerate(a):
        digit = x - (b[i] if i < nb else 0) - borrow
        if digit < 0:
            digit += BASE
            borrow = 1
        else:
            borrow = 0
        out.append(digit)
    return _trim(out)


def _mul(a: Digits, b: Digits) -> Digits:
    if not a or not b:
        return ()
    if len(a) < len(b):
        a, b = b, a
    out = [0] * (len(a) + len(b))
    for j, y in enumerate(b):
        if y == 0:
            continue
        carry = 0
        for i, x in enumerate(a):
            carry, out[i + j] = divmod(out[i + j] + x * y + carry, BASE)
        k = j + len(a)
        while carry:
            carry, out[k] = divmod(out[k] + carry, BASE)
            k += 1
    return _trim(out)


def _divmod(a: Digits, b: Digits) -> tuple[Digits, Digits]:
    """
    Schoolbook long division. The remainder is extended one digit at a time
    and the next quotient digit is the largest q in 0..9 with b*q <= remainder,
    found against the ten precomputed multiples of b.
    """
    if _cmp(a, b) < 0:
        return (), a
    multiples: list[Digits] = [()]
    for _ in range(1, BASE):
        multiples.append(_add(multiples[-1], b))

    q = [0] * len(a)
    r: Digits = ()
    for i in range(len(a) - 1, -1, -1):
        # r = r * BASE + a[i]
        if r:
            r = (a[i],) + r
        elif a[i]:
            r = (a[i],)
        digit = 0
        while digit + 1 < BASE and _cmp(multiples[digit + 1], r) <= 0:
            digit += 1
        if digit:
            r = _sub(r, multiples[digit])
        q[i] = digit
    return _trim(q), r


def _digits_of_int(n: int) -> Digits:
    out: list[int] = []
    while n:
        n, d = divmod(n, BASE)
        out.append(d)
    return tuple(out)


def _parse(o: object) -> Digits:
    if isinstance(o, int) and not isinstance(o, bool) and o >= 0:
        return _digits_of_int(o)
    s = str(o)
    if not _DIGITS_RE.fullmatch(s):
        raise ParseError(s)
    return tuple(int(c) for c in reversed(s.lstrip("0")))


# --- BigNat ------------------------------------------------------------------


class BigNat:
    """
    Arbitrary-precision natural number.

    Constructible from a non-negative int, a decimal string matching
    ^[0-9]+$ (leading zeros are stripped) or another BigNat. BigNat()
    is zero. Every method that takes a number accepts any of those forms.
    """

    __slots__ = ("_d",)

    def __init__(self, value: Castable | None = None):
        if value is None:
            digits: Digits = ()
        elif isinstance(value, BigNat):
            digits = value._d
        else:
            digits = _parse(value)
        object.__setattr__(self, "_d", digits)

    @classmethod
    def _from_digits(cls, digits: Digits) -> BigNat:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_d", digits)
        return obj

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigNat is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("BigNat is immutable")

    @classmethod
    def cast(cls, o: Castable) -> BigNat:
        return o if isinstance(o, BigNat) else cls(o)

    @classmethod
    def try_cast(cls, o: object) -> BigNat | None:
        """Like cast(), but returns None for input that does not parse."""
        try:
            return cls.cast(o)  # type: ignore[arg-type]
        except ParseError:
            return None

    @property
    def digits(self) -> Digits:
        """Decimal digits, least significant first; () for zero."""
        return self._d

    # --- predicates ----------------------------------------------------------

    def is_zero(self) -> bool:
        return not self._d

    def is_nonzero(self) -> bool:
        return bool(self._d)

    def is_even(self) -> bool:
        return not self._d or self._d[0] % 2 == 0

    def divides(self, other: Castable) -> bool:
        """True iff self | other. Zero divides only zero."""
        o = BigNat.cast(other)
        if not self._d:
            return not o._d
        return not _divmod(o._d, self._d)[1]

    # --- comparison ----------------------------------------------------------

    def compare(self, other: Castable) -> int:
        return _cmp(self._d, BigNat.cast(other)._d)

    def eq(self, other: Castable) -> bool:
        return self._d == BigNat.cast(other)._d

    def ne(self, other: Castable) -> bool:
        return not self.eq(other)

    def lt(self, other: Castable) -> bool:
        return self.compare(other) < 0

    def le(self, other: Castable) -> bool:
        return self.compare(other) <= 0

    def gt(self, other: Castable) -> bool:
        return self.compare(other) > 0

    def ge(self, other: Castable) -> bool:
        return self.compare(other) >= 0

    def min(self, other: Castable) -> BigNat:
        o = BigNat.cast(other)
        return self if _cmp(self._d, o._d) <= 0 else o

    def max(self, other: Castable) -> BigNat:
        o = BigNat.cast(other)
        return self if _cmp(self._d, o._d) >= 0 else o

    # --- arithmetic ----------------------------------------------------------

    def plus(self, other: Castable) -> BigNat:
        return BigNat._from_digits(_add(self._d, BigNat.cast(other)._d))

    def minus(self, other: Castable) -> BigNat:
        o = BigNat.cast(other)
        if _cmp(self._d, o._d) < 0:
            raise Underflow(f"{self} - {o} is negative")
        return BigNat._from_digits(_sub(self._d, o._d))

    def times(self, other: Castable) -> BigNat:
        return BigNat._from_digits(_mul(self._d, BigNat.cast(other)._d))

    def div_mod(self, other: Castable) -> tuple[BigNat, BigNat]:
        o = BigNat.cast(other)
        if not o._d:
            raise DivisionByZero(f"{self} / 0")
        q, r = _divmod(self._d, o._d)
        return BigNat._from_digits(q), BigNat._from_digits(r)

    def div(self, other: Castable) -> BigNat:
        return self.div_mod(other)[0]

    def mod(self, other: Castable) -> BigNat:
        return self.div_mod(other)[1]

    def pow(self, exponent: Castable) -> BigNat:
        """self^exponent, with 0^0 = 1."""
        return _window_pow(self, BigNat.cast(exponent), lambda x, y: x.times(y), ONE)

    def pow_mod(self, exponent: Castable, modulus: Castable) -> BigNat:
        """self^exponent mod modulus; the identity is 1 mod modulus (0 when modulus is 1)."""
        m = BigNat.cast(modulus)
        if not m._d:
            raise DivisionByZero("modulus must be non-zero")
        return _window_pow(
            self.mod(m), BigNat.cast(exponent), lambda x, y: x.times(y).mod(m), ONE.mod(m)
        )

    def gcd(self, other: Castable) -> BigNat:
        a, b = self, BigNat.cast(other)
        if not a._d or not b._d:
            # gcd(0, x) = x would be the usual convention; zero operands are rejected instead.
            raise InvalidArgument(f"gcd({a}, {b}) needs non-zero operands")
        while b._d:
            a, b = b, a.mod(b)
        return a

    def lcm(self, other: Castable) -> BigNat:
        o = BigNat.cast(other)
        return self.div(self.gcd(o)).times(o)

    # --- logarithms and roots ------------------------------------------------

    def ln(self) -> float:
        """
        Natural logarithm as a float; -inf for zero.

        Values of up to 17 digits go through math.log directly. Longer ones are split into
        a 17-digit mantissa and a decimal exponent, ln(m) + e*ln(10), so the
        float conversion never overflows.
        """
        if not self._d:
            return -math.inf
        if len(self._d) <= _MANTISSA_DIGITS:
            return math.log(int(self))
        exponent = len(self._d) - _MANTISSA_DIGITS
        mantissa = BigNat._from_digits(self._d[exponent:])
        return math.log(int(mantissa)) + exponent * _LN10

    def _floor_lg_and_power(self) -> tuple[int, BigNat]:
        if not self._d:
            raise InvalidArgument("lg(0) is undefined")
        k = max(0, int(self.ln() / _LN2))
        p = TWO.pow(k)
        while p.gt(self):
            k -= 1
            p = p.div(TWO)
        doubled = p.times(TWO)
        while doubled.le(self):
            k += 1
            p = doubled
            doubled = p.times(TWO)
        return k, p

    def floor_lg(self) -> int:
        """floor(log2(self)) for self > 0."""
        return self._floor_lg_and_power()[0]

    def ceil_lg(self) -> int:
        """ceil(log2(self)) for self > 0."""
        k, p = self._floor_lg_and_power()
        return k if p.eq(self) else k + 1

    def floor_root(self, k: Castable) -> BigNat:
        """
        Largest r with r^k <= self, by integer Newton iteration from the
        upper bound 2^ceil(ceil_lg(self)/k).
        """
        k = BigNat.cast(k)
        if not k._d:
            raise InvalidArgument("0th root is undefined")
        if not self._d or k.eq(ONE):
            return self
        k_minus_one = k.minus(ONE)
        kk = int(k)
        x = TWO.pow(-(-self.ceil_lg() // kk))
        while True:
            y = k_minus_one.times(x).plus(self.div(x.pow(k_minus_one))).div(k)
            if y.ge(x):
                return x
            x = y

    # --- sampling ------------------------------------------------------------

    @classmethod
    def random(
        cls, lo: Castable, hi: Castable, rng: Callable[[], float] | None = None
    ) -> BigNat:
        """
        Uniform sample from [lo, hi). `rng` returns floats in [0, 1)
        (default: random.random). Base-2^32 digits are drawn until the
        denominator covers the range width, then the fraction is scaled.
        """
        lo = cls.cast(lo)
        hi = cls.cast(hi)
        if lo.ge(hi):
            raise InvalidRange(f"empty range [{lo}, {hi})")
        rng = rng or _random.random
        width = hi.minus(lo)
        num = ZERO
        den = ONE
        while den.lt(width):
            digit = min(int(rng() * _RANDOM_RADIX), _RANDOM_RADIX - 1)
            num = num.times(_RADIX).plus(digit)
            den = den.times(_RADIX)
        return lo.plus(num.times(width).div(den))

    # --- Python protocol -----------------------------------------------------

    def __str__(self) -> str:
        return "".join(map(str, reversed(self._d))) if self._d else "0"

    def __repr__(self) -> str:
        return f"BigNat('{self}')"

    def __int__(self) -> int:
        if len(self._d) <= 4000:
            return int(str(self))
        value = 0
        for d in reversed(self._d):
            value = value * BASE + d
        return value

    def __bool__(self) -> bool:
        return bool(self._d)

    def __hash__(self) -> int:
        # consistent with int hashing, since BigNat(5) == 5
        return hash(int(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        o = BigNat.try_cast(other)
        return o is not None and self._d == o._d

    def _order(self, other: object):
        if isinstance(other, int) and not isinstance(other, bool) and other < 0:
            return 1
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.compare(other)

    def __lt__(self, other: object) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c < 0

    def __le__(self, other: object) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c <= 0

    def __gt__(self, other: object) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c > 0

    def __ge__(self, other: object) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c >= 0

    def __add__(self, other: object) -> BigNat:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.plus(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> BigNat:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other: object) -> BigNat:
        if not isinstance(other, int):
            return NotImplemented
        return BigNat(other).minus(self)

    def __mul__(self, other: object) -> BigNat:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.times(other)

    __rmul__ = __mul__

    def __floordiv__(self, other: object) -> BigNat:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.div(other)

    def __mod__(self, other: object) -> BigNat:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.mod(other)

    def __divmod__(self, other: object) -> tuple[BigNat, BigNat]:
        if not isinstance(other, (BigNat, int)):
            return NotImplemented
        return self.div_mod(other)

    def __pow__(self, exponent: object, modulus: object = None) -> BigNat:
        if not isinstance(exponent, (BigNat, int)):
            return NotImplemented
        if modulus is None:
            return self.pow(exponent)
        if not isinstance(modulus, (BigNat, int)):
            return NotImplemented
        return self.pow_mod(exponent, modulus)


def _raise_to_base(x: BigNat, mul: Callable[[BigNat, BigNat], BigNat]) -> BigNat:
    # x^10 = (x^4 * x)^2
    x2 = mul(x, x)
    x5 = mul(mul(x2, x2), x)
    return mul(x5, x5)


def _window_pow(
    base: BigNat, exponent: BigNat, mul: Callable[[BigNat, BigNat], BigNat], one: BigNat
) -> BigNat:
    """
    Left-to-right fixed-window exponentiation over the exponent's decimal
    digits. base^0..base^9 are computed once; for each exponent digit the
    accumulator is raised to the 10th power and multiplied by base^digit.
    """
    if not exponent._d:
        return one
    powers = [one]
    for _ in range(1, BASE):
        powers.append(mul(powers[-1], base))
    acc = one
    started = False
    for digit in reversed(exponent._d):
        if started:
            acc = _raise_to_base(acc, mul)
        if digit:
            acc = mul(acc, powers[digit])
            started = True
    return acc


ZERO = BigNat()
ONE = BigNat(1)
TWO = BigNat(2)
_RADIX = BigNat(_RANDOM_RADIX)


def cast(o: Castable) -> BigNat:
    return BigNat.cast(o)
