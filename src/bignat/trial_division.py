# -----------------------------------------------------------------------------
#  trial_division.py
#  Trial-division factorization with pluggable divisor generators
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from bignat.cancel import CancelToken, check
from bignat.errors import InvalidArgument, InvalidCallbackResult
from bignat.fmt import abbr_nat
from bignat.natural import ONE, TWO, BigNat, Castable
from bignat.runtime import CFG
from bignat.trace import timed


class PrimeFactor(NamedTuple):
    p: BigNat
    k: BigNat

    def __str__(self) -> str:
        return str(self.p) if self.k.eq(ONE) else f"{self.p}^{self.k}"


DivisorGenerator = Callable[[BigNat], "BigNat | None"]
FactorCallback = Callable[[BigNat, BigNat], bool]
Factorizer = Callable[[Castable, FactorCallback], None]


def _check_should_continue(should_continue: object) -> bool:
    if should_continue is not True and should_continue is not False:
        raise InvalidCallbackResult(
            f"on_factor must return True or False, got {should_continue!r}"
        )
    return should_continue


def trial_divide(
    n: Castable,
    next_divisor: DivisorGenerator,
    on_factor: FactorCallback,
    *,
    cancel: CancelToken | None = None,
) -> None:
    """
    Factor n with the divisors produced by next_divisor and report every
    prime power through on_factor(p, k).

    next_divisor receives the still-unfactored part of n and returns the next
    candidate, or None once it has nothing left to try; a remainder > 1 at
    that point is reported as a prime with multiplicity 1. on_factor must
    return True to continue or False to stop; anything else raises
    InvalidCallbackResult. n = 0 reports nothing.
    """
    n = BigNat.cast(n)
    if n.is_zero():
        return

    with timed(f"trial division of {abbr_nat(n)}") as span:
        t = n
        found = 0
        while True:
            check(cancel)
            d = next_divisor(t)
            if d is None:
                if t.ne(ONE):
                    found += 1
                    _check_should_continue(on_factor(t, ONE))
                break
            d = BigNat.cast(d)
            e = 0
            q, r = t.div_mod(d)
            while r.is_zero():
                t = q
                e += 1
                q, r = t.div_mod(d)
            if e:
                found += 1
                if not _check_should_continue(on_factor(d, BigNat(e))):
                    break
        span.detail = f"{found} prime power(s)"


class NaiveDivisorGenerator:
    """Yields 2, then the odd numbers, while d*d <= the unfactored part."""

    def __init__(self) -> None:
        self._next = TWO

    def __call__(self, remaining: BigNat) -> BigNat | None:
        d = self._next
        if d.times(d).gt(remaining):
            return None
        self._next = _THREE if d.eq(TWO) else d.plus(TWO)
        return d


class Mod30WheelDivisorGenerator:
    """
    Yields 2, 3, 5, 7, then walks the residues coprime to 30 with the
    increments 4, 2, 4, 2, 4, 6, 2, 6, while d*d <= the unfactored part.
    Only 8 of every 15 odd candidates are tried.
    """

    START = (2, 3, 5, 7)
    WHEEL = (4, 2, 4, 2, 4, 6, 2, 6)

    def __init__(self) -> None:
        self._start = [BigNat(p) for p in self.START]
        self._si = 1
        self._wi = 0
        self._next = self._start[0]

    def __call__(self, remaining: BigNat) -> BigNat | None:
        d = self._next
        if d.times(d).gt(remaining):
            return None
        if self._si < len(self._start):
            self._next = self._start[self._si]
            self._si += 1
        else:
            self._next = d.plus(self.WHEEL[self._wi])
            self._wi = (self._wi + 1) % len(self.WHEEL)
        return d


GENERATORS: dict[str, Callable[[], DivisorGenerator]] = {
    "naive": NaiveDivisorGenerator,
    "mod30": Mod30WheelDivisorGenerator,
}


def make_factorizer(make_generator: Callable[[], DivisorGenerator]) -> Factorizer:
    """A factorizer running trial division with a fresh generator per call."""
    def factorizer(n: Castable, on_factor: FactorCallback) -> None:
        trial_divide(n, make_generator(), on_factor)
    return factorizer


def default_factorizer(n: Castable, on_factor: FactorCallback) -> None:
    """Trial division with the generator named by FACTORING.GENERATOR (mod-30 wheel)."""
    name = CFG("FACTORING.GENERATOR", "mod30")
    try:
        make_generator = GENERATORS[name]
    except KeyError:
        raise InvalidArgument(f"unknown divisor generator {name!r}") from None
    trial_divide(n, make_generator(), on_factor)


def get_factors(n: Castable, factorizer: Factorizer | None = None) -> list[PrimeFactor]:
    """Prime factorization of n as [(p, k), ...] in discovery order."""
    factors: list[PrimeFactor] = []

    def append_factor(p: BigNat, k: BigNat) -> bool:
        factors.append(PrimeFactor(p, k))
        return True

    (factorizer or default_factorizer)(n, append_factor)
    return factors


factorize = get_factors

_THREE = BigNat(3)
