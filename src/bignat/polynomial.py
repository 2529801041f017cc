# -----------------------------------------------------------------------------
#  polynomial.py
#  BigPoly: sparse polynomials with BigNat exponents and coefficients
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from bignat.errors import DivisionByZero
from bignat.natural import ONE, ZERO, BigNat, Castable


def _collect(pairs: Iterable[tuple[BigNat, BigNat]]) -> dict[BigNat, BigNat]:
    """Sum coefficients per exponent and drop the zero ones."""
    acc: dict[BigNat, BigNat] = {}
    for e, c in pairs:
        if c.is_zero():
            continue
        prev = acc.get(e)
        acc[e] = c if prev is None else prev.plus(c)
    return acc


class BigPoly:
    """
    Immutable sparse polynomial: a map exponent -> non-zero coefficient.

    Exponents are BigNats so x^n with huge n costs one term. The map is
    unordered; str() lists terms by decreasing exponent.
    """

    __slots__ = ("_terms",)

    def __init__(self, constant: Castable | None = None):
        c = ZERO if constant is None else BigNat.cast(constant)
        self._set({ZERO: c} if c.is_nonzero() else {})

    def _set(self, terms: dict[BigNat, BigNat]) -> None:
        object.__setattr__(self, "_terms", MappingProxyType(terms))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigPoly is immutable")

    @classmethod
    def _from_dict(cls, terms: dict[BigNat, BigNat]) -> BigPoly:
        obj = object.__new__(cls)
        obj._set(terms)
        return obj

    @classmethod
    def from_terms(cls, terms: Mapping[Castable, Castable]) -> BigPoly:
        """Build from {exponent: coefficient}; zero coefficients are dropped."""
        return cls._from_dict(_collect((BigNat.cast(e), BigNat.cast(c)) for e, c in terms.items()))

    @classmethod
    def constant(cls, c: Castable) -> BigPoly:
        return cls(c)

    @classmethod
    def x(cls) -> BigPoly:
        return cls._from_dict({ONE: ONE})

    # --- inspection ----------------------------------------------------------

    def terms(self) -> Iterator[tuple[BigNat, BigNat]]:
        """(exponent, coefficient) pairs by decreasing exponent."""
        return iter(sorted(self._terms.items(), key=lambda t: t[0], reverse=True))

    def coefficient(self, exponent: Castable) -> BigNat:
        return self._terms.get(BigNat.cast(exponent), ZERO)

    def degree(self) -> BigNat | None:
        """Highest exponent, or None for the zero polynomial."""
        if not self._terms:
            return None
        return max(self._terms)

    def is_zero(self) -> bool:
        return not self._terms

    def __len__(self) -> int:
        return len(self._terms)

    # --- arithmetic ----------------------------------------------------------

    def shift_left(self, n: Castable) -> BigPoly:
        """Multiply by x^n."""
        n = BigNat.cast(n)
        return BigPoly._from_dict({e.plus(n): c for e, c in self._terms.items()})

    def shift_right(self, n: Castable) -> BigPoly:
        """Divide by x^n, dropping terms whose exponent would go negative."""
        n = BigNat.cast(n)
        return BigPoly._from_dict({e.minus(n): c for e, c in self._terms.items() if e.ge(n)})

    def plus(self, other: BigPoly) -> BigPoly:
        return BigPoly._from_dict(_collect([*self._terms.items(), *other._terms.items()]))

    def times(self, other: BigPoly) -> BigPoly:
        return BigPoly._from_dict(_collect(
            (e1.plus(e2), c1.times(c2))
            for e1, c1 in self._terms.items()
            for e2, c2 in other._terms.items()
        ))

    def pow(self, k: Castable) -> BigPoly:
        """self^k by square-and-multiply; p^0 = 1."""
        return self._power(BigNat.cast(k), lambda p: p)

    def mod_exponents(self, r: Castable) -> BigPoly:
        """Reduce modulo x^r - 1: x^e becomes x^(e mod r)."""
        r = BigNat.cast(r)
        if r.is_zero():
            raise DivisionByZero("cannot reduce modulo x^0 - 1")
        return BigPoly._from_dict(_collect((e.mod(r), c) for e, c in self._terms.items()))

    def mod_coefficients(self, n: Castable) -> BigPoly:
        """Reduce every coefficient modulo n, dropping the terms that vanish."""
        n = BigNat.cast(n)
        return BigPoly._from_dict(_collect((e, c.mod(n)) for e, c in self._terms.items()))

    def pow_mod(self, k: Castable, r: Castable, n: Castable) -> BigPoly:
        """self^k mod (x^r - 1, n), reducing after every product."""
        r = BigNat.cast(r)
        n = BigNat.cast(n)

        def reduce(p: BigPoly) -> BigPoly:
            return p.mod_exponents(r).mod_coefficients(n)

        return self._power(BigNat.cast(k), reduce)

    def _power(self, k: BigNat, reduce) -> BigPoly:
        result = reduce(BigPoly(ONE))
        base = reduce(self)
        while k.is_nonzero():
            k, bit = k.div_mod(2)
            if bit.is_nonzero():
                result = reduce(result.times(base))
            if k.is_nonzero():
                base = reduce(base.times(base))
        return result

    # --- Python protocol -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigPoly):
            return NotImplemented
        return dict(self._terms) == dict(other._terms)

    def __hash__(self) -> int:
        return hash(frozenset(self._terms.items()))

    def __add__(self, other: BigPoly) -> BigPoly:
        return self.plus(other)

    def __mul__(self, other: BigPoly) -> BigPoly:
        return self.times(other)

    def __str__(self) -> str:
        parts: list[str] = []
        for e, c in self.terms():
            if e.is_zero():
                parts.append(str(c))
                continue
            coeff = "" if c.eq(ONE) else str(c)
            power = "x" if e.eq(ONE) else f"x^{e}"
            parts.append(coeff + power)
        return " + ".join(parts) if parts else "0"

    def __repr__(self) -> str:
        return f"BigPoly('{self}')"
