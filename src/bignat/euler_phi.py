# -----------------------------------------------------------------------------
#  euler_phi.py
#  Euler's totient from a prime factorization
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from bignat.errors import InvalidArgument
from bignat.natural import ONE, BigNat, Castable
from bignat.trial_division import Factorizer, get_factors


def calculate_euler_phi_prime_power(p: Castable, k: Castable) -> BigNat:
    """φ(p^k) = p^(k-1) · (p - 1). p must be prime (not checked) and k >= 1."""
    p = BigNat.cast(p)
    k = BigNat.cast(k)
    if k.is_zero():
        raise InvalidArgument("prime power exponent must be >= 1")
    return p.pow(k.minus(ONE)).times(p.minus(ONE))


def calculate_euler_phi_factors(factors: Iterable[tuple[Castable, Castable]]) -> BigNat:
    """φ(n) from n's factor list [(p, k), ...]; the empty list gives φ(1) = 1."""
    phi = ONE
    for p, k in factors:
        phi = phi.times(calculate_euler_phi_prime_power(p, k))
    return phi


def calculate_euler_phi(n: Castable, factorizer: Factorizer | None = None) -> BigNat:
    n = BigNat.cast(n)
    if n.is_zero():
        raise InvalidArgument("φ(0) is undefined")
    return calculate_euler_phi_factors(get_factors(n, factorizer))
