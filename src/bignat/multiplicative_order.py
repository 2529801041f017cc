# -----------------------------------------------------------------------------
#  multiplicative_order.py
#  Order of a modulo n: naive, prime-power and CRT variants
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from bignat.cancel import CancelToken, check
from bignat.errors import InvalidArgument
from bignat.euler_phi import calculate_euler_phi_prime_power
from bignat.natural import ONE, BigNat, Castable
from bignat.trial_division import Factorizer, PrimeFactor, get_factors


def _require_coprime(a: BigNat, n: BigNat) -> None:
    r = a.mod(n)
    if r.is_zero() or r.gcd(n).ne(ONE):
        raise InvalidArgument(f"{a} and {n} must be coprime")


def calculate_multiplicative_order_naive(
    a: Castable, n: Castable, *, cancel: CancelToken | None = None
) -> BigNat:
    """
    Smallest k >= 1 with a^k ≡ 1 (mod n), by stepping through the powers of a.
    O(n) multiplications; meant for small moduli and as a reference.
    """
    a = BigNat.cast(a)
    n = BigNat.cast(n)
    if n.eq(ONE):
        return ONE
    _require_coprime(a, n)

    t = a.mod(n)
    o = ONE
    while t.ne(ONE):
        check(cancel)
        t = t.times(a).mod(n)
        o = o.plus(ONE)
    return o


def calculate_multiplicative_order_prime_power(
    a: Castable, p: Castable, k: Castable, factorizer: Factorizer | None = None
) -> BigNat:
    """
    Order of a modulo p^k (p prime, a coprime to p).

    Starts from φ(p^k) and, for every prime q dividing φ(p^k), divides the
    candidate by q for as long as a raised to the reduced exponent is still
    1 mod p^k. The prime factors of φ(p^k) are those of p - 1, plus p itself
    with multiplicity k - 1.
    """
    a = BigNat.cast(a)
    p = BigNat.cast(p)
    k = BigNat.cast(k)
    pk = p.pow(k)
    if pk.eq(ONE):
        return ONE
    _require_coprime(a, p)

    phi_factors = get_factors(p.minus(ONE), factorizer)
    if k.gt(ONE):
        phi_factors.append(PrimeFactor(p, k.minus(ONE)))

    order = calculate_euler_phi_prime_power(p, k)
    for q, e in phi_factors:
        while e.is_nonzero():
            reduced = order.div(q)
            if a.pow_mod(reduced, pk).ne(ONE):
                break
            order = reduced
            e = e.minus(ONE)
    return order


def calculate_multiplicative_order_crt_factors(
    a: Castable, factors: Iterable[tuple[Castable, Castable]], factorizer: Factorizer | None = None
) -> BigNat:
    """
    Order of a modulo n given n's factor list: the lcm of the orders modulo
    each prime power, since (Z/nZ)* is the product of the (Z/p^kZ)*.
    """
    a = BigNat.cast(a)
    o = ONE
    for p, k in factors:
        o = o.lcm(calculate_multiplicative_order_prime_power(a, p, k, factorizer))
    return o


def calculate_multiplicative_order_crt(
    a: Castable, n: Castable, factorizer: Factorizer | None = None
) -> BigNat:
    n = BigNat.cast(n)
    if n.is_zero():
        raise InvalidArgument("modulus must be non-zero")
    return calculate_multiplicative_order_crt_factors(a, get_factors(n, factorizer), factorizer)


calculate_multiplicative_order = calculate_multiplicative_order_crt
