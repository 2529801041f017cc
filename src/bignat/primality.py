# -----------------------------------------------------------------------------
#  primality.py
#  Fermat, Artjuhov (Miller-Rabin), Miller and AKS primality tests
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from bignat.cancel import CancelToken, check
from bignat.errors import InvalidArgument, NotFound, RangeError
from bignat.fmt import abbr_nat
from bignat.multiplicative_order import calculate_multiplicative_order_crt
from bignat.natural import ONE, TWO, ZERO, BigNat, Castable
from bignat.polynomial import BigPoly
from bignat.runtime import CFG
from bignat.trace import timed
from bignat.trial_division import Factorizer

WitnessTest = Callable[[BigNat, BigNat], bool]

# (bound, witnesses): testing these bases decides primality for every n < bound.
MILLER_WITNESS_TABLE: tuple[tuple[int, tuple[int, ...]], ...] = (
    (4, ()),
    (1_373_653, (2, 3)),
    (9_080_191, (31, 73)),
    (4_759_123_141, (2, 7, 61)),
    (2_152_302_898_747, (2, 3, 5, 7, 11)),
    (3_474_749_660_383, (2, 3, 5, 7, 11, 13)),
    (341_550_071_728_321, (2, 3, 5, 7, 11, 13, 17)),
)


def _check_test_arguments(n: BigNat, a: BigNat) -> None:
    if n.le(TWO):
        raise RangeError("n must be > 2")
    if a.le(ONE) or a.ge(n):
        raise RangeError("a must satisfy 1 < a < n")


# --- Fermat ------------------------------------------------------------------


@dataclass(frozen=True)
class FermatResult:
    a: BigNat
    n: BigNat
    r: BigNat                      # a^(n-1) mod n
    is_composite_by_fermat: bool   # r != 1: a is a Fermat witness


def test_compositeness_by_fermat(n: Castable, a: Castable) -> FermatResult:
    """Fermat test for n > 2 and 1 < a < n."""
    n = BigNat.cast(n)
    a = BigNat.cast(a)
    _check_test_arguments(n, a)

    r = a.pow_mod(n.minus(ONE), n)
    return FermatResult(a=a, n=n, r=r, is_composite_by_fermat=r.ne(ONE))


def has_fermat_witness(n: Castable, a: Castable) -> bool:
    return test_compositeness_by_fermat(n, a).is_composite_by_fermat


# --- Artjuhov ----------------------------------------------------------------


@dataclass(frozen=True)
class ArtjuhovResult:
    """
    Outcome of one Artjuhov (strong probable prime) test.

    n - 1 = t·2^s with t odd; r starts at a^t mod n and is squared i times,
    stopping early at 0, 1 or n - 1. r_sqrt is the value before the last
    squaring (None when i = 0).
    """
    a: BigNat
    n: BigNat
    t: BigNat
    s: BigNat
    r: BigNat
    i: BigNat
    r_sqrt: BigNat | None
    is_composite_by_artjuhov: bool

    def factors(self) -> tuple[BigNat, ...]:
        """
        Non-trivial factors of n exposed by the test: gcd(a, n) when r hit 0,
        or gcd(r_sqrt ∓ 1, n) when r_sqrt is a non-trivial square root of 1.
        """
        if not self.is_composite_by_artjuhov:
            return ()
        if self.i.is_zero() or self.r.ne(ONE):
            if self.r.is_zero():
                return (self.n.gcd(self.a),)
            return ()
        if self.r_sqrt is None:
            return ()
        return (self.n.gcd(self.r_sqrt.minus(ONE)), self.n.gcd(self.r_sqrt.plus(ONE)))


def test_compositeness_by_artjuhov(n: Castable, a: Castable) -> ArtjuhovResult:
    """Artjuhov test for n > 2 and 1 < a < n."""
    n = BigNat.cast(n)
    a = BigNat.cast(a)
    _check_test_arguments(n, a)

    n_minus_one = n.minus(ONE)
    t = n_minus_one
    s = ZERO
    while t.is_even():
        t = t.div(TWO)
        s = s.plus(ONE)

    r = a.pow_mod(t, n)
    i = ZERO
    r_sqrt = None
    while i.lt(s) and not (r.is_zero() or r.eq(ONE) or r.eq(n_minus_one)):
        r_sqrt = r
        r = r.times(r).mod(n)
        i = i.plus(ONE)

    if s.is_zero():
        # n - 1 is odd: plain Fermat
        is_composite = r.ne(ONE)
    elif i.is_zero():
        # a^t = ±1 is inconclusive
        is_composite = r.is_zero()
    elif i.lt(s):
        # stopped at 0, at 1 (non-trivial root of unity) or at n - 1 (inconclusive)
        is_composite = r.le(ONE)
    else:
        # squared s times without meeting -1
        is_composite = True

    return ArtjuhovResult(
        a=a, n=n, t=t, s=s, r=r, i=i, r_sqrt=r_sqrt, is_composite_by_artjuhov=is_composite
    )


def has_artjuhov_witness(n: Castable, a: Castable) -> bool:
    return test_compositeness_by_artjuhov(n, a).is_composite_by_artjuhov


# --- probabilistic and deterministic drivers --------------------------------


def is_probable_prime(
    n: Castable,
    has_witness: WitnessTest | None = None,
    num_samples: int | None = None,
    rng: Callable[[], float] | None = None,
    *,
    cancel: CancelToken | None = None,
) -> bool:
    """
    False if a witness is found among num_samples random bases in [2, n-2].

    With the default Artjuhov test a composite passes with probability at
    most 4^-num_samples. num_samples defaults to PRIMALITY.NUM_SAMPLES (20).
    """
    n = BigNat.cast(n)
    if n.le(ONE):
        return False
    if n.le(3):
        return True
    if n.is_even():
        return False

    has_witness = has_witness or has_artjuhov_witness
    samples = int(CFG("PRIMALITY.NUM_SAMPLES", 20)) if num_samples is None else num_samples
    upper = n.minus(ONE)
    with timed(f"probable-prime test of {abbr_nat(n)}") as span:
        for _ in range(samples):
            check(cancel)
            a = BigNat.random(TWO, upper, rng)
            if has_witness(n, a):
                span.detail = f"witness {a}"
                return False
        span.detail = f"{samples} sample(s), no witness"
    return True


def get_artjuhov_witness_bound(n: Castable) -> BigNat:
    """min(floor(2·ln²n), n - 2): every odd composite n has an Artjuhov witness <= this (under GRH)."""
    n = BigNat.cast(n)
    if n.lt(TWO):
        raise InvalidArgument("witness bound needs n >= 2")
    w = BigNat(math.floor(2.0 * n.ln() ** 2))
    return w.min(n.minus(TWO))


def _miller_witnesses(n: BigNat) -> Iterator[BigNat]:
    for bound, witnesses in MILLER_WITNESS_TABLE:
        if n.lt(bound):
            for w in witnesses:
                if n.gt(w):
                    yield BigNat(w)
            return
    a = TWO
    w = get_artjuhov_witness_bound(n)
    while a.le(w):
        yield a
        a = a.plus(ONE)


def is_prime_by_miller(n: Castable, *, cancel: CancelToken | None = None) -> bool:
    """
    Deterministic Miller test: known minimal witness sets below
    341,550,071,728,321, every base up to get_artjuhov_witness_bound(n) above.
    """
    n = BigNat.cast(n)
    if n.le(ONE):
        return False
    if n.le(3):
        return True
    if n.is_even():
        return False

    with timed(f"Miller test of {abbr_nat(n)}") as span:
        tried = 0
        for a in _miller_witnesses(n):
            check(cancel)
            tried += 1
            if has_artjuhov_witness(n, a):
                span.detail = f"witness {a}"
                return False
        span.detail = f"{tried} base(s), no witness"
    return True


# --- AKS ---------------------------------------------------------------------


def calculate_aks_modulus(
    n: Castable, *, factorizer: Factorizer | None = None, cancel: CancelToken | None = None
) -> BigNat:
    """
    Smallest r in [ceil(lg n)^2 + 2, max(ceil(lg n)^5, 3)] with gcd(n, r) = 1
    and ord_r(n) > ceil(lg n)^2. Raises NotFound if the range is exhausted.
    """
    n = BigNat.cast(n)
    if n.is_zero():
        raise InvalidArgument("AKS modulus needs n >= 1")
    lg = BigNat(n.ceil_lg())
    lg_sq = lg.pow(2)
    lo = lg_sq.plus(TWO)
    hi = lg.pow(5).max(3)

    with timed(f"AKS modulus search for {abbr_nat(n)}") as span:
        r = lo
        while r.le(hi):
            check(cancel)
            if n.gcd(r).eq(ONE) and calculate_multiplicative_order_crt(n, r, factorizer).gt(lg_sq):
                span.detail = f"r = {r}"
                return r
            r = r.plus(ONE)
        raise NotFound(f"no AKS modulus for {n} in [{lo}, {hi}]")


def get_aks_upper_bound_simple(n: Castable, r: Castable) -> BigNat:
    """floor(sqrt(r - 1))·ceil(lg n) + 1, a cheap bound covering sqrt(φ(r))·lg n."""
    n = BigNat.cast(n)
    r = BigNat.cast(r)
    return r.minus(ONE).floor_root(2).times(n.ceil_lg()).plus(ONE)


@dataclass(frozen=True)
class AKSParameters:
    n: BigNat
    r: BigNat
    M: BigNat                      # witnesses a = 1..M are checked
    factor: BigNat | None = None   # non-trivial factor found before the witness loop
    is_prime: bool = False         # decided without the witness loop (n <= r)


def get_aks_parameters_simple(
    n: Castable, *, factorizer: Factorizer | None = None, cancel: CancelToken | None = None
) -> AKSParameters:
    """
    AKS set-up for n >= 2: the modulus r and bound M, plus the cheap
    decisions (n a perfect power, a small factor found by gcd, or n <= r).
    """
    n = BigNat.cast(n)
    if n.lt(TWO):
        raise InvalidArgument("AKS needs n >= 2")

    r = calculate_aks_modulus(n, factorizer=factorizer, cancel=cancel)
    M = get_aks_upper_bound_simple(n, r)

    for b in range(2, n.floor_lg() + 1):
        check(cancel)
        root = n.floor_root(b)
        if root.pow(b).eq(n):
            return AKSParameters(n=n, r=r, M=M, factor=root)

    a = TWO
    last = r.min(n.minus(ONE))
    while a.le(last):
        check(cancel)
        g = n.gcd(a)
        if g.gt(ONE):
            return AKSParameters(n=n, r=r, M=M, factor=g)
        a = a.plus(ONE)

    return AKSParameters(n=n, r=r, M=M, is_prime=n.le(r))


def is_aks_witness(n: Castable, r: Castable, a: Castable) -> bool:
    """True iff (x + a)^n ≢ x^(n mod r) + a  (mod x^r - 1, n)."""
    n = BigNat.cast(n)
    r = BigNat.cast(r)
    a = BigNat.cast(a)

    lhs = BigPoly.x().plus(BigPoly(a)).pow_mod(n, r, n)
    rhs = BigPoly(ONE).shift_left(n.mod(r)).plus(BigPoly(a)).mod_coefficients(n)
    return lhs != rhs


def is_prime_by_aks(
    n: Castable, *, factorizer: Factorizer | None = None, cancel: CancelToken | None = None
) -> bool:
    n = BigNat.cast(n)
    if n.lt(TWO):
        return False

    with timed(f"AKS test of {abbr_nat(n)}") as span:
        params = get_aks_parameters_simple(n, factorizer=factorizer, cancel=cancel)
        if params.factor is not None:
            span.detail = f"factor {params.factor}"
            return False
        if params.is_prime:
            span.detail = f"n <= r = {params.r}"
            return True

        a = ONE
        while a.le(params.M):
            check(cancel)
            if is_aks_witness(n, params.r, a):
                span.detail = f"witness {a}"
                return False
            a = a.plus(ONE)
        span.detail = f"r = {params.r}, {params.M} base(s)"
    return True
