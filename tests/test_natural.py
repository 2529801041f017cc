# tests/test_natural.py
"""
BigNat arithmetic, checked against Python ints and gmpy2.

Run: pytest -v tests/test_natural.py
"""

from __future__ import annotations

import math
import random

import gmpy2
import pytest

from bignat.errors import DivisionByZero, InvalidArgument, InvalidRange, ParseError, Underflow
from bignat.natural import ONE, ZERO, BigNat

# ---------- fixtures ----------------------------------------------------------

_RNG = random.Random(0x5EED)

PAIRS = [
    (0, 0),
    (1, 0),
    (0, 7),
    (999, 1),
    (1000, 999),
    (12345678901234567890, 98765432109876543210),
    (10**40, 10**40 - 1),
    (2**127 - 1, 2**61 - 1),
    (7, 123456789012345678901234567890),
] + [(_RNG.getrandbits(_RNG.randrange(1, 200)), _RNG.getrandbits(_RNG.randrange(1, 120))) for _ in range(25)]

PAIR_IDS = [f"{str(a)[:8]}_{str(b)[:8]}" for a, b in PAIRS]


# ---------- construction and representation -----------------------------------


def test_digits_are_little_endian():
    assert BigNat(31415926535).digits == (5, 3, 5, 6, 2, 9, 5, 1, 4, 1, 3)


def test_leading_zeros_are_stripped():
    n = BigNat("000271828182800")
    assert n.digits == (0, 0, 8, 2, 8, 1, 8, 2, 8, 1, 7, 2)
    assert str(n) == "271828182800"


@pytest.mark.parametrize("text", ["0", "000", "00000000"])
def test_zero_has_one_representation(text):
    n = BigNat(text)
    assert n.digits == ()
    assert n.is_zero()
    assert str(n) == "0"
    assert n == BigNat() == ZERO


@pytest.mark.parametrize("text", ["1", "42", "31415926535897932384626433832795028841971"])
def test_string_round_trip(text):
    assert str(BigNat(text)) == text


@pytest.mark.parametrize("bad", ["", "-1", "1.5", " 12", "12 ", "abc", "12a", "+3", "0x1f", -1, True, 2.0])
def test_parse_errors(bad):
    with pytest.raises(ParseError) as ei:
        BigNat(bad)
    assert str(ei.value) == f"cannot parse {bad}"


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        BigNat("x")


def test_try_cast():
    assert BigNat.try_cast("x") is None
    assert BigNat.try_cast(-3) is None
    assert BigNat.try_cast("0012") == 12
    n = BigNat(5)
    assert BigNat.cast(n) is n


def test_immutable():
    n = BigNat(3)
    with pytest.raises(AttributeError):
        n._d = (4,)
    with pytest.raises(AttributeError):
        del n._d
    assert n == 3


def test_repr():
    assert repr(BigNat(42)) == "BigNat('42')"


# ---------- arithmetic against Python ints ------------------------------------


@pytest.mark.parametrize("a,b", PAIRS, ids=PAIR_IDS)
def test_plus_times(a, b):
    x, y = BigNat(a), BigNat(b)
    assert int(x.plus(y)) == a + b
    assert int(x.times(y)) == a * b
    assert x.plus(y).minus(y) == x


@pytest.mark.parametrize("a,b", PAIRS, ids=PAIR_IDS)
def test_minus(a, b):
    hi, lo = max(a, b), min(a, b)
    assert int(BigNat(hi).minus(lo)) == hi - lo
    if hi != lo:
        with pytest.raises(Underflow):
            BigNat(lo).minus(hi)


@pytest.mark.parametrize("a,b", PAIRS, ids=PAIR_IDS)
def test_div_mod(a, b):
    x, y = BigNat(a), BigNat(b)
    if b == 0:
        with pytest.raises(DivisionByZero):
            x.div_mod(y)
        with pytest.raises(ZeroDivisionError):
            x.mod(y)
        return
    q, r = x.div_mod(y)
    assert (int(q), int(r)) == divmod(a, b)
    assert r.lt(y)
    assert q.times(y).plus(r) == x


@pytest.mark.parametrize("a,b", [(p, q) for p, q in PAIRS if p and q], ids=[i for (p, q), i in zip(PAIRS, PAIR_IDS) if p and q])
def test_gcd_lcm(a, b):
    x, y = BigNat(a), BigNat(b)
    g = x.gcd(y)
    assert int(g) == math.gcd(a, b)
    assert g.divides(x) and g.divides(y)
    assert g.times(x.lcm(y)) == x.times(y)


@pytest.mark.parametrize("a,b", [(0, 5), (5, 0), (0, 0)])
def test_gcd_rejects_zero(a, b):
    with pytest.raises(InvalidArgument):
        BigNat(a).gcd(b)
    with pytest.raises(InvalidArgument):
        BigNat(a).lcm(b)


def test_divides():
    assert BigNat(3).divides(12)
    assert not BigNat(5).divides(12)
    assert BigNat(0).divides(0)
    assert not BigNat(0).divides(5)
    assert BigNat(7).divides(0)


def test_compare_and_min_max():
    a, b = BigNat(99), BigNat(100)
    assert a.lt(b) and a.le(b) and b.gt(a) and b.ge(a) and a.ne(b)
    assert a.eq("099")
    assert a.compare(b) == -1 and b.compare(a) == 1 and a.compare(99) == 0
    assert a.min(b) is a and a.max(b) is b


# ---------- exponentiation ----------------------------------------------------

POW_CASES = [(0, 0), (5, 0), (0, 1), (0, 9), (3, 100), (2, 1000), (10, 21), (123456789, 7), (7, 234)]


@pytest.mark.parametrize("a,e", POW_CASES, ids=[f"{a}^{e}" for a, e in POW_CASES])
def test_pow(a, e):
    assert int(BigNat(a).pow(e)) == a ** e


POW_MOD_CASES = [
    (4, 13, 497),
    (2, 1000, 10**9 + 7),
    (12345678901234567890, 98765432109876543210, 1000000000000000000000007),
    (5, 0, 1),
    (5, 0, 7),
    (0, 0, 7),
    (3, 10**20, 2**61 - 1),
    (10**30, 10**30, 99991),
]


@pytest.mark.parametrize("a,e,m", POW_MOD_CASES, ids=[f"{a}^{e}_mod_{m}"[:40] for a, e, m in POW_MOD_CASES])
def test_pow_mod_matches_gmpy2(a, e, m):
    assert int(BigNat(a).pow_mod(e, m)) == int(gmpy2.powmod(a, e, m))


def test_pow_mod_identity_is_one_mod_m():
    assert BigNat(5).pow_mod(0, 1) == 0
    assert BigNat(5).pow_mod(0, 2) == 1


def test_pow_mod_zero_modulus():
    with pytest.raises(DivisionByZero):
        BigNat(5).pow_mod(3, 0)


def test_pow_mod_agrees_with_pow_then_mod():
    for a in range(0, 30, 7):
        for e in range(0, 25, 4):
            for m in (1, 2, 9, 97):
                assert BigNat(a).pow_mod(e, m) == BigNat(a).pow(e).mod(m)


# ---------- logarithms and roots -----------------------------------------------


def test_ln():
    assert BigNat(0).ln() == -math.inf
    assert BigNat(1).ln() == 0.0
    assert BigNat(1000).ln() == pytest.approx(math.log(1000))
    assert BigNat(2**53 + 1).ln() == pytest.approx(53 * math.log(2))
    assert BigNat(10**30).ln() == pytest.approx(30 * math.log(10), rel=1e-12)
    assert BigNat(7**5000).ln() == pytest.approx(5000 * math.log(7), rel=1e-12)


LG_CASES = [(1, 0, 0), (2, 1, 1), (3, 1, 2), (4, 2, 2), (1023, 9, 10), (1024, 10, 10), (1025, 10, 11),
            (2**200, 200, 200), (2**200 + 1, 200, 201), (10**50, 166, 167)]


@pytest.mark.parametrize("n,floor_lg,ceil_lg", LG_CASES, ids=[str(c[0])[:12] for c in LG_CASES])
def test_floor_ceil_lg(n, floor_lg, ceil_lg):
    assert BigNat(n).floor_lg() == floor_lg
    assert BigNat(n).ceil_lg() == ceil_lg


def test_lg_of_zero():
    with pytest.raises(InvalidArgument):
        ZERO.floor_lg()
    with pytest.raises(InvalidArgument):
        ZERO.ceil_lg()


ROOT_CASES = [(0, 3), (1, 5), (2, 2), (2, 3), (99, 2), (100, 2), (101, 2), (10**30 + 1, 3), (2**200 - 1, 7),
              (123456789123456789, 2), (31, 1), (3**40, 40), (3**40 - 1, 40)]


@pytest.mark.parametrize("n,k", ROOT_CASES, ids=[f"{str(n)[:12]}_{k}" for n, k in ROOT_CASES])
def test_floor_root_matches_gmpy2(n, k):
    assert int(BigNat(n).floor_root(k)) == int(gmpy2.iroot(gmpy2.mpz(n), k)[0])


def test_zeroth_root():
    with pytest.raises(InvalidArgument):
        BigNat(8).floor_root(0)


# ---------- sampling ----------------------------------------------------------


def test_random_stays_in_range():
    rng = random.Random(7).random
    lo, hi = 10**30, 10**30 + 1000
    seen = {int(BigNat.random(lo, hi, rng)) for _ in range(300)}
    assert all(lo <= v < hi for v in seen)
    assert len(seen) > 100


def test_random_single_value_range():
    assert BigNat.random(5, 6) == 5


def test_random_extreme_generator_values():
    assert BigNat.random(2, 10**20, lambda: 0.0) == 2
    assert BigNat.random(2, 10**20, lambda: 0.9999999999999999).lt(10**20)


@pytest.mark.parametrize("lo,hi", [(5, 5), (6, 5)])
def test_random_empty_range(lo, hi):
    with pytest.raises(InvalidRange):
        BigNat.random(lo, hi)


# ---------- Python protocol ---------------------------------------------------


def test_numeric_protocol():
    a = BigNat(17)
    assert a + 3 == 20 and 3 + a == 20
    assert a - 7 == 10 and 20 - a == 3
    assert a * 2 == 34 and 2 * a == 34
    assert a // 5 == 3 and a % 5 == 2
    assert divmod(a, 5) == (BigNat(3), BigNat(2))
    assert a ** 2 == 289
    assert pow(a, 2, 7) == 2
    assert int(a) == 17 and bool(a) and not bool(ZERO)
    with pytest.raises(Underflow):
        _ = 3 - a


def test_hash_and_ordering():
    assert hash(BigNat(5)) == hash(5)
    assert {BigNat(5), BigNat("005"), 5} == {5}
    assert sorted([BigNat(10), BigNat(2), BigNat(33)]) == [2, 10, 33]
    assert BigNat(3) < 4 <= BigNat(4) < BigNat(10**20)


def test_comparison_with_foreign_types():
    assert BigNat(3) != "3"
    assert BigNat(3) != -3
    with pytest.raises(TypeError):
        _ = BigNat(3) < "4"
    with pytest.raises(TypeError):
        _ = BigNat(3) + 1.5


@pytest.mark.parametrize("neg", [-1, -3, -(10**30)])
def test_ordering_against_negative_ints(neg):
    for x in (BigNat(0), BigNat(3), BigNat(10**30)):
        assert x > neg and x >= neg
        assert not (x < neg) and not (x <= neg)
        assert neg < x and neg <= x
        assert x != neg


def test_operations_are_pure():
    a, b = BigNat(123456789), BigNat(987654321)
    assert a.times(b) == a.times(b)
    assert a.pow_mod(b, 1000003) == a.pow_mod(b, 1000003)
    assert a == 123456789 and b == 987654321
    assert ONE.plus(ONE) == 2 and ONE == 1
