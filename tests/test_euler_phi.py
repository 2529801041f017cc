# tests/test_euler_phi.py
from __future__ import annotations

import sympy
import pytest

from bignat.errors import InvalidArgument
from bignat.euler_phi import (
    calculate_euler_phi,
    calculate_euler_phi_factors,
    calculate_euler_phi_prime_power,
)
from bignat.trial_division import GENERATORS, make_factorizer


@pytest.mark.parametrize("p,k,expected", [(2, 7, 64), (101, 3, 1020100), (7, 1, 6), (2, 1, 1)])
def test_prime_power(p, k, expected):
    assert calculate_euler_phi_prime_power(p, k) == expected


def test_prime_power_needs_positive_exponent():
    with pytest.raises(InvalidArgument):
        calculate_euler_phi_prime_power(5, 0)


@pytest.mark.parametrize("n,expected", [(1, 1), (2, 1), (128, 64), (72, 24), (80137, 126 * 630)])
def test_euler_phi(n, expected):
    assert calculate_euler_phi(n) == expected


def test_from_factor_list():
    assert calculate_euler_phi_factors([]) == 1
    assert calculate_euler_phi_factors([(2, 3), (3, 2)]) == 24


def test_phi_of_zero_is_rejected():
    with pytest.raises(InvalidArgument):
        calculate_euler_phi(0)


def test_explicit_factorizer():
    naive = make_factorizer(GENERATORS["naive"])
    assert calculate_euler_phi(1979447, naive) == 630 * 3136


@pytest.mark.parametrize("n", range(1, 300))
def test_matches_sympy_totient(n):
    assert int(calculate_euler_phi(n)) == int(sympy.totient(n))
