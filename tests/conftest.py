# tests/conftest.py
from __future__ import annotations

import pytest
import sympy

from bignat import runtime
from bignat.config import PROFILE_ENV


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch):
    """Every test starts from the built-in defaults, with no profile in the environment."""
    monkeypatch.delenv(PROFILE_ENV, raising=False)
    runtime.reset()
    yield runtime.current()
    runtime.reset()


@pytest.fixture(scope="session")
def small_primes():
    """Primes below 1000, from an independent source."""
    return [int(p) for p in sympy.primerange(2, 1000)]
