# tests/test_trace_cancel.py
from __future__ import annotations

import threading
import time

import pytest

from bignat import primality as pt
from bignat import trace
from bignat.cancel import CancelToken, check
from bignat.errors import Cancelled, DivisionByZero
from bignat.fmt import strip_ansi
from bignat.runtime import APPLY, current
from bignat.trial_division import get_factors


@pytest.fixture
def debug_on():
    current().debug = True


# ---------- trace -------------------------------------------------------------


def test_trace_is_silent_by_default(capsys):
    with trace.timed("quiet") as span:
        span.detail = "nothing to see"
    assert capsys.readouterr().err == ""


def test_trace_ok_line(capsys, debug_on):
    with trace.timed("a block") as span:
        span.detail = "3 steps"
    err = strip_ansi(capsys.readouterr().err)
    assert err.count("\n") == 1
    assert " ms]" in err
    assert "OK" in err and "a block" in err and "3 steps" in err


def test_trace_err_line_and_propagation(capsys, debug_on):
    with pytest.raises(DivisionByZero):
        with trace.timed("dividing"):
            raise DivisionByZero("x / 0")
    err = strip_ansi(capsys.readouterr().err)
    assert "ERR" in err and "DivisionByZero: x / 0" in err


def test_trace_stop_line_on_cancel(capsys, debug_on):
    with pytest.raises(Cancelled):
        with trace.timed("search"):
            raise Cancelled("timed out")
    err = strip_ansi(capsys.readouterr().err)
    assert "STOP" in err and "timed out" in err


def test_library_searches_are_traced(capsys, debug_on):
    get_factors(80137)
    pt.is_prime_by_miller(1000003)
    err = strip_ansi(capsys.readouterr().err)
    assert "trial division of 80137" in err
    assert "2 prime power(s)" in err
    assert "Miller test of 1000003" in err


def test_debug_follows_applied_profile(capsys):
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    assert trace.enabled()
    get_factors(12)
    assert "trial division of 12" in strip_ansi(capsys.readouterr().err)


# ---------- cancellation ------------------------------------------------------


def test_token_starts_live():
    token = CancelToken()
    assert not token.cancelled
    token.raise_if_cancelled()
    check(token)
    check(None)


def test_cancel_sets_reason():
    token = CancelToken()
    token.cancel("enough")
    assert token.cancelled
    with pytest.raises(Cancelled, match="enough"):
        check(token)


def test_timeout_cancels_automatically():
    token = CancelToken(timeout=0.01)
    time.sleep(0.05)
    assert token.cancelled
    assert token.reason == "timed out"


def test_cancel_from_another_thread():
    token = CancelToken()
    worker = threading.Thread(target=token.cancel, args=("from thread",))
    worker.start()
    worker.join()
    with pytest.raises(Cancelled, match="from thread"):
        token.raise_if_cancelled()


def test_timeout_interrupts_long_search():
    token = CancelToken(timeout=0.05)
    with pytest.raises(Cancelled):
        # 2^89 - 1 is prime, so every one of the samples would be tried
        pt.is_probable_prime(2**89 - 1, num_samples=10**6, cancel=token)
