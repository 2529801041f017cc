from __future__ import annotations

import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

from colorama import Fore, Style

from bignat.errors import Cancelled
from bignat.runtime import current as _rt_current


def _fmt_ms(ms: float) -> str:
    return f"{ms:8.2f} ms"


def enabled() -> bool:
    return bool(_rt_current().debug)


def debug_line(label: str, status: str, dt_ms: float, detail: str | None = None) -> None:
    """Emit a single debug line with timing and colored status (to STDERR)."""
    if status == "OK":
        stat = f"{Fore.GREEN}{Style.BRIGHT}OK  {Style.RESET_ALL}"
    elif status == "STOP":
        stat = f"{Fore.YELLOW}{Style.BRIGHT}STOP{Style.RESET_ALL}"
    else:  # "ERR"
        stat = f"{Fore.RED}{Style.BRIGHT}ERR {Style.RESET_ALL}"

    tm = f"{Style.DIM}[{_fmt_ms(dt_ms)}]{Style.RESET_ALL}"
    line = f"{tm} {stat}  {label}"
    if detail:
        line += f" — {Style.DIM}{detail}{Style.RESET_ALL}"

    sys.stderr.write(line + "\n")
    sys.stderr.flush()


class Span:
    """Handle yielded by timed(); callers attach a short detail for the trace line."""

    __slots__ = ("detail",)

    def __init__(self) -> None:
        self.detail: str | None = None


@contextmanager
def timed(label: str) -> Iterator[Span]:
    """
    Time the enclosed block and emit one trace line when debug is on.
    Exceptions propagate unchanged; they are reported as ERR (or STOP for cancellation).
    """
    span = Span()
    if not enabled():
        yield span
        return

    t0 = time.perf_counter()
    try:
        yield span
    except Cancelled as e:
        debug_line(label, "STOP", (time.perf_counter() - t0) * 1000.0, str(e) or span.detail)
        raise
    except Exception as e:
        debug_line(label, "ERR", (time.perf_counter() - t0) * 1000.0, f"{e.__class__.__name__}: {e}")
        raise
    debug_line(label, "OK", (time.perf_counter() - t0) * 1000.0, span.detail)
