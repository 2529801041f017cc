# src/bignat/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from bignat.natural import BigNat

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def abbr_nat(n: Any, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very long naturals as first<head>…last<tail> (decimal digits)."""
    if not isinstance(n, BigNat):
        return str(n)
    digits = n.digits
    d = len(digits)
    if d <= threshold or head + tail >= d:
        return str(n)
    first = "".join(map(str, reversed(digits[d - head:])))
    last = "".join(map(str, reversed(digits[:tail])))
    return f"{first}{ellipsis}{last}"


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def format_factorization(factors: Iterable[tuple[BigNat, BigNat]]) -> str:
    """
    Turn [(p, k), ...] into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, k in factors:
        parts.append(f"{p}^{k}" if k.gt(1) else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_n_minus_one(t: BigNat, s: BigNat) -> str:
    """Render n - 1 = t·2^s, e.g. '35 · 2^4', omitting t = 1 and s = 1 markers."""
    if s.is_zero():
        return str(t)
    out = ""
    if t.gt(1):
        out += f"{t} · "
    out += "2"
    if s.gt(1):
        out += f"^{s}"
    return out


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm (and hh:mm:ss.mmm if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{int(m)}:{s:06.3f}"               # mm:ss.mmm
    h, m = divmod(int(m), MAX_SECONDS)
    return f"{h}:{m:02d}:{s:06.3f}"                # hh:mm:ss.mmm
