# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

DEFAULTS: dict[str, dict[str, Any]] = {
    "BEHAVIOUR": {"DEBUG": False},
    "PRIMALITY": {"NUM_SAMPLES": 20},
    "FACTORING": {"GENERATOR": "mod30"},
    "CLI": {"ABBREVIATE_DIGITS": 60},
}


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # enables the stderr trace

    def apply(self, settings: Any) -> None:
        self.profile_name = (
            getattr(settings, "name", None)
            or getattr(settings, "_source", None)
            or "default"
        )

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            # grab UPPERCASE attributes from simple objects / modules
            cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}

        self.settings = dict(cfg)

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup, e.g. 'PRIMALITY.NUM_SAMPLES'; falls back to DEFAULTS, then `default`."""
        if not key:
            return default
        for source in (self.settings, DEFAULTS):
            cur: Any = source
            found = True
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    found = False
                    break
            if found:
                return cur
        return default


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("bignat_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Drop the active runtime; the next current() starts from defaults."""
    _current_runtime.set(None)


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)
