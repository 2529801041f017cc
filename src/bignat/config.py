from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomllib as toml

from bignat.errors import ConfigError

PROFILE_ENV = "BIGNAT_PROFILE"


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [PROFILE])
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise ConfigError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    if "PROFILE" in raw:
        raw = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


# --- Public API ------------------------------------------------------------


def load_settings(path: str | os.PathLike[str]) -> Settings:
    """
    Load a TOML profile, strip the [PROFILE] metadata and coerce the known
    numeric keys, returning Settings(data=..., name=..., description=..., _source=path).
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise ConfigError(f"profile not found at {p}")

    raw = _load_toml(p)
    data, resolved_name, description = _split_profile_data(raw, p.stem)

    samples = (data.get("PRIMALITY") or {}).get("NUM_SAMPLES")
    if samples is not None and (not isinstance(samples, int) or isinstance(samples, bool) or samples < 1):
        raise ConfigError(f"{p.name}: PRIMALITY.NUM_SAMPLES must be a positive integer, got {samples!r}.")

    generator = (data.get("FACTORING") or {}).get("GENERATOR")
    if generator is not None and generator not in ("mod30", "naive"):
        raise ConfigError(f"{p.name}: FACTORING.GENERATOR must be 'mod30' or 'naive', got {generator!r}.")

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=p,
    )


def load_default_settings() -> Settings | None:
    """Load the profile named by $BIGNAT_PROFILE, or None when unset."""
    env = os.environ.get(PROFILE_ENV)
    if not env:
        return None
    return load_settings(env)
