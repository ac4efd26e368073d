"""
Resolution of the ``XPAY_*`` settings used to configure the SDK.

Settings are layered: the process environment (or an explicit ``base``
mapping), then any ``.env`` file for keys not already set, then explicit
overrides which always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = [
    "ENV_PREFIX",
    "XPayEnvironment",
    "build_environment",
]

ENV_PREFIX = "XPAY_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


@dataclass(frozen=True)
class XPayEnvironment:
    """The ``XPAY_*`` variables visible to the SDK after layering."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.variables.get(key)
        if value is None or value == "":
            return default
        return value

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError(f"{key} must be a boolean flag, got '{value}'")


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> XPayEnvironment:
    """
    Assemble an :class:`XPayEnvironment`.

    ``base`` defaults to :data:`os.environ`; set ``env_file`` to ``None`` to
    skip reading a ``.env`` file. Only keys starting with ``XPAY_`` are kept.
    """
    source = base if base is not None else os.environ
    merged: Dict[str, str] = {
        key: value for key, value in source.items() if key.startswith(ENV_PREFIX)
    }

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            if key.startswith(ENV_PREFIX):
                merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return XPayEnvironment(variables=merged)
