"""Environment driven settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


_definitions = os.getenv("UNITMATH_DEFINITIONS")

# Extra definition file appended to the default registry.
DEFINITIONS_PATH: Optional[Path] = Path(_definitions) if _definitions else None

# Compare node structure after the hash check in ``UnitNode.__eq__``.
STRICT_EQUALITY: bool = _env_flag("UNITMATH_STRICT_EQUALITY")

LOG_LEVEL: str = os.getenv("UNITMATH_LOG_LEVEL", "WARNING").upper()


__all__ = ["DEFINITIONS_PATH", "STRICT_EQUALITY", "LOG_LEVEL"]
