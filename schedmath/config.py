"""Arithmetic configuration for schedmath.

Behaviour flags are read from environment variables with sensible defaults:
- SCHEDMATH_CHECKED: raise Int32Overflow instead of wrapping (default: false)
"""

import os
from dataclasses import dataclass

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class ArithmeticConfig:
    """Behaviour flags for 32-bit narrowing.

    Attributes:
        checked: If True, results outside the signed 32-bit range raise
            Int32Overflow. If False (default), they wrap silently the way
            native two's complement arithmetic does.
    """

    checked: bool = False

    @classmethod
    def from_env(cls) -> "ArithmeticConfig":
        """Build a config from SCHEDMATH_* environment variables."""
        checked = os.environ.get("SCHEDMATH_CHECKED", "false").lower() in _TRUTHY
        return cls(checked=checked)


# Read on every narrowing, so tests may swap it out
CONFIG = ArithmeticConfig.from_env()
