"""
Runtime settings for VALID8.

Settings come from environment variables; CLI flags override them.

    VALID8_DEBUG=1          debug logging
    VALID8_VERBOSE=1        same as VALID8_DEBUG
    VALID8_MAX_VARIABLES=N  ceiling on distinct variables (default 16)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_VARIABLES = 16


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """
    Properties:
        debug: Enable debug-level logging
        max_variables: Largest number of distinct variables the truth
            table may enumerate (2 ** max_variables rows)
    """

    debug: bool = False
    max_variables: int = DEFAULT_MAX_VARIABLES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ

        raw_limit = environ.get("VALID8_MAX_VARIABLES", "").strip()
        try:
            max_variables = int(raw_limit) if raw_limit else DEFAULT_MAX_VARIABLES
        except ValueError:
            raise ValueError(
                f"VALID8_MAX_VARIABLES must be an integer, got {raw_limit!r}"
            ) from None
        if max_variables < 0:
            raise ValueError("VALID8_MAX_VARIABLES must not be negative")

        return cls(
            debug=_flag(environ.get("VALID8_DEBUG")) or _flag(environ.get("VALID8_VERBOSE")),
            max_variables=max_variables,
        )


__all__ = ["Settings", "DEFAULT_MAX_VARIABLES"]
