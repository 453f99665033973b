"""Engine configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_TIMEOUT = 2.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class EngineConfig:
    """Validation engine configuration.

    Attributes:
        strict: Fail closed on unknown rule names instead of passing them
        unique_timeout: Seconds to wait for the uniqueness collaborator
        log_level: Logging level name used by the CLI
    """

    strict: bool = False
    unique_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Create config from environment variables.

        Reads:
        1. FORMFORGE_STRICT ("1", "true", "yes", "on" enable strict mode)
        2. FORMFORGE_UNIQUE_TIMEOUT (float seconds; invalid values keep the default)
        3. FORMFORGE_LOG_LEVEL (e.g. "DEBUG")
        """
        strict = os.environ.get("FORMFORGE_STRICT", "").strip().lower() in _TRUE_VALUES

        timeout = DEFAULT_TIMEOUT
        raw_timeout = os.environ.get("FORMFORGE_UNIQUE_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logging.getLogger(__name__).warning(
                    "Ignoring invalid FORMFORGE_UNIQUE_TIMEOUT=%r", raw_timeout
                )

        log_level = os.environ.get("FORMFORGE_LOG_LEVEL", "WARNING").upper()
        return cls(strict=strict, unique_timeout=timeout, log_level=log_level)
