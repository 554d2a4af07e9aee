"""Decode configuration: DecodeConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_decode._logging import configure_logging

__all__ = [
    'LOG_LEVEL_ENV',
    'DecodeConfig',
    'get_config',
    'init',
]

LOG_LEVEL_ENV = 'KLAW_DECODE_LOG_LEVEL'

_LEVELS = frozenset({'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'})


@dataclass(frozen=True)
class DecodeConfig:
    """Process-wide settings for klaw-decode.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Emit JSON log lines rather than console-formatted ones.
        log_failures: Emit a ``decode_failed`` debug event when a top-level decode fails.
    """

    log_level: str | None = None
    json_logs: bool = True
    log_failures: bool = True


_DEFAULT = DecodeConfig()

# Set by init(); decoders read it but never write it
_config: DecodeConfig | None = None


def _detect_log_level() -> str | None:
    """Read the log level from KLAW_DECODE_LOG_LEVEL, if set and valid."""
    env_level = os.environ.get(LOG_LEVEL_ENV, '').strip()
    if not env_level:
        return None
    return _normalize_level(env_level)


def _normalize_level(level: str) -> str | None:
    normalized = level.upper()
    if normalized not in _LEVELS:
        logging.warning("Unknown log level '%s', logging stays disabled", level)
        return None
    return normalized


def init(
    log_level: str | None = None,
    *,
    json_logs: bool = True,
    log_failures: bool = True,
) -> DecodeConfig:
    """Initialize klaw-decode with the given configuration.

    Decoders work without calling this; it only turns on logging.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). Read from
            KLAW_DECODE_LOG_LEVEL if None. None after that = silent.
        json_logs: Emit JSON log lines (True) or console output (False).
        log_failures: Log failed top-level decodes at debug level.

    Returns:
        The DecodeConfig that was set.

    Example:
        ```python
        from klaw_decode import init

        init(log_level='DEBUG', json_logs=False)
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = _detect_log_level() if log_level is None else _normalize_level(log_level)

    _config = DecodeConfig(
        log_level=resolved_level,
        json_logs=json_logs,
        log_failures=log_failures,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=json_logs)

    return _config


def get_config() -> DecodeConfig:
    """Get the current configuration, or the defaults if init() was never called."""
    if _config is None:
        return _DEFAULT
    return _config
