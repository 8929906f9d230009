"""
settings.py — Application Configuration
=========================================
Immutable configuration read once from the environment.

    from settings import load_config
    cfg = load_config()

Every variable carries the ALGOVIZ_ prefix:

    ALGOVIZ_SECRET_KEY         Flask session key (random per process if unset)
    ALGOVIZ_MAX_INPUT_SIZE     longest array / list / node count   (default 20, 1..100)
    ALGOVIZ_MAX_STRING_LENGTH  longest string input                 (default 30, 1..200)
    ALGOVIZ_MAX_AMOUNT         largest coin-change amount           (default 50, 0..500)
    ALGOVIZ_MAX_FACTORIAL_N    largest factorial n                  (default 10, 1..20)
    ALGOVIZ_DEFAULT_SPEED      slow | medium | fast | turbo         (default medium)
    ALGOVIZ_LOG_LEVEL          DEBUG | INFO | WARNING | ERROR        (default INFO)

Malformed values fall back to the default; out-of-range numbers are
clamped into range.
"""

import logging
import os
import secrets
from dataclasses import dataclass, field
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX   = "ALGOVIZ_"
SPEED_NAMES  = ("slow", "medium", "fast", "turbo")
LOG_LEVELS   = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    secret_key:        str = field(default_factory=lambda: secrets.token_hex(32), repr=False)
    max_input_size:    int = 20
    max_string_length: int = 30
    max_amount:        int = 50
    max_factorial_n:   int = 10
    default_speed:     str = "medium"
    log_level:         str = "INFO"


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build an AppConfig from `environ` (os.environ when omitted)."""
    env = os.environ if environ is None else environ
    defaults = AppConfig()

    secret = env.get(ENV_PREFIX + "SECRET_KEY") or defaults.secret_key

    speed = _get_choice(env, "DEFAULT_SPEED", defaults.default_speed, SPEED_NAMES)
    level = _get_choice(env, "LOG_LEVEL", defaults.log_level, LOG_LEVELS, upper=True)

    return AppConfig(
        secret_key=secret,
        max_input_size=_get_int(env, "MAX_INPUT_SIZE", defaults.max_input_size,
                                min_value=1, max_value=100),
        max_string_length=_get_int(env, "MAX_STRING_LENGTH", defaults.max_string_length,
                                   min_value=1, max_value=200),
        max_amount=_get_int(env, "MAX_AMOUNT", defaults.max_amount,
                            min_value=0, max_value=500),
        max_factorial_n=_get_int(env, "MAX_FACTORIAL_N", defaults.max_factorial_n,
                                 min_value=1, max_value=20),
        default_speed=speed,
        log_level=level,
    )


def _get_int(
    env: Mapping[str, str],
    key: str,
    default: int,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    raw = env.get(ENV_PREFIX + key)
    value = default
    if raw is not None:
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, key, raw)
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _get_choice(env: Mapping[str, str], key: str, default: str, choices, upper: bool = False) -> str:
    raw = env.get(ENV_PREFIX + key)
    if raw is None:
        return default
    value = raw.strip().upper() if upper else raw.strip().lower()
    if value not in choices:
        logger.warning("Ignoring %s%s=%r: expected one of %s",
                       ENV_PREFIX, key, raw, ", ".join(choices))
        return default
    return value
