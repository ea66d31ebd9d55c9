# cavemap/validation.py
"""Argument checks shared by the generation stages.

Each helper logs the offending value and raises ``InvalidConfig`` so
callers fail before allocating any buffers.
"""
from numbers import Integral, Real
from typing import Any, Sequence, Tuple

import structlog

from cavemap.errors import InvalidConfig

log = structlog.get_logger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def require_int(name: str, value: Any) -> int:
    if not _is_int(value):
        log.error("Expected an integer", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    return int(value)


def require_positive_int(name: str, value: Any) -> int:
    value = require_int(name, value)
    if value <= 0:
        log.error("Expected a positive integer", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be positive, got {value}")
    return value


def require_non_negative_int(name: str, value: Any) -> int:
    value = require_int(name, value)
    if value < 0:
        log.error("Expected a non-negative integer", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be non-negative, got {value}")
    return value


def require_probability(name: str, value: Any) -> float:
    if not isinstance(value, Real) or isinstance(value, bool):
        log.error("Expected a probability", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be a number, got {value!r}")
    value = float(value)
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        log.error("Probability out of range", parameter=name, value=value)
        raise InvalidConfig(f"{name} must lie in [0, 1], got {value}")
    return value


def require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        log.error("Expected a boolean", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be a boolean, got {value!r}")
    return value


def require_non_negative_number(name: str, value: Any) -> float:
    if not isinstance(value, Real) or isinstance(value, bool):
        log.error("Expected a number", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not value >= 0.0:
        log.error("Expected a non-negative number", parameter=name, value=value)
        raise InvalidConfig(f"{name} must be non-negative, got {value}")
    return value


def require_color(name: str, value: Any) -> Tuple[float, float, float, float]:
    """Four components, each in [0, 1]."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 4:
        log.error("Expected an RGBA color", parameter=name, value=value)
        raise InvalidConfig(f"{name} must have 4 components, got {value!r}")
    r, g, b, a = (require_probability(f"{name} component", c) for c in value)
    return r, g, b, a


__all__ = [
    "require_int",
    "require_positive_int",
    "require_non_negative_int",
    "require_probability",
    "require_bool",
    "require_non_negative_number",
    "require_color",
]
