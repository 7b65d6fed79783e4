"""Error kinds and result states shared by the signal chain."""
from enum import Enum


class ConfigError(ValueError):
    """Invalid or non-physical simulation parameters."""


class ShapeError(ValueError):
    """Array operands with mismatched shapes."""


class AliasingWarning(UserWarning):
    """Echo delay or estimated range lies outside the unambiguous interval."""


class RangeStatus(str, Enum):
    """Validity flag reported with every range estimate."""
    OK = "ok"
    NO_TARGET_DETECTED = "NoTargetDetected"
    ALIASED = "Aliased"
