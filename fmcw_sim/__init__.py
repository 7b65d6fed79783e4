"""FMCW radar range simulation package."""
from .config import (
    RadarConfig,
    TransmitterConfig,
    ReceiverConfig,
    ProcessingConfig,
    SimulationConfig,
)
from .errors import ConfigError, ShapeError, AliasingWarning, RangeStatus
from .interfaces import AntennaPattern, Target, PropagationResult, RangeEstimate
from .pipeline import simulate_pulse, run_pipeline, run_simple_simulation

__all__ = [
    "RadarConfig",
    "TransmitterConfig",
    "ReceiverConfig",
    "ProcessingConfig",
    "SimulationConfig",
    "ConfigError",
    "ShapeError",
    "AliasingWarning",
    "RangeStatus",
    "AntennaPattern",
    "Target",
    "PropagationResult",
    "RangeEstimate",
    "simulate_pulse",
    "run_pipeline",
    "run_simple_simulation",
]
