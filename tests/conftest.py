"""Shared pytest fixtures for all test modules."""
import pytest
import numpy as np

from fmcw_sim.config import (
    RadarConfig,
    ReceiverConfig,
    ProcessingConfig,
    SimulationConfig,
)
from fmcw_sim.interfaces import AntennaPattern, Target


# === Configuration Fixtures ===

@pytest.fixture
def default_config():
    """Reference 5 GHz / 40 us sweep sampled at 12 GHz."""
    return RadarConfig()


@pytest.fixture
def small_config():
    """Short, slowly sampled sweep for fast unit tests."""
    return RadarConfig(
        bandwidth_hz=100e6,
        pulse_time_s=10e-6,
        sample_rate_hz=250e6,
        carrier_frequency_hz=10e9
    )


@pytest.fixture
def noiseless_config():
    """Reference session with a 0 dB noise figure (no receiver noise)."""
    return SimulationConfig(
        receiver=ReceiverConfig(noise_figure_db=0.0, seed=1)
    )


@pytest.fixture
def unfiltered_config():
    """Noise-free session that subsamples without the anti-alias filter."""
    return SimulationConfig(
        receiver=ReceiverConfig(noise_figure_db=0.0, seed=1),
        processing=ProcessingConfig(antialias=False)
    )


# === Antenna Fixtures ===

@pytest.fixture
def isotropic_pattern():
    """Isotropic 0 dB pattern over the full sphere."""
    return AntennaPattern.isotropic(step_deg=5.0)


@pytest.fixture
def masked_pattern():
    """0 dB pattern with a dead sector between 60 and 120 deg azimuth."""
    az = np.arange(-180.0, 181.0, 5.0)
    el = np.arange(-90.0, 91.0, 5.0)
    gain_db = np.zeros((len(az), len(el)))
    gain_db[(az >= 60) & (az <= 120), :] = -np.inf
    return AntennaPattern(azimuth_deg=az, elevation_deg=el, gain_db=gain_db)


# === Target Fixtures ===

@pytest.fixture
def boresight_target_1m():
    """Static target 1 m in front of the radar."""
    return Target(position_m=(1.0, 0.0, 0.0))
