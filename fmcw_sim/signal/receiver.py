"""Receiver front end: gain and thermal noise."""
from typing import Optional, Union
import numpy as np
from scipy.constants import Boltzmann

# IEEE reference temperature for noise figure (K)
T0_KELVIN = 290.0

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def thermal_noise_power(noise_figure_db: float, sample_rate_hz: float) -> float:
    """
    Receiver-added noise power referenced to T0.

    N = k T0 (F - 1) fs

    Args:
        noise_figure_db: Noise figure in dB
        sample_rate_hz: Sample rate (noise bandwidth of complex samples)

    Returns:
        Noise power in W
    """
    noise_factor = 10 ** (noise_figure_db / 10)
    return Boltzmann * T0_KELVIN * (noise_factor - 1) * sample_rate_hz


def complex_gaussian_noise(
    n_samples: int,
    power_w: float,
    rng: np.random.Generator
) -> np.ndarray:
    """Circular complex white noise, power split equally between I and Q."""
    return np.sqrt(power_w / 2) * (
        rng.standard_normal(n_samples) + 1j * rng.standard_normal(n_samples)
    )


def receive(
    signal: np.ndarray,
    gain_db: float,
    noise_figure_db: float,
    sample_rate_hz: float,
    rng: SeedLike = None
) -> np.ndarray:
    """
    Apply receiver gain, then add thermal noise.

    Args:
        signal: Echo samples at the antenna
        gain_db: Amplitude gain in dB (-inf gives zero gain)
        noise_figure_db: Receiver noise figure in dB
        sample_rate_hz: Sample rate
        rng: Seed, SeedSequence or Generator; None draws fresh entropy

    Returns:
        Noisy received samples
    """
    generator = np.random.default_rng(rng)

    gain = 10 ** (gain_db / 20)
    amplified = gain * np.asarray(signal)

    noise_power = thermal_noise_power(noise_figure_db, sample_rate_hz)
    noise = complex_gaussian_noise(len(amplified), noise_power, generator)

    return amplified + noise
