"""FMCW chirp waveform generation."""
import numpy as np
from typing import Tuple

from ..config import RadarConfig


def generate_fmcw_chirp(
    config: RadarConfig,
    start_time_s: float = 0.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate one pulse of the continuously retriggered linear FM chirp.

    Args:
        config: Radar configuration
        start_time_s: Absolute time of the first sample

    Returns:
        time: Time axis in seconds
        signal: Complex chirp samples (unit amplitude)
    """
    n_samples = config.n_samples
    t = start_time_s + np.arange(n_samples) / config.sample_rate_hz

    # Chirp restarts every pulse_time_s
    t_sweep = np.mod(t, config.pulse_time_s)

    # φ(t) = 2π (f0 t + K t² / 2), K = B/T
    phase = 2 * np.pi * (
        config.start_frequency_hz * t_sweep
        + 0.5 * config.slope_hz_per_s * t_sweep**2
    )
    signal = np.exp(1j * phase)

    return t, signal


def generate_reference_chirp(config: RadarConfig, pulse_index: int = 0) -> np.ndarray:
    """Regenerate the transmitted chirp of a given pulse for dechirping."""
    _, signal = generate_fmcw_chirp(config, pulse_index * config.pulse_time_s)
    return signal


def apply_window(signal: np.ndarray, window_type: str = "hamming") -> np.ndarray:
    """
    Apply window function to reduce spectral sidelobes.

    Args:
        signal: Input signal
        window_type: "hamming", "hanning", "blackman" or "rectangular"

    Returns:
        Windowed signal
    """
    n = len(signal)

    if window_type == "hamming":
        window = np.hamming(n)
    elif window_type == "hanning":
        window = np.hanning(n)
    elif window_type == "blackman":
        window = np.blackman(n)
    elif window_type == "rectangular":
        window = np.ones(n)
    else:
        raise ValueError(f"Unknown window: {window_type}")

    return signal * window
