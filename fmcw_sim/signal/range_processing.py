"""Range estimation from the decimated IF spectrum."""
from typing import Optional, Tuple
import numpy as np

from ..config import SPEED_OF_LIGHT
from ..errors import RangeStatus
from ..interfaces import RangeEstimate
from .waveform import apply_window


def range_resolution(bandwidth_hz: float) -> float:
    """Range resolution ΔR = c / (2B)."""
    return SPEED_OF_LIGHT / (2 * bandwidth_hz)


def max_unambiguous_range(if_bandwidth_hz: float, slope_hz_per_s: float) -> float:
    """
    Maximum unambiguous range set by the IF bandwidth.

    R_max = B_IF × c / (2 × slope)
    """
    return if_bandwidth_hz * SPEED_OF_LIGHT / (2 * slope_hz_per_s)


def frequency_axis(n_samples: int, sample_rate_hz: float) -> np.ndarray:
    """FFT frequency axis f[k] = fs × k / M over [0, fs)."""
    return sample_rate_hz / n_samples * np.arange(n_samples)


def frequency_to_range(frequency_hz, slope_hz_per_s: float):
    """Convert beat frequency to range: R = f × c / (2 × slope)."""
    return np.asarray(frequency_hz) * SPEED_OF_LIGHT / (2 * slope_hz_per_s)


def range_spectrum(
    decimated_if: np.ndarray,
    sample_rate_hz: float,
    window: str = "rectangular"
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Magnitude spectrum of the decimated IF signal.

    Returns:
        freqs: Frequency axis in Hz
        magnitude: |FFT| per bin
    """
    samples = apply_window(np.asarray(decimated_if), window)
    magnitude = np.abs(np.fft.fft(samples))
    return frequency_axis(len(samples), sample_rate_hz), magnitude


def estimate_range(
    decimated_if: np.ndarray,
    if_sample_rate_hz: float,
    slope_hz_per_s: float,
    max_range_m: Optional[float] = None,
    window: str = "rectangular"
) -> RangeEstimate:
    """
    Estimate target range from the dominant beat frequency.

    Args:
        decimated_if: IF samples at the ADC rate
        if_sample_rate_hz: ADC sample rate
        slope_hz_per_s: Chirp slope
        max_range_m: Unambiguous range limit, estimates beyond it are flagged
        window: Window applied before the FFT

    Returns:
        RangeEstimate; NoTargetDetected for an all-zero spectrum
    """
    freqs, magnitude = range_spectrum(decimated_if, if_sample_rate_hz, window)
    return peak_to_range(freqs, magnitude, slope_hz_per_s, max_range_m)


def peak_to_range(
    freqs: np.ndarray,
    magnitude: np.ndarray,
    slope_hz_per_s: float,
    max_range_m: Optional[float] = None
) -> RangeEstimate:
    """Pick the spectral peak of an already computed range spectrum."""
    if len(magnitude) == 0 or not np.any(magnitude > 0):
        return RangeEstimate(
            range_m=float("nan"),
            status=RangeStatus.NO_TARGET_DETECTED,
            max_unambiguous_range_m=max_range_m
        )

    max_index = int(np.argmax(magnitude))
    max_freq = float(freqs[max_index])
    range_m = float(frequency_to_range(max_freq, slope_hz_per_s))

    if max_range_m is not None and range_m > max_range_m:
        status = RangeStatus.ALIASED
    else:
        status = RangeStatus.OK

    return RangeEstimate(
        range_m=range_m,
        status=status,
        peak_index=max_index,
        peak_frequency_hz=max_freq,
        max_unambiguous_range_m=max_range_m
    )
