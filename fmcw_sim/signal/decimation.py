"""Anti-alias filtering and downsampling of the IF signal."""
import logging
import math
from functools import lru_cache
import numpy as np
from scipy import signal as sp_signal

from ..errors import ConfigError

logger = logging.getLogger(__name__)


def decimation_factor(sample_rate_hz: float, target_sample_rate_hz: float) -> int:
    """
    Integer downsampling ratio from the RF rate to the ADC rate.

    factor = ceil(fs / fs_target)

    Raises:
        ConfigError: non-positive rates or a factor below 1
    """
    if not (sample_rate_hz > 0 and target_sample_rate_hz > 0):
        raise ConfigError("Sample rates must be positive")
    factor = math.ceil(sample_rate_hz / target_sample_rate_hz)
    if factor < 1:
        raise ConfigError(f"Decimation factor must be >= 1, got {factor}")
    return factor


@lru_cache(maxsize=16)
def design_antialias_filter(
    factor: int,
    attenuation_db: float = 60.0,
    transition_ratio: float = 0.1,
    one_sided: bool = True
) -> np.ndarray:
    """
    Kaiser-window FIR anti-alias filter for decimation by factor.

    The stopband starts at half the decimated rate, so everything that
    would fold back after downsampling is attenuated by attenuation_db.
    The passband is narrower by the transition width. With one_sided the
    taps are shifted up by half the decimated rate, so the passband sits
    inside [0, fs/factor) for an IF that only has positive frequencies.

    Args:
        factor: Decimation factor
        attenuation_db: Stopband attenuation
        transition_ratio: Transition width as a fraction of half the
            decimated rate
        one_sided: Shift the passband to positive frequencies

    Returns:
        Filter taps (read-only), normalized to a sample rate of 1
    """
    if factor < 1:
        raise ConfigError(f"Decimation factor must be >= 1, got {factor}")

    band_edge = 0.5 / factor
    width = transition_ratio * band_edge
    cutoff = band_edge - width / 2

    # kaiserord takes the width relative to Nyquist (0.5 cycles/sample)
    numtaps, beta = sp_signal.kaiserord(attenuation_db, width / 0.5)
    numtaps |= 1  # odd length keeps the filter centered on a sample

    taps = sp_signal.firwin(numtaps, cutoff, window=("kaiser", beta), fs=1.0)

    if one_sided:
        n = np.arange(numtaps) - numtaps // 2
        taps = taps * np.exp(2j * np.pi * band_edge * n)

    logger.debug(
        "Designed %d-tap anti-alias filter for factor %d (%.0f dB)",
        numtaps, factor, attenuation_db
    )
    taps.setflags(write=False)
    return taps


def circular_filter(signal: np.ndarray, taps: np.ndarray) -> np.ndarray:
    """
    Zero-phase circular FIR filtering via FFT.

    The signal is treated as one period of a periodic sequence, so there
    are no start-up transients at the pulse edges.
    """
    n = len(signal)
    numtaps = len(taps)
    kernel = np.zeros(n, dtype=complex)
    # Center tap at index 0, taps longer than the signal wrap around
    np.add.at(kernel, (np.arange(numtaps) - numtaps // 2) % n, taps)
    return np.fft.ifft(np.fft.fft(signal) * np.fft.fft(kernel))


def decimate(
    if_signal: np.ndarray,
    factor: int,
    attenuation_db: float = 60.0,
    transition_ratio: float = 0.1,
    one_sided: bool = True,
    antialias: bool = True
) -> np.ndarray:
    """
    Low-pass filter and downsample the IF signal.

    Args:
        if_signal: IF samples at the RF sample rate
        factor: Decimation factor (>= 1)
        attenuation_db: Anti-alias stopband attenuation
        transition_ratio: Filter transition width relative to the cutoff
        one_sided: IF occupies positive frequencies only
        antialias: Skip the filter when False (plain subsampling)

    Returns:
        Decimated IF signal, ceil(len / factor) samples
    """
    if factor < 1:
        raise ConfigError(f"Decimation factor must be >= 1, got {factor}")
    if_signal = np.asarray(if_signal)

    if factor == 1:
        return if_signal.copy()

    if antialias:
        taps = design_antialias_filter(
            factor, attenuation_db, transition_ratio, one_sided
        )
        filtered = circular_filter(if_signal, taps)
    else:
        filtered = if_signal

    return filtered[::factor].copy()


def filter_response_db(
    taps: np.ndarray,
    n_points: int = 8192
):
    """
    Frequency response of filter taps over the full normalized band.

    Returns:
        freqs: Frequencies in cycles/sample, [-0.5, 0.5)
        response_db: Magnitude in dB
    """
    freqs, response = sp_signal.freqz(
        taps, worN=n_points, whole=True, fs=1.0
    )
    freqs = np.where(freqs >= 0.5, freqs - 1.0, freqs)
    order = np.argsort(freqs)
    magnitude = np.abs(response[order])
    return freqs[order], 20 * np.log10(np.maximum(magnitude, 1e-300))
