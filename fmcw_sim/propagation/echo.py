"""Echo synthesis: round-trip delay, Doppler shift and attenuation."""
import logging
import warnings
import numpy as np

from ..config import RadarConfig, SPEED_OF_LIGHT
from ..errors import AliasingWarning, ConfigError
from ..interfaces import AntennaPattern, PropagationResult, Target
from .pathloss import two_way_gain

logger = logging.getLogger(__name__)


def round_trip_delay(range_m: float) -> float:
    """Two-way delay τ = 2R/c."""
    return 2 * range_m / SPEED_OF_LIGHT


def doppler_shift(radial_velocity_m_s: float, frequency_hz: float) -> float:
    """
    Doppler shift f_d = 2 v_r f / c.

    Args:
        radial_velocity_m_s: Closing speed (positive when approaching)
        frequency_hz: RF frequency

    Returns:
        Doppler shift in Hz
    """
    return 2 * radial_velocity_m_s * frequency_hz / SPEED_OF_LIGHT


def fractional_delay(
    signal: np.ndarray,
    delay_s: float,
    sample_rate_hz: float
) -> np.ndarray:
    """
    Delay a periodic band-limited signal by an arbitrary amount.

    Uses the FFT phase ramp exp(-j2πfτ), which interpolates between
    samples. The delay is circular: samples pushed past the end of the
    pulse re-enter at the start, as for a continuously retriggered chirp.

    Args:
        signal: Complex samples of one period
        delay_s: Delay in seconds
        sample_rate_hz: Sample rate

    Returns:
        Delayed copy of signal
    """
    n = len(signal)
    freqs = np.fft.fftfreq(n, d=1.0 / sample_rate_hz)
    spectrum = np.fft.fft(signal)
    return np.fft.ifft(spectrum * np.exp(-2j * np.pi * freqs * delay_s))


def propagate(
    tx_waveform: np.ndarray,
    target: Target,
    pattern: AntennaPattern,
    config: RadarConfig,
    start_time_s: float = 0.0
) -> PropagationResult:
    """
    Produce the echo of tx_waveform from a point target.

    Args:
        tx_waveform: Transmitted chirp samples for one pulse
        target: Point target
        pattern: Antenna pattern (used for transmit and receive)
        config: Radar configuration
        start_time_s: Absolute time of the first sample

    Returns:
        PropagationResult with the delayed waveform, delay, Doppler and gain
    """
    range_m = target.range_m
    if not range_m > 0:
        raise ConfigError("Target must be at a positive range")

    azimuth = target.azimuth_deg
    elevation = target.elevation_deg

    tau = round_trip_delay(range_m)
    f_d = doppler_shift(target.radial_velocity_m_s, config.rf_start_frequency_hz)
    gain = two_way_gain(pattern, azimuth, elevation, range_m)

    aliased = tau >= config.pulse_time_s
    if aliased:
        warnings.warn(
            f"Round-trip delay {tau:.3e} s exceeds the pulse repetition "
            f"interval {config.pulse_time_s:.3e} s; echo aliases into the "
            "next pulse",
            AliasingWarning,
            stacklevel=2
        )

    t = start_time_s + np.arange(len(tx_waveform)) / config.sample_rate_hz
    phase = 2 * np.pi * (f_d * t - config.carrier_frequency_hz * tau)

    delayed = fractional_delay(tx_waveform, tau, config.sample_rate_hz)
    echo = np.sqrt(gain) * np.exp(1j * phase) * delayed

    logger.debug(
        "Echo from R=%.3f m az=%.1f el=%.1f: tau=%.3e s, f_d=%.1f Hz, gain=%.3e",
        range_m, azimuth, elevation, tau, f_d, gain
    )

    return PropagationResult(
        waveform=echo,
        round_trip_delay_s=tau,
        doppler_shift_hz=f_d,
        two_way_gain=gain,
        azimuth_deg=azimuth,
        elevation_deg=elevation,
        aliased=aliased
    )
