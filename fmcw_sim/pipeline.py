"""End-to-end FMCW range simulation pipeline."""
from dataclasses import dataclass
from typing import Optional
import logging
import warnings
import numpy as np

from .config import (
    RadarConfig,
    TransmitterConfig,
    ReceiverConfig,
    ProcessingConfig,
    SimulationConfig,
)
from .errors import AliasingWarning, RangeStatus
from .interfaces import AntennaPattern, PropagationResult, RangeEstimate, Target
from .propagation.echo import propagate
from .signal.waveform import generate_fmcw_chirp, generate_reference_chirp
from .signal.receiver import receive
from .signal.dechirp import dechirp, beat_frequency
from .signal.decimation import decimation_factor, decimate
from .signal.range_processing import (
    peak_to_range,
    max_unambiguous_range,
    range_spectrum,
)

logger = logging.getLogger(__name__)


@dataclass
class ReceivedPulse:
    """Output of the transceiver for one pulse."""
    transmitted: np.ndarray
    samples: np.ndarray
    sample_rate_hz: float
    propagation: PropagationResult
    pulse_index: int = 0


@dataclass
class SimulationResult:
    """Every array produced along the chain, plus the range estimate."""
    config: SimulationConfig
    transmitted: np.ndarray
    received: np.ndarray
    if_signal: np.ndarray
    decimated_if: np.ndarray
    sample_rate_hz: float
    if_sample_rate_hz: float
    decimation_factor: int
    frequency_axis_hz: np.ndarray
    spectrum_magnitude: np.ndarray
    propagation: PropagationResult
    estimate: RangeEstimate

    @property
    def range_m(self) -> float:
        return self.estimate.range_m

    @property
    def status(self) -> RangeStatus:
        return self.estimate.status


def pulse_rng(seed: Optional[int], pulse_index: int) -> np.random.Generator:
    """Independent noise generator for one pulse.

    Seeded runs derive each pulse's stream from the seed and the pulse
    index, so pulses never share noise.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(
        np.random.SeedSequence(seed, spawn_key=(pulse_index,))
    )


def simulate_pulse(
    config: RadarConfig,
    tx: TransmitterConfig,
    rx: ReceiverConfig,
    target: Target,
    pattern: AntennaPattern,
    pulse_index: int = 0
) -> ReceivedPulse:
    """
    Transmit, propagate and receive one pulse.

    Args:
        config: Radar configuration
        tx: Transmitter configuration
        rx: Receiver configuration
        target: Point target
        pattern: Antenna pattern
        pulse_index: Index of the pulse (sets the start time)

    Returns:
        ReceivedPulse with transmitted and received samples
    """
    start_time = pulse_index * config.pulse_time_s

    _, chirp = generate_fmcw_chirp(config, start_time)
    transmitted = tx.amplitude * chirp

    propagation = propagate(transmitted, target, pattern, config, start_time)

    received = receive(
        propagation.waveform,
        rx.gain_db,
        rx.noise_figure_db,
        config.sample_rate_hz,
        rng=pulse_rng(rx.seed, pulse_index)
    )

    return ReceivedPulse(
        transmitted=transmitted,
        samples=received,
        sample_rate_hz=config.sample_rate_hz,
        propagation=propagation,
        pulse_index=pulse_index
    )


def _expected_aliasing(
    radar: RadarConfig,
    processing: ProcessingConfig,
    propagation: PropagationResult
) -> bool:
    """Whether the echo's beat tone falls outside the IF band."""
    if propagation.aliased:
        return True
    f_if = beat_frequency(radar.slope_hz_per_s, propagation.round_trip_delay_s)
    f_if -= propagation.doppler_shift_hz
    return not (0 <= f_if < processing.if_bandwidth_hz)


def run_pipeline(
    sim_config: SimulationConfig,
    target: Target,
    pattern: AntennaPattern,
    pulse_index: int = 0
) -> SimulationResult:
    """
    Execute the complete single-pulse range simulation.

    Args:
        sim_config: Session configuration
        target: Point target
        pattern: Antenna pattern
        pulse_index: Pulse to simulate

    Returns:
        SimulationResult with all intermediate arrays and the estimate
    """
    radar = sim_config.radar
    processing = sim_config.processing

    pulse = simulate_pulse(
        radar,
        sim_config.transmitter,
        sim_config.receiver,
        target,
        pattern,
        pulse_index
    )

    # Dechirp against a freshly generated reference
    reference = generate_reference_chirp(radar, pulse_index)
    if_signal = dechirp(pulse.samples, reference)

    factor = decimation_factor(radar.sample_rate_hz, processing.adc_sample_rate_hz)
    if_sample_rate = radar.sample_rate_hz / factor
    decimated = decimate(
        if_signal,
        factor,
        attenuation_db=processing.filter_attenuation_db,
        transition_ratio=processing.transition_ratio,
        antialias=processing.antialias
    )

    max_range = max_unambiguous_range(
        processing.if_bandwidth_hz, radar.slope_hz_per_s
    )
    freqs, magnitude = range_spectrum(decimated, if_sample_rate, processing.window)
    estimate = peak_to_range(
        freqs, magnitude, radar.slope_hz_per_s, max_range_m=max_range
    )

    if (estimate.status is RangeStatus.OK
            and _expected_aliasing(radar, processing, pulse.propagation)):
        estimate.status = RangeStatus.ALIASED

    # propagate() has already warned about echoes spilling into the next pulse
    if estimate.status is RangeStatus.ALIASED and not pulse.propagation.aliased:
        if processing.antialias:
            detail = (
                f"the anti-alias filter removed the echo, so the estimate "
                f"{estimate.range_m:.2f} m is residual leakage, not the "
                "wrapped position"
            )
        else:
            detail = f"estimate {estimate.range_m:.2f} m is wrapped"
        warnings.warn(
            f"Target at {target.range_m:.2f} m lies beyond the unambiguous "
            f"range {max_range:.2f} m; {detail}",
            AliasingWarning,
            stacklevel=2
        )

    logger.debug(
        "Pulse %d: decimation %d -> %.3e Hz, estimate %.4f m (%s)",
        pulse_index, factor, if_sample_rate, estimate.range_m,
        estimate.status.value
    )

    return SimulationResult(
        config=sim_config,
        transmitted=pulse.transmitted,
        received=pulse.samples,
        if_signal=if_signal,
        decimated_if=decimated,
        sample_rate_hz=radar.sample_rate_hz,
        if_sample_rate_hz=if_sample_rate,
        decimation_factor=factor,
        frequency_axis_hz=freqs,
        spectrum_magnitude=magnitude,
        propagation=pulse.propagation,
        estimate=estimate
    )


def run_simple_simulation(
    target_range_m: float = 1.0,
    noise_figure_db: float = 0.0,
    seed: Optional[int] = None,
    antialias: bool = True
) -> SimulationResult:
    """
    Run a single static boresight target with an isotropic antenna.

    Args:
        target_range_m: Target range in meters
        noise_figure_db: Receiver noise figure (0 dB is noise free)
        seed: Noise seed
        antialias: Apply the decimation anti-alias filter

    Returns:
        SimulationResult
    """
    sim_config = SimulationConfig(
        receiver=ReceiverConfig(noise_figure_db=noise_figure_db, seed=seed),
        processing=ProcessingConfig(antialias=antialias)
    )
    target = Target.at_range(target_range_m)
    return run_pipeline(sim_config, target, AntennaPattern.isotropic())
