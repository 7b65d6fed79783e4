"""FMCW simulation configuration management."""
from dataclasses import dataclass, field, asdict
from typing import Optional, Union, List
from pathlib import Path
import yaml
import math

from .errors import ConfigError

SPEED_OF_LIGHT = 299792458.0


def _raise_if_invalid(config) -> None:
    errors = config.validate()
    if errors:
        raise ConfigError(
            f"Invalid {type(config).__name__}: " + "; ".join(errors)
        )


@dataclass(frozen=True)
class RadarConfig:
    """Configuration of the FMCW chirp and its sampling.

    Attributes:
        name: Radar system identifier
        start_frequency_hz: Sweep start in the complex sample representation
        bandwidth_hz: Swept bandwidth
        pulse_time_s: Sweep duration (one pulse repetition interval)
        sample_rate_hz: RF simulation sample rate
        carrier_frequency_hz: RF carrier the sampled sweep is mixed onto
    """

    # Identification
    name: str = "FMCW 5 GHz sweep"

    # Sweep (Hz, s)
    start_frequency_hz: float = 0.0
    bandwidth_hz: float = 5e9
    pulse_time_s: float = 40e-6

    # Sampling
    sample_rate_hz: float = 12e9

    # RF
    carrier_frequency_hz: float = 77e9

    def __post_init__(self):
        _raise_if_invalid(self)

    @property
    def prf_hz(self) -> float:
        """Pulse repetition frequency, the chirp is retriggered every pulse."""
        return 1.0 / self.pulse_time_s

    @property
    def slope_hz_per_s(self) -> float:
        """Chirp slope K = B/T."""
        return self.bandwidth_hz / self.pulse_time_s

    @property
    def n_samples(self) -> int:
        """Number of samples in one pulse."""
        return int(round(self.pulse_time_s * self.sample_rate_hz))

    @property
    def range_resolution_m(self) -> float:
        """Range resolution c/(2B)."""
        return SPEED_OF_LIGHT / (2 * self.bandwidth_hz)

    @property
    def rf_start_frequency_hz(self) -> float:
        return self.carrier_frequency_hz + self.start_frequency_hz

    @property
    def wavelength_m(self) -> float:
        """Wavelength at the RF sweep start."""
        if self.rf_start_frequency_hz == 0:
            return math.inf
        return SPEED_OF_LIGHT / self.rf_start_frequency_hz

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RadarConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.bandwidth_hz > 0:
            errors.append("bandwidth_hz must be positive")

        if not self.pulse_time_s > 0:
            errors.append("pulse_time_s must be positive")

        if not self.sample_rate_hz > 0:
            errors.append("sample_rate_hz must be positive")

        if self.start_frequency_hz < 0:
            errors.append("start_frequency_hz must be non-negative")

        if self.carrier_frequency_hz < 0:
            errors.append("carrier_frequency_hz must be non-negative")

        if errors:
            return errors

        if self.sample_rate_hz <= 2 * self.bandwidth_hz:
            errors.append("sample_rate_hz must exceed 2*bandwidth_hz (Nyquist)")
        elif self.sample_rate_hz <= 2 * (self.start_frequency_hz + self.bandwidth_hz):
            errors.append(
                "sample_rate_hz must exceed 2*(start_frequency_hz + bandwidth_hz)"
            )

        if self.n_samples < 2:
            errors.append("pulse must span at least 2 samples")

        return errors


@dataclass(frozen=True)
class TransmitterConfig:
    """Transmitter settings.

    Attributes:
        peak_power_w: Transmitted power, amplitude is sqrt(peak_power_w)
    """
    peak_power_w: float = 1.0

    def __post_init__(self):
        _raise_if_invalid(self)

    @property
    def amplitude(self) -> float:
        return math.sqrt(self.peak_power_w)

    def validate(self) -> List[str]:
        if not self.peak_power_w > 0:
            return ["peak_power_w must be positive"]
        return []


@dataclass(frozen=True)
class ReceiverConfig:
    """Receiver front-end settings.

    Attributes:
        gain_db: Amplitude gain applied before noise injection (-inf mutes the echo)
        noise_figure_db: Noise figure referenced to T0 = 290 K
        seed: Base seed for the noise generator (None draws fresh entropy)
    """
    gain_db: float = 0.0
    noise_figure_db: float = 8.0
    seed: Optional[int] = None

    def __post_init__(self):
        _raise_if_invalid(self)

    def validate(self) -> List[str]:
        errors = []
        if math.isnan(self.gain_db) or self.gain_db == math.inf:
            errors.append("gain_db must be finite or -inf")
        if not (0 <= self.noise_figure_db < math.inf):
            errors.append("noise_figure_db must be a finite value >= 0 dB")
        if self.seed is not None and self.seed < 0:
            errors.append("seed must be non-negative")
        return errors


@dataclass(frozen=True)
class ProcessingConfig:
    """IF chain and range processing settings.

    Attributes:
        if_bandwidth_hz: IF bandwidth, sets the maximum unambiguous range
        adc_sample_rate_hz: Target sample rate after decimation
        antialias: Apply the anti-alias filter before downsampling
        filter_attenuation_db: Stopband attenuation of the anti-alias filter
        transition_ratio: Filter transition width as a fraction of the cutoff
        window: Window applied before the range FFT
    """
    if_bandwidth_hz: float = 15e6
    adc_sample_rate_hz: float = 15e6
    antialias: bool = True
    filter_attenuation_db: float = 60.0
    transition_ratio: float = 0.1
    window: str = "rectangular"

    def __post_init__(self):
        _raise_if_invalid(self)

    def validate(self) -> List[str]:
        errors = []
        if not self.if_bandwidth_hz > 0:
            errors.append("if_bandwidth_hz must be positive")
        if not self.adc_sample_rate_hz > 0:
            errors.append("adc_sample_rate_hz must be positive")
        if not self.filter_attenuation_db >= 40:
            errors.append("filter_attenuation_db must be at least 40 dB")
        if not (0 < self.transition_ratio < 1):
            errors.append("transition_ratio must be in (0, 1)")
        if self.window not in ("rectangular", "hamming", "hanning", "blackman"):
            errors.append(f"Unknown window: {self.window}")
        return errors


@dataclass(frozen=True)
class SimulationConfig:
    """Complete configuration of one simulation session."""
    radar: RadarConfig = field(default_factory=RadarConfig)
    transmitter: TransmitterConfig = field(default_factory=TransmitterConfig)
    receiver: ReceiverConfig = field(default_factory=ReceiverConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        data = data or {}
        return cls(
            radar=RadarConfig(**data.get("radar", {})),
            transmitter=TransmitterConfig(**data.get("transmitter", {})),
            receiver=ReceiverConfig(**data.get("receiver", {})),
            processing=ProcessingConfig(**data.get("processing", {})),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SimulationConfig":
        """Load nested configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save nested configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)
