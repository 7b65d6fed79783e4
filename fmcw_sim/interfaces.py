"""Shared interface dataclasses passed between pipeline stages."""
from dataclasses import dataclass, field
from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import RegularGridInterpolator

from .errors import ConfigError, RangeStatus


def _readonly(values, dtype=np.float64) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class AntennaPattern:
    """Tabulated antenna gain, shared read-only by transmit and receive.

    Attributes:
        azimuth_deg: Azimuth angles, strictly increasing (N_az,)
        elevation_deg: Elevation angles, strictly increasing (N_el,)
        gain_db: Gain pattern (N_az, N_el) in dB, -inf for masked regions
        phase_rad: Phase pattern (N_az, N_el) in radians
    """
    azimuth_deg: NDArray[np.float64]
    elevation_deg: NDArray[np.float64]
    gain_db: NDArray[np.float64]
    phase_rad: Optional[NDArray[np.float64]] = None
    _interp: RegularGridInterpolator = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        az = _readonly(self.azimuth_deg)
        el = _readonly(self.elevation_deg)
        gain_db = _readonly(self.gain_db)
        if self.phase_rad is None:
            phase = _readonly(np.zeros(gain_db.shape))
        else:
            phase = _readonly(self.phase_rad)

        if az.ndim != 1 or el.ndim != 1 or len(az) < 2 or len(el) < 2:
            raise ConfigError("Angle axes must be 1-D with at least 2 entries")
        if np.any(np.diff(az) <= 0) or np.any(np.diff(el) <= 0):
            raise ConfigError("Angle axes must be strictly increasing")
        if az[-1] - az[0] > 360.0 + 1e-9:
            raise ConfigError("Azimuth axis must not span more than 360 deg")
        if gain_db.shape != (len(az), len(el)):
            raise ConfigError(
                f"gain_db shape {gain_db.shape} does not match "
                f"({len(az)}, {len(el)})"
            )
        if phase.shape != gain_db.shape:
            raise ConfigError("phase_rad must have the same shape as gain_db")
        if np.any(np.isnan(gain_db)) or np.any(gain_db == np.inf):
            raise ConfigError("gain_db must be finite or -inf")

        object.__setattr__(self, "azimuth_deg", az)
        object.__setattr__(self, "elevation_deg", el)
        object.__setattr__(self, "gain_db", gain_db)
        object.__setattr__(self, "phase_rad", phase)

        interp_az = az
        interp_gain = self.gain_linear
        # Full-circle tables stop one step short of az[0] + 360; close the seam
        seam = az[0] + 360.0 - az[-1]
        if 0 < seam <= np.max(np.diff(az)) + 1e-9:
            interp_az = np.append(az, az[0] + 360.0)
            interp_gain = np.vstack([interp_gain, interp_gain[:1]])

        object.__setattr__(self, "_interp", RegularGridInterpolator(
            (interp_az, el),
            interp_gain,
            method="linear",
            bounds_error=False,
            fill_value=0.0
        ))

    @classmethod
    def isotropic(
        cls,
        gain_db: float = 0.0,
        step_deg: float = 1.0
    ) -> "AntennaPattern":
        """Uniform pattern covering the full sphere."""
        az = np.arange(-180.0, 180.0 + step_deg / 2, step_deg)
        el = np.arange(-90.0, 90.0 + step_deg / 2, step_deg)
        return cls(
            azimuth_deg=az,
            elevation_deg=el,
            gain_db=np.full((len(az), len(el)), gain_db)
        )

    @property
    def gain_linear(self) -> np.ndarray:
        """Power gain on a linear scale, masked cells are 0."""
        return 10.0 ** (self.gain_db / 10.0)

    def gain_at(self, azimuth: float, elevation: float) -> float:
        """Interpolate gain at given angles.

        Azimuth wraps into the table's own 360 deg domain, elevation is
        clamped to +/-90 deg.
        Angles outside the tabulated domain return 0.

        Args:
            azimuth: Azimuth angle in degrees
            elevation: Elevation angle in degrees

        Returns:
            Interpolated gain (linear)
        """
        az0 = self.azimuth_deg[0]
        az = (azimuth - az0) % 360.0 + az0
        el = float(np.clip(elevation, -90.0, 90.0))
        return float(self._interp([[az, el]])[0])

    def peak_gain_db(self) -> float:
        """Return peak gain in dB."""
        return float(np.max(self.gain_db))


@dataclass(frozen=True)
class Target:
    """Point target relative to the radar (boresight along +x).

    Attributes:
        position_m: Position (x, y, z) in meters
        velocity_m_s: Velocity (vx, vy, vz) in m/s
    """
    position_m: Tuple[float, float, float]
    velocity_m_s: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        position = tuple(float(p) for p in self.position_m)
        velocity = tuple(float(v) for v in self.velocity_m_s)
        if len(position) != 3 or len(velocity) != 3:
            raise ConfigError("position_m and velocity_m_s need 3 components")
        if not np.all(np.isfinite(position + velocity)):
            raise ConfigError("Target state must be finite")
        object.__setattr__(self, "position_m", position)
        object.__setattr__(self, "velocity_m_s", velocity)

    @classmethod
    def at_range(
        cls,
        range_m: float,
        azimuth_deg: float = 0.0,
        elevation_deg: float = 0.0,
        velocity_m_s: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    ) -> "Target":
        """Place a target at the given range and angles."""
        az = np.deg2rad(azimuth_deg)
        el = np.deg2rad(elevation_deg)
        position = (
            range_m * np.cos(el) * np.cos(az),
            range_m * np.cos(el) * np.sin(az),
            range_m * np.sin(el),
        )
        return cls(position_m=position, velocity_m_s=velocity_m_s)

    @property
    def range_m(self) -> float:
        return float(np.linalg.norm(self.position_m))

    @property
    def azimuth_deg(self) -> float:
        x, y, _ = self.position_m
        return float(np.rad2deg(np.arctan2(y, x)))

    @property
    def elevation_deg(self) -> float:
        x, y, z = self.position_m
        return float(np.rad2deg(np.arctan2(z, np.hypot(x, y))))

    @property
    def line_of_sight(self) -> np.ndarray:
        """Unit vector pointing from the target back to the radar."""
        return -np.asarray(self.position_m) / self.range_m

    @property
    def radial_velocity_m_s(self) -> float:
        """Closing speed along the line of sight (positive when approaching)."""
        return float(np.dot(self.velocity_m_s, self.line_of_sight))


@dataclass
class PropagationResult:
    """Echo arriving at the receiver for one pulse.

    Attributes:
        waveform: Delayed, attenuated, phase-shifted samples (N,)
        round_trip_delay_s: Two-way delay 2R/c
        doppler_shift_hz: Doppler shift applied to the echo
        two_way_gain: Antenna gain squared times 1/R^4 spreading (power ratio)
        azimuth_deg: Target azimuth
        elevation_deg: Target elevation
        aliased: Delay reaches past the pulse repetition interval
    """
    waveform: NDArray[np.complex128]
    round_trip_delay_s: float
    doppler_shift_hz: float
    two_way_gain: float
    azimuth_deg: float = 0.0
    elevation_deg: float = 0.0
    aliased: bool = False

    def __iter__(self):
        return iter((
            self.waveform,
            self.round_trip_delay_s,
            self.doppler_shift_hz,
            self.two_way_gain,
        ))


@dataclass
class RangeEstimate:
    """Range estimate with its validity flag.

    Attributes:
        range_m: Estimated (possibly wrapped) range, NaN without a target
        status: ok, NoTargetDetected or Aliased
        peak_index: FFT bin of the spectral peak
        peak_frequency_hz: Beat frequency of the peak
        max_unambiguous_range_m: Range limit set by the IF bandwidth
    """
    range_m: float
    status: RangeStatus
    peak_index: Optional[int] = None
    peak_frequency_hz: Optional[float] = None
    max_unambiguous_range_m: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status is RangeStatus.OK
