"""Two-way spreading loss and antenna weighting."""
import numpy as np

from ..interfaces import AntennaPattern


def two_way_spreading_loss(distance_m: np.ndarray) -> np.ndarray:
    """
    Compute monostatic spreading loss.

    Power spreads as 1/R² on the way out and 1/R² on the way back,
    so the two-way loss is R⁴.

    Args:
        distance_m: Distance(s) in meters

    Returns:
        Spreading loss (linear, not dB)
    """
    return np.asarray(distance_m, dtype=float) ** 4


def two_way_spreading_loss_db(distance_m: np.ndarray) -> np.ndarray:
    """
    Compute two-way spreading loss in dB.

    L_dB = 40*log10(R)
    """
    return 10 * np.log10(two_way_spreading_loss(distance_m))


def two_way_antenna_gain(
    pattern: AntennaPattern,
    azimuth_deg: float,
    elevation_deg: float
) -> float:
    """Antenna gain squared, the same pattern is used on transmit and receive."""
    return pattern.gain_at(azimuth_deg, elevation_deg) ** 2


def two_way_gain(
    pattern: AntennaPattern,
    azimuth_deg: float,
    elevation_deg: float,
    range_m: float
) -> float:
    """
    Combined two-way antenna gain and spreading loss.

    g = G(az, el)² / R⁴

    Args:
        pattern: Antenna pattern
        azimuth_deg: Target azimuth
        elevation_deg: Target elevation
        range_m: Target range

    Returns:
        Power ratio between received echo and transmitted chirp
    """
    gain = two_way_antenna_gain(pattern, azimuth_deg, elevation_deg)
    return float(gain / two_way_spreading_loss(range_m))
