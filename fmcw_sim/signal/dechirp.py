"""Dechirp mixing of the received signal with the reference chirp."""
import numpy as np

from ..errors import ShapeError


def dechirp(received: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """
    Mix the received signal against the reference chirp.

    IF = reference × conj(received)

    The reference is the operand that is not conjugated. For an echo
    delayed by τ this puts the beat tone at +slope·τ, so the [0, fs) FFT
    axis used for range estimation maps to positive ranges. Conjugating
    the reference instead would mirror the tone to -slope·τ.

    Args:
        received: Received samples
        reference: Reference chirp (same shape as received)

    Returns:
        IF beat signal
    """
    received = np.asarray(received)
    reference = np.asarray(reference)
    if received.shape != reference.shape:
        raise ShapeError(
            f"Cannot dechirp: received {received.shape} vs "
            f"reference {reference.shape}"
        )
    return reference * np.conj(received)


def beat_frequency(slope_hz_per_s: float, delay_s: float) -> float:
    """Beat frequency f_IF = slope × τ."""
    return slope_hz_per_s * delay_s
