"""Signal generation and processing stages."""
from .waveform import generate_fmcw_chirp, generate_reference_chirp, apply_window
from .receiver import receive, thermal_noise_power
from .dechirp import dechirp, beat_frequency
from .decimation import decimation_factor, design_antialias_filter, decimate
from .range_processing import (
    estimate_range,
    peak_to_range,
    range_resolution,
    max_unambiguous_range,
    frequency_axis,
)

__all__ = [
    'generate_fmcw_chirp', 'generate_reference_chirp', 'apply_window',
    'receive', 'thermal_noise_power',
    'dechirp', 'beat_frequency',
    'decimation_factor', 'design_antialias_filter', 'decimate',
    'estimate_range', 'peak_to_range', 'range_resolution', 'max_unambiguous_range', 'frequency_axis',
]
