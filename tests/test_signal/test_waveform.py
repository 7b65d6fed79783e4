"""Tests for chirp waveform generation module."""
import pytest
import numpy as np
from fmcw_sim.config import RadarConfig
from fmcw_sim.signal.waveform import (
    generate_fmcw_chirp,
    generate_reference_chirp,
    apply_window,
)


def _instantaneous_frequency(signal, sample_rate_hz):
    phase = np.unwrap(np.angle(signal))
    freq = np.diff(phase) * sample_rate_hz / (2 * np.pi)
    return np.append(freq, freq[-1])


class TestFMCWChirp:
    """Tests for FMCW chirp generation."""

    def test_chirp_returns_tuple(self, small_config):
        """Chirp should return (time, signal) tuple."""
        time, signal = generate_fmcw_chirp(small_config)
        assert len(time) == len(signal)

    def test_chirp_length(self, small_config):
        """Chirp should have round(T × fs) samples."""
        _, signal = generate_fmcw_chirp(small_config)
        assert len(signal) == round(small_config.pulse_time_s * small_config.sample_rate_hz)

    def test_chirp_is_unit_complex(self, small_config):
        """Chirp should be complex with constant envelope."""
        _, signal = generate_fmcw_chirp(small_config)
        assert np.iscomplexobj(signal)
        assert np.allclose(np.abs(signal), 1.0)

    def test_chirp_slope(self, small_config):
        """Instantaneous frequency should sweep at B/T from f0."""
        config = RadarConfig(
            start_frequency_hz=10e6,
            bandwidth_hz=100e6,
            pulse_time_s=10e-6,
            sample_rate_hz=250e6
        )
        time, signal = generate_fmcw_chirp(config)
        inst_freq = _instantaneous_frequency(signal, config.sample_rate_hz)

        slope = np.polyfit(time[:-1], inst_freq[:-1], 1)[0]
        assert slope == pytest.approx(config.slope_hz_per_s, rel=1e-3)
        assert inst_freq[0] == pytest.approx(10e6, abs=1e6)

    def test_deterministic(self, small_config):
        """Same config and start time give identical samples."""
        _, a = generate_fmcw_chirp(small_config, 1e-6)
        _, b = generate_fmcw_chirp(small_config, 1e-6)
        assert np.array_equal(a, b)

    def test_retriggered_each_pulse(self, small_config):
        """Chirp repeats with period T."""
        _, first = generate_fmcw_chirp(small_config, 0.0)
        _, third = generate_fmcw_chirp(small_config, 2 * small_config.pulse_time_s)
        assert np.allclose(first, third, atol=1e-6)

    def test_start_time_shift(self, small_config):
        """Starting one sample later shifts the sequence by one sample."""
        dt = 1 / small_config.sample_rate_hz
        _, base = generate_fmcw_chirp(small_config)
        _, shifted = generate_fmcw_chirp(small_config, dt)
        assert np.allclose(shifted[:-1], base[1:], atol=1e-6)

    def test_reference_matches_transmitted(self, small_config):
        """Reference chirp regenerates the transmitted pulse."""
        _, tx = generate_fmcw_chirp(small_config, 3 * small_config.pulse_time_s)
        ref = generate_reference_chirp(small_config, pulse_index=3)
        assert np.array_equal(tx, ref)


class TestWindow:
    """Tests for windowing functions."""

    def test_hamming_window(self):
        """Hamming window should taper edges."""
        signal = np.ones(100)
        windowed = apply_window(signal, 'hamming')
        assert windowed[0] < windowed[50]
        assert windowed[-1] < windowed[50]

    def test_rectangular_window(self):
        """Rectangular window should not change signal."""
        signal = np.ones(100)
        windowed = apply_window(signal, 'rectangular')
        assert np.allclose(signal, windowed)

    def test_unknown_window(self):
        """Unknown windows are rejected."""
        with pytest.raises(ValueError, match="Unknown window"):
            apply_window(np.ones(10), 'taylor')
