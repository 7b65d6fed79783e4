"""Tests for receiver gain and noise injection."""
import math
import pytest
import numpy as np
from scipy.constants import Boltzmann

from fmcw_sim.signal.receiver import receive, thermal_noise_power, T0_KELVIN


class TestThermalNoise:
    """Tests for noise power computation."""

    def test_noise_power_formula(self):
        """N = k T0 (F - 1) fs."""
        power = thermal_noise_power(3.0, 1e6)
        expected = Boltzmann * T0_KELVIN * (10 ** 0.3 - 1) * 1e6
        assert power == pytest.approx(expected)

    def test_zero_noise_figure_is_noise_free(self):
        """0 dB noise figure adds no noise."""
        assert thermal_noise_power(0.0, 1e9) == 0.0

    def test_noise_scales_with_bandwidth(self):
        """Noise power is proportional to sample rate."""
        assert thermal_noise_power(6.0, 2e6) == pytest.approx(
            2 * thermal_noise_power(6.0, 1e6)
        )


class TestReceive:
    """Tests for the receive operation."""

    def test_gain_applied(self):
        """20 dB gain multiplies amplitude by 10."""
        signal = np.ones(16, dtype=complex)
        out = receive(signal, 20.0, 0.0, 1e6, rng=0)
        assert np.allclose(out, 10.0)

    def test_muted_gain(self):
        """-inf dB gain removes the signal entirely."""
        signal = np.ones(16, dtype=complex)
        out = receive(signal, -math.inf, 0.0, 1e6, rng=0)
        assert np.all(out == 0)

    def test_input_not_modified(self):
        """Receive returns a new array."""
        signal = np.ones(16, dtype=complex)
        receive(signal, 6.0, 10.0, 1e6, rng=0)
        assert np.all(signal == 1.0)

    def test_noise_power_statistics(self):
        """Measured noise power matches the noise floor, split over I and Q."""
        fs = 1e9
        nf_db = 10.0
        out = receive(np.zeros(200_000, dtype=complex), 0.0, nf_db, fs, rng=42)
        expected = thermal_noise_power(nf_db, fs)

        assert np.mean(np.abs(out) ** 2) == pytest.approx(expected, rel=0.02)
        assert np.var(out.real) == pytest.approx(expected / 2, rel=0.03)
        assert np.var(out.imag) == pytest.approx(expected / 2, rel=0.03)

    def test_seeded_reproducible(self):
        """Same seed gives the same noise."""
        zeros = np.zeros(64, dtype=complex)
        a = receive(zeros, 0.0, 5.0, 1e9, rng=123)
        b = receive(zeros, 0.0, 5.0, 1e9, rng=123)
        assert np.array_equal(a, b)

    def test_different_seeds_differ(self):
        """Different seeds give independent noise."""
        zeros = np.zeros(64, dtype=complex)
        a = receive(zeros, 0.0, 5.0, 1e9, rng=1)
        b = receive(zeros, 0.0, 5.0, 1e9, rng=2)
        assert not np.allclose(a, b)

    def test_unseeded_draws_fresh_noise(self):
        """Without a seed every call draws new samples."""
        zeros = np.zeros(64, dtype=complex)
        a = receive(zeros, 0.0, 5.0, 1e9)
        b = receive(zeros, 0.0, 5.0, 1e9)
        assert not np.allclose(a, b)

    def test_accepts_generator(self):
        """A Generator can be passed directly."""
        rng = np.random.default_rng(5)
        out = receive(np.zeros(8, dtype=complex), 0.0, 5.0, 1e9, rng=rng)
        assert out.shape == (8,)
