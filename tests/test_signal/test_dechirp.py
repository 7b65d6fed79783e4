"""Tests for dechirp mixing."""
import pytest
import numpy as np

from fmcw_sim.errors import ShapeError
from fmcw_sim.signal.waveform import generate_fmcw_chirp, generate_reference_chirp
from fmcw_sim.signal.dechirp import dechirp, beat_frequency


class TestDechirp:
    """Tests for conjugate-multiply mixing."""

    def test_shape_mismatch(self):
        """Operands of different length raise ShapeError."""
        with pytest.raises(ShapeError):
            dechirp(np.ones(10, dtype=complex), np.ones(11, dtype=complex))

    def test_self_mix_is_dc(self, small_config):
        """Mixing the chirp with itself gives a constant."""
        _, chirp = generate_fmcw_chirp(small_config)
        if_signal = dechirp(chirp, chirp)
        assert np.allclose(if_signal, 1.0)

    def test_beat_tone_at_slope_times_delay(self, small_config):
        """A delayed chirp produces a tone at slope × τ."""
        tau = 200e-9
        _, reference = generate_fmcw_chirp(small_config)
        _, echo = generate_fmcw_chirp(small_config, -tau)
        if_signal = dechirp(echo, reference)

        fs = small_config.sample_rate_hz
        spectrum = np.abs(np.fft.fft(if_signal))
        peak_freq = np.argmax(spectrum) * fs / len(if_signal)
        expected = beat_frequency(small_config.slope_hz_per_s, tau)

        assert expected == pytest.approx(2e6)
        assert peak_freq == pytest.approx(expected, abs=fs / len(if_signal))

    def test_beat_tone_is_positive(self, small_config):
        """The delayed echo lands on a positive frequency, not its mirror."""
        tau = 200e-9
        reference = generate_reference_chirp(small_config)
        _, echo = generate_fmcw_chirp(small_config, -tau)
        if_signal = dechirp(echo, reference)

        fs = small_config.sample_rate_hz
        freqs = np.fft.fftfreq(len(if_signal), d=1 / fs)
        peak_freq = freqs[np.argmax(np.abs(np.fft.fft(if_signal)))]
        assert peak_freq > 0
        assert peak_freq == pytest.approx(
            beat_frequency(small_config.slope_hz_per_s, tau), abs=fs / len(if_signal)
        )

    def test_returns_new_array(self):
        """Inputs are not modified."""
        rx = np.ones(4, dtype=complex) * 1j
        ref = np.ones(4, dtype=complex)
        out = dechirp(rx, ref)
        assert np.allclose(out, -1j)
        assert np.all(rx == 1j)
