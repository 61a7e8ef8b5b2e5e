"""Tests for FIR tap design."""

import numpy as np
import pytest

from signal_tools.core.config import ConfigurationError
from signal_tools.dsp.taps import (
    Window,
    design_lowpass_fir,
    get_window,
    group_delay,
    resolve_window,
)


class TestDesignLowpassFIR:
    """Test windowed-sinc lowpass design."""

    def test_length(self):
        """Test requested number of taps is returned."""
        taps = design_lowpass_fir(15, 4000, 48000)
        assert len(taps) == 15

    @pytest.mark.parametrize("length", [1, 3, 15, 101])
    def test_unity_dc_gain(self, length):
        """Test taps sum to one."""
        taps = design_lowpass_fir(length, 3000, 48000)
        assert np.sum(taps) == pytest.approx(1.0, abs=1e-5)

    @pytest.mark.parametrize("window", list(Window))
    def test_unity_dc_gain_all_windows(self, window):
        """Test unity gain holds for every window."""
        taps = design_lowpass_fir(31, 1000, 10000, window)
        assert np.sum(taps) == pytest.approx(1.0, abs=1e-5)

    def test_symmetric(self):
        """Test linear phase symmetry about the center tap."""
        taps = design_lowpass_fir(51, 2500, 22050)
        np.testing.assert_allclose(taps, taps[::-1], atol=1e-12)

    def test_center_tap_is_peak(self):
        """Test the center tap carries the largest weight."""
        taps = design_lowpass_fir(31, 4000, 48000)
        assert np.argmax(taps) == 15

    def test_matches_windowed_sinc(self):
        """Test against a directly computed windowed sinc."""
        length, cutoff, fs = 9, 6000.0, 48000.0
        x = np.arange(length) - length // 2
        c = 2 * cutoff / fs
        raw = np.array(
            [1.0 if k == 0 else np.sin(np.pi * k * c) / (np.pi * k * c) for k in x]
        )
        raw *= np.hamming(length)
        expected = raw / raw.sum()

        np.testing.assert_allclose(design_lowpass_fir(length, cutoff, fs), expected)

    def test_string_window(self):
        """Test windows can be named by string."""
        by_name = design_lowpass_fir(21, 1000, 8000, "blackman")
        by_enum = design_lowpass_fir(21, 1000, 8000, Window.BLACKMAN)
        np.testing.assert_array_equal(by_name, by_enum)

    def test_even_length_rejected(self):
        """Test even tap count fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(4, 4000, 48000)

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_length_rejected(self, length):
        """Test zero or negative tap count fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(length, 4000, 48000)

    def test_non_integer_length_rejected(self):
        """Test fractional tap count fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(15.0, 4000, 48000)

    def test_cutoff_beyond_nyquist_rejected(self):
        """Test cutoff at the sample rate fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(15, 48000, 48000)

    def test_cutoff_at_nyquist_rejected(self):
        """Test cutoff exactly at Nyquist fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(15, 24000, 48000)

    @pytest.mark.parametrize("cutoff", [0, -100])
    def test_non_positive_cutoff_rejected(self, cutoff):
        """Test zero or negative cutoff fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(15, cutoff, 48000)

    def test_unknown_window_rejected(self):
        """Test an unknown window name fails."""
        with pytest.raises(ConfigurationError):
            design_lowpass_fir(15, 4000, 48000, "triangle-ish")

    def test_attenuates_stopband(self):
        """Test a tone well above cutoff is attenuated."""
        taps = design_lowpass_fir(101, 1000, 10000)
        t = np.arange(2000) / 10000
        tone = np.sin(2 * np.pi * 3000 * t)

        filtered = np.convolve(tone, taps, mode="valid")

        assert np.max(np.abs(filtered)) < 0.05


class TestWindows:
    """Test window helpers."""

    def test_aliases(self):
        """Test alternate window names."""
        assert resolve_window("hanning") == Window.HANN
        assert resolve_window("HAMMING") == Window.HAMMING
        assert resolve_window("boxcar") == Window.RECTANGULAR

    def test_rectangular_is_flat(self):
        """Test rectangular window is all ones."""
        np.testing.assert_array_equal(get_window(Window.RECTANGULAR, 5), np.ones(5))

    def test_group_delay(self):
        """Test group delay is half the span."""
        assert group_delay(np.ones(15)) == 7
        assert group_delay(np.ones(1)) == 0
