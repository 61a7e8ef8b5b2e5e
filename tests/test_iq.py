"""Tests for I/Q sample utilities."""

import numpy as np
import pytest

from signal_tools.core.config import ConfigurationError
from signal_tools.utils.iq import (
    FrequencyShifter,
    SplitComplex,
    complex_to_iq,
    iq_to_complex,
    shift_frequency,
)


class TestIQToComplex:
    """Tests for iq_to_complex function."""

    def test_basic_conversion(self):
        """Test basic I/Q to complex conversion."""
        i = np.array([1.0, 0.0, -1.0], dtype=np.float32)
        q = np.array([0.0, 1.0, 0.0], dtype=np.float32)

        result = iq_to_complex(i, q)

        expected = np.array([1 + 0j, 0 + 1j, -1 + 0j], dtype=np.complex64)
        np.testing.assert_array_almost_equal(result, expected)

    def test_integer_input(self):
        """Test conversion with integer input."""
        result = iq_to_complex(np.array([1, 2, 3]), np.array([4, 5, 6]))

        assert result.dtype == np.complex64
        assert result[0] == 1 + 4j

    def test_length_mismatch(self):
        """Test unequal branches are rejected."""
        with pytest.raises(ValueError):
            iq_to_complex(np.ones(3), np.ones(2))


class TestComplexToIQ:
    """Tests for complex_to_iq function."""

    def test_basic_conversion(self):
        """Test basic complex to I/Q conversion."""
        samples = np.array([1 + 2j, 3 + 4j, 5 + 6j], dtype=np.complex64)

        i, q = complex_to_iq(samples)

        np.testing.assert_array_almost_equal(i, [1, 3, 5])
        np.testing.assert_array_almost_equal(q, [2, 4, 6])

    def test_output_dtype(self):
        """Test output is float32."""
        i, q = complex_to_iq(np.array([1 + 2j], dtype=np.complex128))

        assert i.dtype == np.float32
        assert q.dtype == np.float32


class TestSplitComplex:
    """Tests for the split-complex view."""

    def test_from_complex(self):
        """Test splitting complex samples."""
        split = SplitComplex.from_complex([1 + 2j, 3 - 4j])

        np.testing.assert_array_equal(split.real, [1, 3])
        np.testing.assert_array_equal(split.imag, [2, -4])
        assert len(split) == 2

    def test_from_interleaved(self):
        """Test splitting interleaved I/Q."""
        split = SplitComplex.from_interleaved([1, 2, 3, 4, 5, 6])

        np.testing.assert_array_equal(split.real, [1, 3, 5])
        np.testing.assert_array_equal(split.imag, [2, 4, 6])

    def test_to_interleaved(self):
        """Test interleaving branches."""
        split = SplitComplex([1, 3], [2, 4])
        np.testing.assert_array_equal(split.to_interleaved(), [1, 2, 3, 4])

    def test_to_complex(self):
        """Test combining branches."""
        split = SplitComplex([1, 3], [2, 4])
        np.testing.assert_array_equal(split.to_complex(), [1 + 2j, 3 + 4j])

    def test_odd_interleaved_rejected(self):
        """Test interleaved data must pair up."""
        with pytest.raises(ConfigurationError):
            SplitComplex.from_interleaved([1, 2, 3])

    def test_unequal_branches_rejected(self):
        """Test branches must have equal length."""
        with pytest.raises(ConfigurationError):
            SplitComplex([1, 2, 3], [1, 2])

    def test_copies_input(self):
        """Test the view owns its buffers."""
        samples = np.array([1 + 1j, 2 + 2j])
        split = SplitComplex.from_complex(samples)
        samples[0] = 0

        assert split.real[0] == 1
        assert split.imag[0] == 1


class TestShiftFrequency:
    """Tests for frequency shifting."""

    def test_tone_to_baseband(self):
        """Test shifting a tone by its own frequency gives DC."""
        fs = 48000
        n = np.arange(1000)
        tone = np.exp(2j * np.pi * 1000 * n / fs)

        shifted = shift_frequency(tone, 1000, fs)

        np.testing.assert_allclose(shifted, 1.0 + 0j, atol=1e-9)

    def test_preserves_single_precision(self):
        """Test complex64 input stays complex64."""
        samples = np.ones(10, dtype=np.complex64)
        assert shift_frequency(samples, 100, 8000).dtype == np.complex64

    def test_start_index_offsets_phase(self):
        """Test start_index continues the mixer phase."""
        samples = np.ones(100, dtype=np.complex128)
        whole = shift_frequency(samples, 250, 8000)
        tail = shift_frequency(samples[40:], 250, 8000, start_index=40)

        np.testing.assert_allclose(tail, whole[40:], atol=1e-12)

    def test_invalid_sample_rate(self):
        """Test non-positive sample rate is rejected."""
        with pytest.raises(ConfigurationError):
            shift_frequency(np.ones(4, dtype=complex), 100, 0)


class TestFrequencyShifter:
    """Tests for the streaming frequency shifter."""

    def test_chunked_equals_whole(self):
        """Test phase continuity across chunks."""
        rng = np.random.default_rng(7)
        samples = rng.uniform(-1, 1, 500) + 1j * rng.uniform(-1, 1, 500)
        expected = shift_frequency(samples, 1234.5, 48000)

        shifter = FrequencyShifter(1234.5, 48000)
        result = np.concatenate(
            [shifter.process(samples[i:i + 37]) for i in range(0, 500, 37)]
        )

        np.testing.assert_allclose(result, expected, atol=1e-12)

    def test_properties(self):
        """Test shifter parameters are exposed."""
        shifter = FrequencyShifter(1500.0, 48000)

        assert shifter.frequency == 1500.0
        assert shifter.sample_rate == 48000

    def test_invalid_sample_rate(self):
        """Test non-positive sample rate is rejected."""
        with pytest.raises(ConfigurationError):
            FrequencyShifter(100, 0)

    def test_reset(self):
        """Test reset restarts the phase."""
        shifter = FrequencyShifter(100, 8000)
        first = shifter.process(np.ones(10, dtype=complex))
        shifter.reset()
        np.testing.assert_array_equal(shifter.process(np.ones(10, dtype=complex)), first)
