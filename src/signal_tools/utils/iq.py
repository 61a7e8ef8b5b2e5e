"""
I/Q sample utilities.

Provides conversion between interleaved, split and complex I/Q layouts,
and frequency shifting of complex baseband streams.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..core.config import ConfigurationError


def iq_to_complex(i_samples: np.ndarray, q_samples: np.ndarray) -> np.ndarray:
    """
    Convert separate I and Q arrays to complex.

    Args:
        i_samples: In-phase samples
        q_samples: Quadrature samples

    Returns:
        Complex numpy array
    """
    i_samples = np.asarray(i_samples)
    q_samples = np.asarray(q_samples)
    if len(i_samples) != len(q_samples):
        raise ValueError(
            f"I and Q lengths differ: {len(i_samples)} != {len(q_samples)}"
        )
    return i_samples.astype(np.float32) + 1j * q_samples.astype(np.float32)


def complex_to_iq(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert complex samples to separate I and Q arrays.

    Args:
        samples: Complex samples

    Returns:
        Tuple of (I, Q) arrays
    """
    samples = np.asarray(samples)
    return samples.real.astype(np.float32), samples.imag.astype(np.float32)


@dataclass
class SplitComplex:
    """
    Split-complex view: two equal-length real sequences.

    Conversions always copy, so a SplitComplex never shares memory with
    the buffer it was built from.
    """

    real: np.ndarray
    imag: np.ndarray

    def __post_init__(self) -> None:
        self.real = np.array(self.real, dtype=np.float64).reshape(-1)
        self.imag = np.array(self.imag, dtype=np.float64).reshape(-1)
        if len(self.real) != len(self.imag):
            raise ConfigurationError(
                f"Split-complex branches differ in length: "
                f"{len(self.real)} != {len(self.imag)}"
            )

    def __len__(self) -> int:
        return len(self.real)

    @classmethod
    def from_complex(cls, samples) -> "SplitComplex":
        """Split complex samples into real and imaginary branches."""
        samples = np.asarray(samples)
        return cls(samples.real, samples.imag)

    @classmethod
    def from_interleaved(cls, data) -> "SplitComplex":
        """Split interleaved [I0, Q0, I1, Q1, ...] data."""
        data = np.asarray(data)
        if len(data) % 2 != 0:
            raise ConfigurationError(
                f"Interleaved I/Q data must have even length, got {len(data)}"
            )
        return cls(data[0::2], data[1::2])

    def to_complex(self) -> np.ndarray:
        """Combine branches into a complex array."""
        return self.real + 1j * self.imag

    def to_interleaved(self) -> np.ndarray:
        """Interleave branches into [I0, Q0, I1, Q1, ...]."""
        result = np.empty(len(self) * 2, dtype=np.float64)
        result[0::2] = self.real
        result[1::2] = self.imag
        return result


def shift_frequency(
    samples: np.ndarray,
    frequency: float,
    sample_rate: float,
    start_index: int = 0,
) -> np.ndarray:
    """
    Shift a complex signal down by frequency Hz.

    Multiplies by exp(-2j*pi*f*n/fs). The mixer phase is evaluated in
    float64 regardless of input precision.

    Args:
        samples: Complex I/Q samples
        frequency: Frequency to move to 0 Hz
        sample_rate: Sample rate in Hz
        start_index: Absolute index of samples[0] in the stream

    Returns:
        Shifted samples with the input's complex dtype
    """
    if sample_rate <= 0:
        raise ConfigurationError(f"Sample rate must be > 0, got {sample_rate}")
    samples = np.asarray(samples)
    out_dtype = np.result_type(samples.dtype, np.complex64)

    n = np.arange(start_index, start_index + len(samples), dtype=np.float64)
    # Wrap the cycle count before scaling to keep phase precision on long streams
    cycles = np.mod(frequency * n / sample_rate, 1.0)
    mixer = np.exp(-2j * np.pi * cycles)

    return (samples.astype(np.complex128) * mixer).astype(out_dtype)


class FrequencyShifter:
    """Phase-continuous frequency shifter for chunked streams."""

    def __init__(self, frequency: float, sample_rate: float):
        """
        Initialize frequency shifter.

        Args:
            frequency: Frequency in Hz to move to 0 Hz
            sample_rate: Sample rate in Hz
        """
        if sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be > 0, got {sample_rate}")
        self._frequency = frequency
        self._sample_rate = sample_rate
        self._index = 0

    @property
    def frequency(self) -> float:
        """Get shift frequency in Hz."""
        return self._frequency

    @property
    def sample_rate(self) -> float:
        """Get sample rate in Hz."""
        return self._sample_rate

    def process(self, chunk: np.ndarray) -> np.ndarray:
        """Shift the next chunk, continuing the mixer phase."""
        chunk = np.asarray(chunk)
        shifted = shift_frequency(chunk, self._frequency, self._sample_rate, self._index)
        self._index += len(chunk)
        return shifted

    def reset(self) -> None:
        """Restart the mixer phase at sample 0."""
        self._index = 0
