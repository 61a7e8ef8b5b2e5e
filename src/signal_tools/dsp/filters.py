"""
Streaming filter implementations.

Provides:
- StreamingFIRFilter: non-decimating FIR with tail context across calls,
  plus zero-phase filtfilt over a whole buffer
- BiquadCoefficients / IIRFilter: cascaded biquad IIR filtering whose
  per-section delay lines persist across calls
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np
from scipy import signal

from ..core.config import ConfigurationError
from .decimation import decimate
from .taps import Window, design_lowpass_fir, group_delay

logger = logging.getLogger(__name__)


class StreamingFIRFilter:
    """
    FIR filter with state preservation for streaming.

    The last (num_taps - 1) input samples are kept as context for the next
    call, starting from zeros. Every call returns as many samples as it
    was given, and chunked output matches filtering the whole stream at once.
    """

    def __init__(self, taps):
        """
        Initialize FIR filter.

        Args:
            taps: Filter coefficients
        """
        taps = np.asarray(taps)
        if taps.ndim != 1 or len(taps) == 0:
            raise ConfigurationError("Filter taps must be a non-empty 1-D sequence")
        self._taps = taps.copy()
        self._taps.setflags(write=False)
        self._buffer: Optional[np.ndarray] = None

    @classmethod
    def lowpass(
        cls,
        length: int,
        cutoff: float,
        sample_rate: float,
        window: Union[Window, str] = Window.HAMMING,
    ) -> "StreamingFIRFilter":
        """Create a filter from a windowed-sinc lowpass design."""
        return cls(design_lowpass_fir(length, cutoff, sample_rate, window))

    @property
    def taps(self) -> np.ndarray:
        """Get filter coefficients."""
        return self._taps.copy()

    @property
    def num_taps(self) -> int:
        """Get number of filter taps."""
        return len(self._taps)

    @property
    def delay_samples(self) -> int:
        """Get filter group delay in samples."""
        return group_delay(self._taps)

    def process(self, chunk) -> np.ndarray:
        """
        Filter the next chunk of the stream.

        Args:
            chunk: Input samples (real or complex, any length)

        Returns:
            Filtered samples, same length as chunk
        """
        chunk = np.asarray(chunk)
        n_taps = len(self._taps)

        if self._buffer is None:
            self._buffer = np.zeros(n_taps - 1, dtype=chunk.dtype)

        padded = np.concatenate([self._buffer, chunk])
        filtered = decimate(padded, self._taps, 1)

        # Context comes from padded, chunks shorter than the tail included
        self._buffer = padded[len(padded) - (n_taps - 1):].copy()

        return filtered

    def filtfilt(self, samples) -> np.ndarray:
        """
        Zero-phase filtering of a complete buffer.

        Runs a fresh filter forward, reverses, runs another fresh filter
        and reverses again. The streaming state of this instance is not
        touched.

        Args:
            samples: Entire signal

        Returns:
            Filtered samples with no group delay
        """
        samples = np.asarray(samples)
        forward = StreamingFIRFilter(self._taps).process(samples)
        backward = StreamingFIRFilter(self._taps).process(forward[::-1])
        return backward[::-1].copy()

    def reset(self) -> None:
        """Reset filter state."""
        self._buffer = None


@dataclass(frozen=True)
class BiquadCoefficients:
    """Normalized biquad section (a0 == 1)."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    @classmethod
    def from_unnormalized(
        cls, b0: float, b1: float, b2: float, a0: float, a1: float, a2: float
    ) -> "BiquadCoefficients":
        """Create section from coefficients with an explicit a0."""
        if a0 == 0:
            raise ConfigurationError("a0 must be non-zero")
        return cls(b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)

    @classmethod
    def from_sequence(cls, params: Sequence[float]) -> "BiquadCoefficients":
        """Create section from [b0, b1, b2, a1, a2] or [b0, b1, b2, a0, a1, a2]."""
        if len(params) == 5:
            return cls(*(float(p) for p in params))
        if len(params) == 6:
            return cls.from_unnormalized(*(float(p) for p in params))
        raise ConfigurationError(
            f"Biquad needs 5 or 6 coefficients, got {len(params)}"
        )

    @staticmethod
    def _check(sample_rate: float, frequency: float, q: float) -> None:
        if sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be > 0, got {sample_rate}")
        if not (0 < frequency < sample_rate / 2):
            raise ConfigurationError(
                f"Frequency must be between 0 Hz and Nyquist ({sample_rate / 2} Hz), "
                f"got {frequency}"
            )
        if q <= 0:
            raise ConfigurationError(f"Q must be > 0, got {q}")

    @classmethod
    def lowpass(cls, sample_rate: float, frequency: float, q: float) -> "BiquadCoefficients":
        """RBJ cookbook lowpass section."""
        cls._check(sample_rate, frequency, q)
        w0 = 2.0 * np.pi * frequency / sample_rate
        alpha = np.sin(w0) / (2.0 * q)
        cos_w0 = np.cos(w0)

        return cls.from_unnormalized(
            (1.0 - cos_w0) / 2.0,
            1.0 - cos_w0,
            (1.0 - cos_w0) / 2.0,
            1.0 + alpha,
            -2.0 * cos_w0,
            1.0 - alpha,
        )

    @classmethod
    def highpass(cls, sample_rate: float, frequency: float, q: float) -> "BiquadCoefficients":
        """RBJ cookbook highpass section."""
        cls._check(sample_rate, frequency, q)
        w0 = 2.0 * np.pi * frequency / sample_rate
        alpha = np.sin(w0) / (2.0 * q)
        cos_w0 = np.cos(w0)

        return cls.from_unnormalized(
            (1.0 + cos_w0) / 2.0,
            -(1.0 + cos_w0),
            (1.0 + cos_w0) / 2.0,
            1.0 + alpha,
            -2.0 * cos_w0,
            1.0 - alpha,
        )

    def as_sos_row(self) -> List[float]:
        """Section as a second-order-sections row [b0, b1, b2, 1, a1, a2]."""
        return [self.b0, self.b1, self.b2, 1.0, self.a1, self.a2]


class IIRFilter:
    """
    Cascade of biquad sections.

    Each section keeps its two-sample delay line between calls, separately
    for the real and imaginary branches of complex input.
    """

    def __init__(self, sections: Optional[Sequence[BiquadCoefficients]] = None):
        """
        Initialize cascade.

        Args:
            sections: Initial biquad sections
        """
        self._sections: List[BiquadCoefficients] = list(sections or [])
        self._sos: Optional[np.ndarray] = None
        self._zi_real: Optional[np.ndarray] = None
        self._zi_imag: Optional[np.ndarray] = None

    @property
    def sections(self) -> List[BiquadCoefficients]:
        """Get biquad sections."""
        return list(self._sections)

    @property
    def num_sections(self) -> int:
        """Get number of biquad sections."""
        return len(self._sections)

    def add_sections(self, sections: Sequence[BiquadCoefficients]) -> "IIRFilter":
        """Append sections to the cascade."""
        self._sections.extend(sections)
        self.reset()
        return self

    def add_lowpass(self, sample_rate: float, frequency: float, q: float) -> "IIRFilter":
        """Append a lowpass section."""
        return self.add_sections([BiquadCoefficients.lowpass(sample_rate, frequency, q)])

    def add_highpass(self, sample_rate: float, frequency: float, q: float) -> "IIRFilter":
        """Append a highpass section."""
        return self.add_sections([BiquadCoefficients.highpass(sample_rate, frequency, q)])

    def _get_sos(self) -> np.ndarray:
        if not self._sections:
            raise ConfigurationError("IIR cascade has no sections")
        if self._sos is None:
            self._sos = np.array([s.as_sos_row() for s in self._sections])
            logger.debug(f"IIR cascade built with {len(self._sections)} section(s)")
        return self._sos

    def _filter_branch(self, x: np.ndarray, zi: Optional[np.ndarray]):
        sos = self._get_sos()
        if zi is None:
            zi = np.zeros((sos.shape[0], 2))
        return signal.sosfilt(sos, x, zi=zi)

    def process(self, chunk) -> np.ndarray:
        """
        Filter the next chunk of the stream.

        Args:
            chunk: Input samples (real or complex)

        Returns:
            Filtered samples, same length as chunk
        """
        chunk = np.asarray(chunk)
        sos = self._get_sos()

        if len(chunk) == 0:
            dtype = np.result_type(chunk, sos)
            return np.zeros(0, dtype=dtype)

        if np.iscomplexobj(chunk):
            real, self._zi_real = self._filter_branch(chunk.real, self._zi_real)
            imag, self._zi_imag = self._filter_branch(chunk.imag, self._zi_imag)
            return real + 1j * imag

        output, self._zi_real = self._filter_branch(chunk, self._zi_real)
        return output

    def reset(self) -> None:
        """Clear delay lines and cached coefficients."""
        self._sos = None
        self._zi_real = None
        self._zi_imag = None
