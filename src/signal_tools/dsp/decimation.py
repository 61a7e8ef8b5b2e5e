"""
Sample rate decimation with FIR anti-aliasing.

Provides:
- decimate: one-shot strided filter-and-downsample over a full buffer
- StreamingDecimator: the same operation carried across arbitrarily split chunks
- Downsampler: streaming decimator built from input/output sample rates

Real and complex streams share one code path. Real taps applied to a complex
array act on the I and Q branches independently.
"""

import logging
from typing import Optional, Union

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..core.config import ConfigurationError
from .taps import Window, design_lowpass_fir, group_delay

logger = logging.getLogger(__name__)


def _validate_taps(taps) -> np.ndarray:
    taps = np.asarray(taps)
    if taps.ndim != 1 or len(taps) == 0:
        raise ConfigurationError("Filter taps must be a non-empty 1-D sequence")
    return taps


def _validate_factor(factor) -> int:
    if isinstance(factor, bool) or not isinstance(factor, (int, np.integer)):
        raise ConfigurationError(f"Decimation factor must be an integer, got {factor!r}")
    if factor < 1:
        raise ConfigurationError(f"Decimation factor must be >= 1, got {factor}")
    return int(factor)


def output_length(num_samples: int, num_taps: int, factor: int) -> int:
    """Number of outputs produced by decimating num_samples samples."""
    usable = num_samples - (num_taps - 1)
    if usable <= 0:
        return 0
    return -(-usable // factor)


def decimate(
    samples,
    taps,
    factor: int,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Filter and decimate a complete buffer in one pass.

    Computes out[k] = sum_j samples[k * factor + j] * taps[j] for every
    window that fits inside the buffer, without materializing the
    full-rate filtered signal.

    Args:
        samples: Input samples (real or complex)
        taps: FIR filter coefficients
        factor: Decimation factor (integer >= 1)
        out: Optional output buffer, must have exactly the output length

    Returns:
        Decimated samples (empty if fewer samples than taps)

    Raises:
        ConfigurationError: If taps or factor are invalid
        ValueError: If out has the wrong length
    """
    taps = _validate_taps(taps)
    factor = _validate_factor(factor)
    samples = np.asarray(samples)
    if samples.ndim != 1:
        raise ValueError(f"Samples must be 1-D, got shape {samples.shape}")

    n_out = output_length(len(samples), len(taps), factor)
    if out is not None and len(out) != n_out:
        raise ValueError(
            f"Output buffer has length {len(out)}, expected {n_out}"
        )

    if n_out == 0:
        result = np.zeros(0, dtype=np.result_type(samples, taps))
    else:
        # Window k starts at k * factor, the last one ends at len(samples) - 1
        windows = sliding_window_view(samples, len(taps))[::factor]
        result = windows @ taps

    if out is not None:
        out[:] = result
        return out
    return result


class StreamingDecimator:
    """
    Stateful decimator for chunked real or complex streams.

    Carries the unconsumed filter tail and the decimation phase between
    calls, so the concatenated output of any chunking of a stream equals
    decimate() over the whole stream.
    """

    def __init__(self, taps, factor: int):
        """
        Initialize streaming decimator.

        Args:
            taps: FIR filter coefficients (fixed for the instance lifetime)
            factor: Decimation factor (integer >= 1)
        """
        self._taps = _validate_taps(taps).copy()
        self._taps.setflags(write=False)
        self._factor = _validate_factor(factor)

        # Stream state
        self._tail: Optional[np.ndarray] = None
        self._skip = 0

        logger.debug(
            f"StreamingDecimator created: {len(self._taps)} taps, factor {self._factor}"
        )

    @property
    def taps(self) -> np.ndarray:
        """Get filter coefficients."""
        return self._taps.copy()

    @property
    def factor(self) -> int:
        """Get decimation factor."""
        return self._factor

    @property
    def num_taps(self) -> int:
        """Get number of filter taps."""
        return len(self._taps)

    @property
    def group_delay(self) -> int:
        """Get filter group delay in input samples."""
        return group_delay(self._taps)

    def process(self, chunk) -> np.ndarray:
        """
        Decimate the next chunk of the stream.

        Args:
            chunk: Consecutive input samples (any length, including 0)

        Returns:
            Decimated samples (may be empty)
        """
        chunk = np.asarray(chunk)
        n_taps = len(self._taps)

        if self._tail is None:
            combined = chunk.copy()
        else:
            combined = np.concatenate([self._tail, chunk])

        # Phase carry-over; anything not dropped now is still owed next call
        dropped = min(self._skip, len(combined))
        adjusted = combined[dropped:]
        pending_skip = self._skip - dropped

        if len(adjusted) < n_taps:
            if len(adjusted):
                logger.debug(
                    f"Buffering {len(adjusted)} samples, need {n_taps} for a full window"
                )
            self._tail = adjusted if len(adjusted) else None
            self._skip = pending_skip
            return np.zeros(0, dtype=np.result_type(adjusted, self._taps))

        usable = len(adjusted) - (n_taps - 1)
        n_out = output_length(len(adjusted), n_taps, self._factor)
        output = decimate(adjusted, self._taps, self._factor)

        self._tail = adjusted[usable:].copy() if n_taps > 1 else None
        self._skip = n_out * self._factor - usable

        return output

    def reset(self) -> None:
        """Reset decimator state."""
        self._tail = None
        self._skip = 0


class Downsampler:
    """
    Streaming decimator defined by input and output sample rates.

    Designs a default anti-aliasing lowpass at the output Nyquist frequency
    when no taps are supplied.
    """

    DEFAULT_NUM_TAPS = 15

    def __init__(
        self,
        input_rate: int,
        output_rate: int,
        taps=None,
        num_taps: int = DEFAULT_NUM_TAPS,
        cutoff: Optional[float] = None,
        window: Union[Window, str] = Window.HAMMING,
    ):
        """
        Initialize downsampler.

        Args:
            input_rate: Input sample rate in Hz
            output_rate: Output sample rate in Hz (must divide input_rate)
            taps: Custom filter taps (None = design lowpass)
            num_taps: Number of taps for the designed filter
            cutoff: Cutoff for the designed filter (None = output Nyquist)
            window: Window for the designed filter
        """
        if output_rate <= 0 or input_rate <= output_rate:
            raise ConfigurationError(
                f"input_rate ({input_rate}) must exceed output_rate ({output_rate})"
            )
        if input_rate % output_rate != 0:
            raise ConfigurationError(
                "input_rate must be an integer multiple of output_rate, "
                f"got {input_rate} / {output_rate}"
            )

        self._input_rate = input_rate
        self._output_rate = output_rate

        if taps is None:
            if cutoff is None:
                cutoff = output_rate / 2.0
            taps = design_lowpass_fir(num_taps, cutoff, input_rate, window)

        self._decimator = StreamingDecimator(taps, int(input_rate // output_rate))

    @property
    def input_rate(self) -> int:
        """Get input sample rate."""
        return self._input_rate

    @property
    def output_rate(self) -> int:
        """Get output sample rate."""
        return self._output_rate

    @property
    def factor(self) -> int:
        """Get decimation factor."""
        return self._decimator.factor

    @property
    def taps(self) -> np.ndarray:
        """Get filter coefficients."""
        return self._decimator.taps

    @property
    def group_delay(self) -> float:
        """Get group delay in seconds."""
        return self._decimator.group_delay / self._input_rate

    def process(self, chunk) -> np.ndarray:
        """Decimate the next chunk of the stream."""
        return self._decimator.process(chunk)

    def reset(self) -> None:
        """Reset downsampler state."""
        self._decimator.reset()
