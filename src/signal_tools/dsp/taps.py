"""
FIR tap design.

Windowed-sinc lowpass design with unity DC gain.
"""

import logging
from enum import Enum
from typing import Union

import numpy as np

from ..core.config import ConfigurationError

logger = logging.getLogger(__name__)


class Window(Enum):
    """Window functions for tap design."""
    HAMMING = "hamming"
    HANN = "hann"
    BLACKMAN = "blackman"
    KAISER = "kaiser"
    RECTANGULAR = "rectangular"


_WINDOW_ALIASES = {
    "hanning": Window.HANN,
    "boxcar": Window.RECTANGULAR,
}


def resolve_window(window: Union[Window, str]) -> Window:
    """Resolve a window name or enum member to a Window."""
    if isinstance(window, Window):
        return window
    name = str(window).lower()
    if name in _WINDOW_ALIASES:
        return _WINDOW_ALIASES[name]
    try:
        return Window(name)
    except ValueError:
        raise ConfigurationError(f"Unknown window function: {window}") from None


def get_window(window: Union[Window, str], length: int) -> np.ndarray:
    """Get window function samples."""
    window = resolve_window(window)
    if window == Window.HAMMING:
        return np.hamming(length)
    elif window == Window.HANN:
        return np.hanning(length)
    elif window == Window.BLACKMAN:
        return np.blackman(length)
    elif window == Window.KAISER:
        return np.kaiser(length, 8.0)
    return np.ones(length)


def design_lowpass_fir(
    length: int,
    cutoff: float,
    sample_rate: float,
    window: Union[Window, str] = Window.HAMMING,
) -> np.ndarray:
    """
    Design a lowpass FIR filter using the windowed-sinc method.

    Args:
        length: Number of taps (positive and odd)
        cutoff: Cutoff frequency in Hz, strictly inside (0, Nyquist)
        sample_rate: Sample rate in Hz
        window: Window function applied to the ideal response

    Returns:
        Taps normalized to unity DC gain

    Raises:
        ConfigurationError: If any parameter is out of range
    """
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        raise ConfigurationError(f"Filter length must be an integer, got {length!r}")
    if length <= 0:
        raise ConfigurationError(f"Filter length must be > 0, got {length}")
    if length % 2 == 0:
        raise ConfigurationError(f"Filter length must be odd, got {length}")
    if sample_rate <= 0:
        raise ConfigurationError(f"Sample rate must be > 0, got {sample_rate}")
    if not (0 < cutoff < sample_rate / 2):
        raise ConfigurationError(
            f"Cutoff must be between 0 Hz and Nyquist ({sample_rate / 2} Hz), "
            f"got {cutoff}"
        )

    # Integer offsets from the center tap
    x = np.arange(length) - length // 2
    h = np.sinc(x * (2.0 * cutoff / sample_rate))

    h *= get_window(window, length)

    # Normalize for unity gain at DC
    h /= np.sum(h)

    logger.debug(
        f"Designed {length}-tap lowpass: cutoff={cutoff} Hz, fs={sample_rate} Hz, "
        f"window={resolve_window(window).value}"
    )
    return h


def group_delay(taps: np.ndarray) -> int:
    """Group delay in samples of a symmetric (linear phase) filter."""
    return (len(taps) - 1) // 2
