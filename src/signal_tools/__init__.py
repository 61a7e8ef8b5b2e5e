"""
Signal Tools - Streaming filtering and decimation for sample streams

Filters and downsamples continuous real (audio) or complex (I/Q) sample
streams that arrive in arbitrarily split chunks. Streaming output is
equivalent to processing the concatenated stream in one pass.

Components:
    - design_lowpass_fir: Windowed-sinc lowpass tap design
    - decimate: One-shot filter-and-downsample over a full buffer
    - StreamingDecimator / Downsampler: Chunked decimation with carried state
    - StreamingFIRFilter: Chunked FIR filtering and zero-phase filtfilt
    - IIRFilter: Biquad cascade with persistent delay lines
"""

__version__ = "0.1.0"
__author__ = "Signal Tools Team"

from .core.config import ConfigurationError
from .dsp import (
    BiquadCoefficients,
    Downsampler,
    IIRFilter,
    StreamingDecimator,
    StreamingFIRFilter,
    Window,
    decimate,
    design_lowpass_fir,
)
from .utils import FrequencyShifter, SplitComplex

__all__ = [
    # Errors
    "ConfigurationError",
    # Tap design
    "Window",
    "design_lowpass_fir",
    # Decimation
    "decimate",
    "StreamingDecimator",
    "Downsampler",
    # Filtering
    "StreamingFIRFilter",
    "BiquadCoefficients",
    "IIRFilter",
    # I/Q
    "SplitComplex",
    "FrequencyShifter",
    # Version
    "__version__",
]
