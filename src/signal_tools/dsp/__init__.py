"""
DSP module - Signal processing components.
"""

from .taps import Window, design_lowpass_fir, get_window, group_delay
from .decimation import Downsampler, StreamingDecimator, decimate, output_length
from .filters import BiquadCoefficients, IIRFilter, StreamingFIRFilter

__all__ = [
    "Window",
    "design_lowpass_fir",
    "get_window",
    "group_delay",
    "decimate",
    "output_length",
    "StreamingDecimator",
    "Downsampler",
    "StreamingFIRFilter",
    "BiquadCoefficients",
    "IIRFilter",
]
