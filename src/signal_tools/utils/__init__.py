"""
Utility functions and helpers.
"""

from .iq import (
    FrequencyShifter,
    SplitComplex,
    complex_to_iq,
    iq_to_complex,
    shift_frequency,
)

__all__ = [
    "iq_to_complex",
    "complex_to_iq",
    "SplitComplex",
    "shift_frequency",
    "FrequencyShifter",
]
