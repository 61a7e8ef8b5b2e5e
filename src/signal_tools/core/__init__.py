"""
Core module - Configuration and errors.
"""

from .config import (
    PRESETS,
    ConfigurationError,
    DecimatorConfig,
    FIRConfig,
    PipelineConfig,
    get_preset,
    list_presets,
)

__all__ = [
    "ConfigurationError",
    "FIRConfig",
    "DecimatorConfig",
    "PipelineConfig",
    "PRESETS",
    "get_preset",
    "list_presets",
]
