"""
Configuration management for signal tools.

Handles filter and decimator configuration, validation and persistence.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when filter or decimator parameters are invalid."""

    pass


def _check_num_taps(num_taps: Any) -> None:
    if isinstance(num_taps, bool) or not isinstance(num_taps, int):
        raise ConfigurationError(
            f"num_taps must be an integer, got {num_taps!r}"
        )
    if num_taps <= 0 or num_taps % 2 == 0:
        raise ConfigurationError(
            f"num_taps must be a positive odd integer, got {num_taps}"
        )


def _check_window(window: Any) -> None:
    from ..dsp.taps import resolve_window

    resolve_window(window)


@dataclass
class FIRConfig:
    """Configuration for a windowed-sinc lowpass FIR filter."""

    num_taps: int = 15
    cutoff: float = 4000.0  # Hz
    sample_rate: int = 48000  # Hz
    window: str = "hamming"  # "hamming", "hann", "blackman", "kaiser", "rectangular"

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration fields."""
        _check_num_taps(self.num_taps)
        if self.sample_rate <= 0:
            raise ConfigurationError(
                f"sample_rate must be positive, got {self.sample_rate}"
            )
        if not (0 < self.cutoff < self.sample_rate / 2):
            raise ConfigurationError(
                f"cutoff must be between 0 and {self.sample_rate / 2} Hz "
                f"(Nyquist), got {self.cutoff}"
            )
        _check_window(self.window)

    def design(self):
        """Design the lowpass taps described by this configuration."""
        from ..dsp.taps import design_lowpass_fir

        return design_lowpass_fir(
            self.num_taps, self.cutoff, self.sample_rate, self.window
        )


@dataclass
class DecimatorConfig:
    """Configuration for an integer-factor streaming decimator."""

    input_rate: int = 48000  # Hz
    output_rate: int = 8000  # Hz
    num_taps: int = 15
    window: str = "hamming"
    cutoff: Optional[float] = None  # None = output Nyquist

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration fields."""
        if self.output_rate <= 0:
            raise ConfigurationError(
                f"output_rate must be positive, got {self.output_rate}"
            )
        if self.input_rate <= self.output_rate:
            raise ConfigurationError(
                f"input_rate ({self.input_rate}) must exceed "
                f"output_rate ({self.output_rate})"
            )
        if self.input_rate % self.output_rate != 0:
            raise ConfigurationError(
                f"input_rate ({self.input_rate}) must be an integer multiple "
                f"of output_rate ({self.output_rate})"
            )
        _check_num_taps(self.num_taps)
        if self.cutoff is not None and not (0 < self.cutoff < self.input_rate / 2):
            raise ConfigurationError(
                f"cutoff must be between 0 and {self.input_rate / 2} Hz "
                f"(input Nyquist), got {self.cutoff}"
            )
        _check_window(self.window)

    @property
    def factor(self) -> int:
        """Decimation factor (input_rate / output_rate)."""
        return self.input_rate // self.output_rate

    def create(self):
        """Build a Downsampler from this configuration."""
        from ..dsp.decimation import Downsampler

        return Downsampler(
            self.input_rate,
            self.output_rate,
            num_taps=self.num_taps,
            cutoff=self.cutoff,
            window=self.window,
        )


@dataclass
class PipelineConfig:
    """Main configuration container."""

    decimator: DecimatorConfig = field(default_factory=DecimatorConfig)
    fir: FIRConfig = field(default_factory=FIRConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create configuration from dictionary."""
        config = cls()

        if "decimator" in data:
            config.decimator = DecimatorConfig(**data["decimator"])

        if "fir" in data:
            config.fir = FIRConfig(**data["fir"])

        return config

    def save(self, path: str) -> bool:
        """
        Write the configuration to a JSON file.

        Args:
            path: Destination file (its directory must already exist)

        Returns:
            True on success, False if the file could not be written
        """
        target = Path(path)
        try:
            target.write_text(json.dumps(self.to_dict(), indent=2))
        except OSError as e:
            logger.error(f"Could not write pipeline configuration {target}: {e}")
            return False
        logger.info(f"Pipeline configuration written to {target}")
        return True

    @classmethod
    def load(cls, path: str) -> Optional["PipelineConfig"]:
        """
        Read a configuration written by save().

        Unreadable files, malformed JSON and out-of-range values are
        logged and reported as None.

        Args:
            path: Source file

        Returns:
            PipelineConfig, or None if the file could not be used
        """
        source = Path(path)
        if not source.is_file():
            logger.warning(f"No pipeline configuration at {source}")
            return None
        try:
            config = cls.from_dict(json.loads(source.read_text()))
        except OSError as e:
            logger.error(f"Could not read pipeline configuration {source}: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            # JSONDecodeError and ConfigurationError are both ValueErrors
            logger.error(f"Rejected pipeline configuration {source}: {e}")
            return None
        logger.info(f"Pipeline configuration read from {source}")
        return config


# Preset configurations for common stream types
PRESETS: Dict[str, PipelineConfig] = {}


def create_preset_audio_48k_to_8k() -> PipelineConfig:
    """Preset for narrowing 48 kHz audio down to 8 kHz."""
    return PipelineConfig(
        decimator=DecimatorConfig(input_rate=48000, output_rate=8000),
        fir=FIRConfig(num_taps=31, cutoff=3400.0, sample_rate=8000),
    )


def create_preset_iq_240k_to_48k() -> PipelineConfig:
    """Preset for reducing 240 kS/s I/Q to 48 kS/s baseband."""
    return PipelineConfig(
        decimator=DecimatorConfig(input_rate=240000, output_rate=48000, num_taps=31),
        fir=FIRConfig(num_taps=63, cutoff=15000.0, sample_rate=48000),
    )


def create_preset_afsk_1200() -> PipelineConfig:
    """Preset for a 1200 baud AFSK audio channel."""
    return PipelineConfig(
        decimator=DecimatorConfig(input_rate=48000, output_rate=12000, num_taps=31),
        fir=FIRConfig(num_taps=31, cutoff=2600.0, sample_rate=12000),
    )


PRESETS["audio_48k_to_8k"] = create_preset_audio_48k_to_8k()
PRESETS["iq_240k_to_48k"] = create_preset_iq_240k_to_48k()
PRESETS["afsk_1200"] = create_preset_afsk_1200()


def get_preset(name: str) -> Optional[PipelineConfig]:
    """Get a preset configuration by name."""
    return PRESETS.get(name)


def list_presets() -> List[str]:
    """List available preset names."""
    return list(PRESETS.keys())
