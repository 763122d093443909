"""
Configuration for keytempo.

Frame sizes, BPM bounds, band limits and tonal profiles are held in
immutable dataclasses and injected into the analyzers, so alternate
parameters can be tested without touching module globals.

An optional TOML file can override the defaults:

    [tempo]
    min_bpm = 70
    max_bpm = 180

    [key]
    fft_size = 8192
"""

import os
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import toml

from .core.constants import (
    ENERGY_FRAME_SIZE,
    ENERGY_HOP,
    MIN_BPM,
    MAX_BPM,
    FFT_SIZE,
    FFT_HOP,
    CHROMA_MIN_FREQ,
    CHROMA_MAX_FREQ,
    KRUMHANSL_MAJOR,
    KRUMHANSL_MINOR,
)
from .core.errors import ConfigError, InvalidInputError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KEYTEMPO_CONFIG_PATH"


@dataclass(frozen=True)
class KeyProfiles:
    """Major and minor reference weights, index 0 = tonic."""

    major: Tuple[float, ...] = KRUMHANSL_MAJOR
    minor: Tuple[float, ...] = KRUMHANSL_MINOR

    def __post_init__(self):
        for name in ("major", "minor"):
            profile = tuple(float(w) for w in getattr(self, name))
            if len(profile) != 12:
                raise ConfigError(f"{name} profile must have 12 weights, got {len(profile)}")
            object.__setattr__(self, name, profile)


KRUMHANSL = KeyProfiles()


@dataclass(frozen=True)
class TempoConfig:
    """Onset-energy framing and BPM search range.

    Attributes:
        frame_size: Samples per energy frame (default: 1024)
        hop: Samples between energy frames (default: 512)
        min_bpm: Slowest tempo considered (default: 60)
        max_bpm: Fastest tempo considered (default: 200)
    """

    frame_size: int = ENERGY_FRAME_SIZE
    hop: int = ENERGY_HOP
    min_bpm: float = MIN_BPM
    max_bpm: float = MAX_BPM

    def __post_init__(self):
        if self.frame_size <= 0 or self.hop <= 0:
            raise ConfigError(
                f"tempo frame_size/hop must be positive, got {self.frame_size}/{self.hop}"
            )
        if not (0 < self.min_bpm < self.max_bpm):
            raise ConfigError(
                f"tempo bounds must satisfy 0 < min_bpm < max_bpm, "
                f"got [{self.min_bpm}, {self.max_bpm}]"
            )


@dataclass(frozen=True)
class KeyConfig:
    """Spectral framing, chroma band and tonal profiles.

    Attributes:
        fft_size: FFT frame length, must be a power of two (default: 4096)
        hop: Samples between spectral frames (default: 1024)
        min_freq: Lowest bin frequency mapped to chroma in Hz (default: 50)
        max_freq: Highest bin frequency mapped to chroma in Hz (default: 2000)
        profiles: Major/minor reference profiles (default: Krumhansl-Schmuckler)
    """

    fft_size: int = FFT_SIZE
    hop: int = FFT_HOP
    min_freq: float = CHROMA_MIN_FREQ
    max_freq: float = CHROMA_MAX_FREQ
    profiles: KeyProfiles = KRUMHANSL

    def __post_init__(self):
        if self.fft_size <= 0 or self.fft_size & (self.fft_size - 1):
            raise InvalidInputError(f"FFT size must be power of 2, got {self.fft_size}")
        if self.hop <= 0:
            raise ConfigError(f"key hop must be positive, got {self.hop}")
        if not (0 < self.min_freq < self.max_freq):
            raise ConfigError(
                f"chroma band must satisfy 0 < min_freq < max_freq, "
                f"got [{self.min_freq}, {self.max_freq}]"
            )


@dataclass(frozen=True)
class AnalysisConfig:
    """Complete configuration for one analysis run."""

    tempo: TempoConfig = field(default_factory=TempoConfig)
    key: KeyConfig = field(default_factory=KeyConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """
        Build a config from a parsed mapping with ``tempo``/``key`` sections.

        Missing sections and parameters keep their defaults.

        Raises:
            ConfigError: On unknown sections or parameters.
        """
        unknown = set(data) - {"tempo", "key"}
        if unknown:
            raise ConfigError(f"Unknown config section(s): {', '.join(sorted(unknown))}")

        tempo = _build_section(TempoConfig, data.get("tempo", {}), "tempo")

        key_data = dict(data.get("key", {}))
        profiles = KRUMHANSL
        if "major_profile" in key_data or "minor_profile" in key_data:
            profiles = KeyProfiles(
                major=key_data.pop("major_profile", KRUMHANSL.major),
                minor=key_data.pop("minor_profile", KRUMHANSL.minor),
            )
        key = replace(_build_section(KeyConfig, key_data, "key"), profiles=profiles)

        return cls(tempo=tempo, key=key)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "AnalysisConfig":
        """
        Load config from a TOML file.

        Args:
            config_path: Path to the TOML file. If None, uses the
                KEYTEMPO_CONFIG_PATH env var; with neither set the
                defaults are returned.

        Returns:
            AnalysisConfig instance.

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values.
        """
        if config_path is None:
            config_path = os.getenv(CONFIG_ENV_VAR)
            if not config_path:
                return cls()

        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return cls()

        try:
            config_dict = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

        config = cls.from_dict(config_dict)
        logger.info(f"Loaded config from {config_path}")
        return config


def _build_section(section_cls, values: Dict[str, Any], section: str):
    """Instantiate one config dataclass, rejecting unknown parameters."""
    allowed = {f.name for f in fields(section_cls) if f.name != "profiles"}
    unknown = set(values) - allowed
    if unknown:
        raise ConfigError(f"Unknown parameter(s) in [{section}]: {', '.join(sorted(unknown))}")
    try:
        return section_cls(**values)
    except TypeError as e:
        raise ConfigError(f"Invalid [{section}] section: {e}") from e
