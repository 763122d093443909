"""Core types and constants for keytempo."""

from .result import AnalysisResult
from .errors import AnalysisError, InvalidInputError, ConfigError
from .constants import (
    PITCH_NAMES,
    MODES,
    ENERGY_FRAME_SIZE,
    ENERGY_HOP,
    FFT_SIZE,
    FFT_HOP,
)

__all__ = [
    "AnalysisResult",
    "AnalysisError",
    "InvalidInputError",
    "ConfigError",
    "PITCH_NAMES",
    "MODES",
    "ENERGY_FRAME_SIZE",
    "ENERGY_HOP",
    "FFT_SIZE",
    "FFT_HOP",
]
