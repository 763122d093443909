"""keytempo - Tempo and key estimation for mono audio.

Architecture Layers:
    1. input/     - Audio loading (file decode, duration limit)
    2. analysis/  - Low-level signal analysis (FFT, chroma, onset energy, tempo)
    3. inference/ - Musical understanding (key)
    4. analyzer   - Façade combining tempo and key
    5. exporter   - Result rendering (display text, clipboard text, JSON)
"""

__version__ = "0.1.0"

# Core types
from .core import AnalysisResult, AnalysisError, InvalidInputError, ConfigError

# Configuration
from .config import AnalysisConfig, TempoConfig, KeyConfig, KeyProfiles

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import ChromaExtractor, SpectrumAnalyzer, TempoAnalyzer

# Inference layer
from .inference import KeyDetector

# Façade
from .analyzer import Analyzer, analyze

__all__ = [
    # Core
    "AnalysisResult",
    "AnalysisError",
    "InvalidInputError",
    "ConfigError",
    # Configuration
    "AnalysisConfig",
    "TempoConfig",
    "KeyConfig",
    "KeyProfiles",
    # Input
    "AudioLoader",
    # Analysis
    "ChromaExtractor",
    "SpectrumAnalyzer",
    "TempoAnalyzer",
    # Inference
    "KeyDetector",
    # Façade
    "Analyzer",
    "analyze",
]
