"""Analysis layer - Low-level signal analysis.

This layer extracts features from raw audio:
- Magnitude spectra (Hann window + radix-2 FFT)
- Chroma (pitch-class energy)
- Onset-energy novelty and tempo
"""

from .spectrum import (
    SpectrumAnalyzer,
    hann_window,
    fft_in_place,
    fft_magnitudes,
    is_power_of_two,
)
from .energy import frame_energies, novelty_curve
from .chroma import ChromaExtractor
from .tempo import TempoAnalyzer, TempoInfo

__all__ = [
    "SpectrumAnalyzer",
    "hann_window",
    "fft_in_place",
    "fft_magnitudes",
    "is_power_of_two",
    "frame_energies",
    "novelty_curve",
    "ChromaExtractor",
    "TempoAnalyzer",
    "TempoInfo",
]
