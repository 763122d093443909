"""Chroma extraction - pitch-class energy from FFT magnitude spectra."""

import logging
from typing import Optional

import numpy as np

from .energy import frame_view
from .spectrum import SpectrumAnalyzer
from ..config import KeyConfig
from ..core.constants import A4_FREQ, A4_MIDI

logger = logging.getLogger(__name__)


class ChromaExtractor:
    """Accumulate spectral magnitude into 12 pitch classes.

    Every full frame is windowed and transformed; each bin whose
    frequency lies inside the configured band adds its magnitude to the
    pitch class nearest to that frequency. The result is the mean over
    frames.
    """

    def __init__(self, config: Optional[KeyConfig] = None):
        self.config = config or KeyConfig()

    def pitch_class_map(self, sr: int) -> np.ndarray:
        """
        Pitch class of every spectral bin.

        Args:
            sr: Sample rate

        Returns:
            Integer array of shape (fft_size // 2,): pitch class 0-11 for
            bins inside [min_freq, max_freq], -1 for excluded bins
            (always including the DC bin)
        """
        n_bins = self.config.fft_size // 2
        freqs = np.arange(n_bins) * sr / self.config.fft_size

        band = (freqs >= self.config.min_freq) & (freqs <= self.config.max_freq)
        band[0] = False

        pitch_classes = np.full(n_bins, -1, dtype=np.intp)
        midi = A4_MIDI + 12 * np.log2(freqs[band] / A4_FREQ)
        # Round half up, then wrap into [0, 11]
        pitch_classes[band] = np.mod(np.floor(midi + 0.5).astype(np.intp), 12)
        return pitch_classes

    def extract(self, samples: np.ndarray, sr: int) -> Optional[np.ndarray]:
        """
        Compute the mean chroma vector of a buffer.

        Args:
            samples: Mono audio array (not modified)
            sr: Sample rate

        Returns:
            12-element array (index 0 = C), or None if the buffer is
            shorter than one FFT frame
        """
        samples = np.asarray(samples, dtype=np.float64)
        frames = frame_view(samples, self.config.fft_size, self.config.hop)
        if len(frames) == 0:
            logger.debug(
                f"Buffer of {len(samples)} samples is shorter than one "
                f"{self.config.fft_size}-sample frame; no chroma"
            )
            return None

        spectrum = SpectrumAnalyzer(self.config.fft_size)
        pitch_classes = self.pitch_class_map(sr)
        in_band = pitch_classes >= 0
        band_classes = pitch_classes[in_band]

        chroma = np.zeros(12)
        for frame in frames:
            magnitudes = spectrum.magnitudes(frame)
            chroma += np.bincount(band_classes, weights=magnitudes[in_band], minlength=12)

        chroma /= len(frames)
        logger.debug(f"Chroma from {len(frames)} frames: {np.round(chroma, 4).tolist()}")
        return chroma
