"""Tempo analysis - autocorrelation of the onset-energy novelty curve."""

import logging
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass

from .energy import novelty_curve
from ..config import TempoConfig

logger = logging.getLogger(__name__)


@dataclass
class TempoInfo:
    """Container for tempo analysis results."""

    bpm: Optional[float]  # None if no periodicity was found
    lag: int = 0  # Winning lag in frames (0 = none)
    correlation: float = 0.0  # Raw autocorrelation at the winning lag
    n_frames: int = 0  # Length of the novelty curve


class TempoAnalyzer:
    """Estimate tempo from periodicity in the energy novelty curve."""

    def __init__(self, config: Optional[TempoConfig] = None):
        self.config = config or TempoConfig()

    def lag_bounds(self, sr: int) -> Tuple[int, int]:
        """
        Lag range (in frames) corresponding to the BPM search range.

        Returns:
            Tuple of (min_lag, max_lag), both inclusive
        """
        hop = self.config.hop
        min_lag = int(np.floor(60 * sr / (hop * self.config.max_bpm)))
        max_lag = int(np.floor(60 * sr / (hop * self.config.min_bpm)))
        return min_lag, max_lag

    @staticmethod
    def autocorrelation(novelty: np.ndarray, lag: int) -> float:
        """Unnormalized autocorrelation: sum of novelty[i] * novelty[i - lag]."""
        if lag <= 0 or lag >= len(novelty):
            return 0.0
        return float(np.dot(novelty[lag:], novelty[:-lag]))

    def estimate(self, novelty: np.ndarray, sr: int) -> TempoInfo:
        """
        Pick the lag with the strictly greatest autocorrelation.

        The search starts from (lag 0, correlation 0), so a flat or
        all-zero novelty curve yields no tempo rather than lag 0.

        Args:
            novelty: Energy novelty curve
            sr: Sample rate

        Returns:
            TempoInfo; bpm is None when no lag scored above zero
        """
        novelty = np.asarray(novelty, dtype=np.float64)
        min_lag, max_lag = self.lag_bounds(sr)

        best_lag = 0
        best_corr = 0.0
        for lag in range(max(min_lag, 1), max_lag + 1):
            corr = self.autocorrelation(novelty, lag)
            if corr > best_corr:
                best_corr = corr
                best_lag = lag

        logger.debug(
            f"Lag search [{min_lag}, {max_lag}] over {len(novelty)} frames: "
            f"best lag {best_lag} (corr {best_corr:.6g})"
        )

        if not best_lag:
            return TempoInfo(bpm=None, n_frames=len(novelty))

        bpm = 60 * sr / (self.config.hop * best_lag)
        return TempoInfo(
            bpm=bpm,
            lag=best_lag,
            correlation=best_corr,
            n_frames=len(novelty),
        )

    def analyze(self, audio: np.ndarray, sr: int) -> TempoInfo:
        """
        Perform full tempo analysis.

        Args:
            audio: Audio array
            sr: Sample rate

        Returns:
            TempoInfo with the winning lag and its correlation
        """
        novelty = novelty_curve(audio, self.config.frame_size, self.config.hop)
        return self.estimate(novelty, sr)

    def detect(self, audio: np.ndarray, sr: int) -> Optional[float]:
        """
        Detect tempo.

        Args:
            audio: Audio array
            sr: Sample rate

        Returns:
            Tempo in BPM, or None if it could not be determined
        """
        return self.analyze(audio, sr).bpm
