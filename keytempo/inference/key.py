"""Key detection - Identify the tonal center of a chroma vector.

Correlates the chroma vector against the major and minor tonal profiles
rotated to each of the 12 roots. Candidates are enumerated root 0..11,
major before minor at each root, and the first strictly-highest score
wins, so ties always resolve to the lower root and to major.
"""

import logging
import numpy as np
from typing import List, Optional, Sequence
from dataclasses import dataclass

from ..analysis.chroma import ChromaExtractor
from ..config import KeyConfig, KeyProfiles, KRUMHANSL
from ..core import PITCH_NAMES, MODES, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass
class KeyCandidate:
    """A candidate key with its score."""
    root: str
    mode: str
    score: float

    @property
    def name(self) -> str:
        return f"{self.root} {self.mode}"


@dataclass
class KeyInfo:
    """Container for key detection results."""

    root: str  # Key root note (e.g., "C", "F#")
    mode: str  # "major" or "minor"
    score: float  # Raw profile correlation of the winning candidate
    chroma: Optional[np.ndarray] = None  # 12-element chroma it was detected from

    @property
    def name(self) -> str:
        return f"{self.root} {self.mode}"


class KeyDetector:
    """Detect musical key from a chroma vector or from audio."""

    def __init__(self, profiles: KeyProfiles = KRUMHANSL):
        """
        Initialize KeyDetector.

        Args:
            profiles: Major/minor reference profiles (default: Krumhansl-Schmuckler)
        """
        self.profiles = profiles
        self._profile_arrays = {
            "major": np.asarray(profiles.major, dtype=np.float64),
            "minor": np.asarray(profiles.minor, dtype=np.float64),
        }

    @staticmethod
    def score(chroma: np.ndarray, profile: Sequence[float], root: int) -> float:
        """Sum over i of chroma[(i + root) % 12] * profile[i]."""
        rotated = np.roll(np.asarray(chroma, dtype=np.float64), -root)
        return float(np.dot(rotated, np.asarray(profile, dtype=np.float64)))

    def candidates(self, chroma: np.ndarray) -> List[KeyCandidate]:
        """
        Score all 24 keys.

        Returns:
            KeyCandidates in enumeration order (C major, C minor, C# major, ...)
        """
        chroma = np.asarray(chroma, dtype=np.float64)
        if chroma.shape != (12,):
            raise InvalidInputError(f"Chroma vector must have 12 elements, got shape {chroma.shape}")

        result = []
        for root in range(12):
            for mode in MODES:
                score = self.score(chroma, self._profile_arrays[mode], root)
                result.append(KeyCandidate(PITCH_NAMES[root], mode, score))
        return result

    def detect(self, chroma: Optional[np.ndarray]) -> Optional[KeyInfo]:
        """
        Find the best matching key.

        A best key is reported whenever the chroma carries energy, however
        weak the match.

        Args:
            chroma: 12-element chroma vector, or None

        Returns:
            KeyInfo, or None if chroma is None, all zero or scores NaN
        """
        if chroma is None:
            return None
        chroma = np.asarray(chroma, dtype=np.float64)
        if not np.any(chroma):
            logger.debug("Chroma vector has no energy; no key")
            return None

        best = None
        best_score = -np.inf
        for candidate in self.candidates(chroma):
            # NaN never compares greater, so it is never accepted
            if candidate.score > best_score:
                best = candidate
                best_score = candidate.score

        if best is None:
            logger.debug("No key candidate has a comparable score; no key")
            return None

        logger.debug(f"Best key: {best.name} (score {best.score:.4f})")
        return KeyInfo(root=best.root, mode=best.mode, score=best.score, chroma=chroma)

    def detect_from_audio(
        self,
        audio: np.ndarray,
        sr: int,
        config: Optional[KeyConfig] = None,
    ) -> Optional[KeyInfo]:
        """
        Detect key from audio using an FFT chromagram.

        Args:
            audio: Mono audio array
            sr: Sample rate
            config: Spectral framing; its profiles are ignored in favour
                of the detector's own

        Returns:
            KeyInfo, or None if the buffer is too short or silent
        """
        chroma = ChromaExtractor(config).extract(audio, sr)
        return self.detect(chroma)
