"""Audio loading - decode a file into a mono sample buffer."""

import logging
import numpy as np
import librosa
from pathlib import Path
from typing import Tuple, Optional

from ..core.constants import DEFAULT_MAX_SECONDS

logger = logging.getLogger(__name__)


class AudioLoader:
    """Decode audio files for analysis.

    Decoding errors are raised here, before the analysis core is ever
    called.
    """

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        max_seconds: Optional[float] = DEFAULT_MAX_SECONDS,
        target_sr: Optional[int] = None,
        mono: bool = True,
    ):
        """
        Initialize AudioLoader.

        Args:
            max_seconds: Keep only the first max_seconds of audio (None = all)
            target_sr: Resample to this rate; None keeps the native rate
            mono: Downmix to mono if True
        """
        self.max_seconds = max_seconds
        self.target_sr = target_sr
        self.mono = mono

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        # librosa handles resampling, mono conversion and the duration limit
        audio, sr = librosa.load(
            str(path),
            sr=self.target_sr,
            mono=self.mono,
            duration=self.max_seconds,
        )
        sr = int(sr)

        # librosa can overshoot the duration limit by a sample or two
        if self.max_seconds is not None:
            audio = self.truncate(audio, sr)

        logger.debug(f"Loaded {path.name}: {audio.shape[-1]} samples at {sr} Hz")
        return audio, sr

    def truncate(self, audio: np.ndarray, sr: int) -> np.ndarray:
        """Keep at most floor(sr * max_seconds) samples."""
        if self.max_seconds is None:
            return audio
        max_samples = int(np.floor(sr * self.max_seconds))
        return audio[..., :max_samples]

    def get_duration(self, audio: np.ndarray, sr: int) -> float:
        """Get duration in seconds."""
        return audio.shape[-1] / sr
