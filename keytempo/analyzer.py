"""Analysis façade - tempo and key for one mono sample buffer.

The two branches share nothing but the read-only input buffer:

    samples ─┬─ novelty curve ─ autocorrelation ─────── tempo
             └─ Hann/FFT ─ chroma ─ profile correlation ─ key
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

import numpy as np

from .analysis.chroma import ChromaExtractor
from .analysis.tempo import TempoAnalyzer
from .config import AnalysisConfig
from .core import AnalysisResult, InvalidInputError
from .inference.key import KeyDetector

logger = logging.getLogger(__name__)

Samples = Union[np.ndarray, Sequence[float]]


class Analyzer:
    """Estimate tempo and key with an injected configuration."""

    def __init__(self, config: Optional[AnalysisConfig] = None, parallel: bool = False):
        """
        Initialize Analyzer.

        Args:
            config: Framing, bounds and profiles (default: AnalysisConfig())
            parallel: Run the tempo and key branches on two worker threads
        """
        self.config = config or AnalysisConfig()
        self.parallel = parallel

    def estimate_tempo(self, samples: np.ndarray, sr: int) -> Optional[float]:
        """Tempo in BPM, or None."""
        return TempoAnalyzer(self.config.tempo).detect(samples, sr)

    def estimate_key(self, samples: np.ndarray, sr: int) -> Optional[str]:
        """Key label such as "A minor", or None."""
        chroma = ChromaExtractor(self.config.key).extract(samples, sr)
        key_info = KeyDetector(self.config.key.profiles).detect(chroma)
        return key_info.name if key_info else None

    def analyze(self, samples: Samples, sr: int) -> AnalysisResult:
        """
        Analyze a mono buffer.

        Args:
            samples: Mono samples, conventionally in [-1, 1]; never modified
            sr: Sample rate in Hz

        Returns:
            AnalysisResult; absent fields are None

        Raises:
            InvalidInputError: If sr is not a positive integer or samples
                is not one-dimensional
        """
        samples = _as_buffer(samples)
        if isinstance(sr, bool) or not isinstance(sr, (int, np.integer)) or sr <= 0:
            raise InvalidInputError(f"Sample rate must be a positive integer, got {sr!r}")
        sr = int(sr)

        if self.parallel:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="keytempo") as pool:
                tempo_future = pool.submit(self.estimate_tempo, samples, sr)
                key_future = pool.submit(self.estimate_key, samples, sr)
                tempo, key = tempo_future.result(), key_future.result()
        else:
            tempo = self.estimate_tempo(samples, sr)
            key = self.estimate_key(samples, sr)

        if tempo is None:
            logger.info(f"No tempo found in {len(samples)} samples at {sr} Hz")
        if key is None:
            logger.info(f"No key found in {len(samples)} samples at {sr} Hz")

        return AnalysisResult(tempo=tempo, key=key)


def _as_buffer(samples: Samples) -> np.ndarray:
    """Read-only float64 copy of the caller's samples."""
    buffer = np.array(samples, dtype=np.float64, copy=True)
    if buffer.ndim != 1:
        raise InvalidInputError(f"Samples must be a mono 1-D buffer, got shape {buffer.shape}")
    buffer.setflags(write=False)
    return buffer


def analyze(
    samples: Samples,
    sample_rate: int,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """
    Estimate tempo and key of a mono sample buffer.

    "No tempo" / "no key" are reported as None fields, never raised.

    Args:
        samples: Mono samples (float32 or float64)
        sample_rate: Sample rate in Hz
        config: Optional AnalysisConfig

    Returns:
        AnalysisResult(tempo, key)
    """
    return Analyzer(config).analyze(samples, sample_rate)
