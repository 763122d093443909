"""Inference layer - Musical understanding from analysis features.

Pipeline: Chroma → Key
"""

from .key import KeyDetector, KeyInfo, KeyCandidate

__all__ = [
    "KeyDetector",
    "KeyInfo",
    "KeyCandidate",
]
