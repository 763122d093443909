"""Input layer - Decode audio files into sample buffers."""

from .loader import AudioLoader

__all__ = ["AudioLoader"]
