"""Onset energy - short-time energy and its half-wave rectified difference."""

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..core.constants import ENERGY_FRAME_SIZE, ENERGY_HOP

logger = logging.getLogger(__name__)


def frame_view(samples: np.ndarray, frame_size: int, hop: int) -> np.ndarray:
    """
    Read-only view of every full frame of ``samples``.

    Frames start at multiples of ``hop``; a trailing partial frame is
    dropped.

    Returns:
        Array of shape (n_frames, frame_size), n_frames may be 0
    """
    if len(samples) < frame_size:
        return np.empty((0, frame_size), dtype=samples.dtype)
    return sliding_window_view(samples, frame_size)[::hop]


def frame_energies(
    samples: np.ndarray,
    frame_size: int = ENERGY_FRAME_SIZE,
    hop: int = ENERGY_HOP,
) -> np.ndarray:
    """Mean squared amplitude of every full frame."""
    samples = np.asarray(samples, dtype=np.float64)
    frames = frame_view(samples, frame_size, hop)
    return np.einsum("ij,ij->i", frames, frames) / frame_size


def novelty_curve(
    samples: np.ndarray,
    frame_size: int = ENERGY_FRAME_SIZE,
    hop: int = ENERGY_HOP,
) -> np.ndarray:
    """
    Energy novelty: max(0, energy[i] - energy[i - 1]).

    The first frame is compared against an energy of 0.

    Args:
        samples: Mono audio array
        frame_size: Samples per frame
        hop: Samples between frame starts

    Returns:
        Non-negative array with floor((N - frame_size) / hop) + 1
        entries, or an empty array if N < frame_size
    """
    energies = frame_energies(samples, frame_size, hop)
    novelty = np.maximum(np.diff(energies, prepend=0.0), 0.0)
    logger.debug(f"Novelty curve: {len(novelty)} frames (frame={frame_size}, hop={hop})")
    return novelty
