"""Windowing and spectral transform.

Implements an iterative radix-2 Cooley-Tukey FFT on separate real and
imaginary float64 buffers. Each butterfly stage is vectorized across
blocks with numpy; twiddle factors are recomputed per stage from
``cos(2*pi*j/size)`` and ``-sin(2*pi*j/size)``.
"""

import logging
from typing import Optional

import numpy as np

from ..core.constants import FFT_SIZE
from ..core.errors import InvalidInputError

logger = logging.getLogger(__name__)


def is_power_of_two(n: int) -> bool:
    """Check whether n is a positive integral power of two."""
    return n > 0 and (n & (n - 1)) == 0


def hann_window(size: int) -> np.ndarray:
    """
    Symmetric Hann window: 0.5 * (1 - cos(2*pi*i / (size - 1))).

    Args:
        size: Window length

    Returns:
        Window array of shape (size,); endpoints are zero
    """
    if size <= 0:
        raise InvalidInputError(f"Window size must be positive, got {size}")
    if size == 1:
        return np.ones(1)
    i = np.arange(size)
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (size - 1)))


def bit_reverse_indices(n: int) -> np.ndarray:
    """Permutation that maps every index in [0, n) to its bit-reversed index."""
    if not is_power_of_two(n):
        raise InvalidInputError(f"FFT size must be power of 2, got {n}")
    levels = n.bit_length() - 1
    idx = np.arange(n)
    rev = np.zeros(n, dtype=np.intp)
    for _ in range(levels):
        rev = (rev << 1) | (idx & 1)
        idx = idx >> 1
    return rev


def fft_in_place(
    re: np.ndarray,
    im: np.ndarray,
    bit_reversal: Optional[np.ndarray] = None,
) -> None:
    """
    Transform (re, im) to its discrete Fourier transform, in place.

    Args:
        re: Real parts, contiguous float64 array whose length is a power of two
        im: Imaginary parts, same length as ``re``
        bit_reversal: Precomputed permutation from bit_reverse_indices()

    Raises:
        InvalidInputError: If the length is not a power of two, the
            buffers differ in length or are not contiguous arrays.
            Input is never padded or truncated.
    """
    n = len(re)
    if not is_power_of_two(n):
        raise InvalidInputError(f"FFT size must be power of 2, got {n}")
    if len(im) != n:
        raise InvalidInputError(f"FFT buffers differ in length: {n} != {len(im)}")
    if not (isinstance(re, np.ndarray) and isinstance(im, np.ndarray)
            and re.flags.c_contiguous and im.flags.c_contiguous):
        raise InvalidInputError("FFT buffers must be contiguous numpy arrays")

    if bit_reversal is None:
        bit_reversal = bit_reverse_indices(n)
    re[:] = re[bit_reversal]
    im[:] = im[bit_reversal]

    size = 2
    while size <= n:
        half = size >> 1
        angle = (2.0 * np.pi / size) * np.arange(half)
        cos = np.cos(angle)
        sin = -np.sin(angle)

        # One row per butterfly block; views into re/im
        re_blocks = re.reshape(-1, size)
        im_blocks = im.reshape(-1, size)
        k_re, l_re = re_blocks[:, :half], re_blocks[:, half:]
        k_im, l_im = im_blocks[:, :half], im_blocks[:, half:]

        tre = l_re * cos - l_im * sin
        tim = l_re * sin + l_im * cos

        l_re[...] = k_re - tre
        l_im[...] = k_im - tim
        k_re += tre
        k_im += tim

        size <<= 1


def fft_magnitudes(
    frame: np.ndarray,
    window: np.ndarray,
    re: Optional[np.ndarray] = None,
    im: Optional[np.ndarray] = None,
    bit_reversal: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Window a real frame and return the magnitudes of its first n/2 bins.

    Args:
        frame: Real-valued samples, length n (power of two)
        window: Window of length n
        re, im: Optional scratch buffers of length n, overwritten
        bit_reversal: Optional precomputed bit-reversal permutation

    Returns:
        Magnitude spectrum of shape (n // 2,)
    """
    frame = np.asarray(frame, dtype=np.float64)
    n = frame.shape[0]
    if window.shape[0] != n:
        raise InvalidInputError(f"Window length {window.shape[0]} != frame length {n}")

    if re is None:
        re = np.empty(n)
    if im is None:
        im = np.empty(n)
    if re.shape[0] != n or im.shape[0] != n:
        raise InvalidInputError(f"Scratch buffers must have length {n}")

    np.multiply(frame, window, out=re)
    im.fill(0.0)
    fft_in_place(re, im, bit_reversal)

    return np.hypot(re[: n // 2], im[: n // 2])


class SpectrumAnalyzer:
    """Magnitude spectra for a fixed frame size.

    Holds the Hann window, the bit-reversal permutation and the scratch
    buffers for one analysis call; the buffers are reused for every
    frame of that call.
    """

    def __init__(self, fft_size: int = FFT_SIZE):
        if not is_power_of_two(fft_size):
            raise InvalidInputError(f"FFT size must be power of 2, got {fft_size}")
        self.fft_size = fft_size
        self.window = hann_window(fft_size)
        self._bit_reversal = bit_reverse_indices(fft_size)
        self._re = np.empty(fft_size)
        self._im = np.empty(fft_size)

    @property
    def n_bins(self) -> int:
        """Number of non-negative frequency bins returned per frame."""
        return self.fft_size // 2

    def magnitudes(self, frame: np.ndarray) -> np.ndarray:
        """Magnitude spectrum of one frame of length fft_size."""
        return fft_magnitudes(
            frame,
            self.window,
            re=self._re,
            im=self._im,
            bit_reversal=self._bit_reversal,
        )

    def bin_frequencies(self, sr: int) -> np.ndarray:
        """Center frequency in Hz of every returned bin."""
        return np.arange(self.n_bins) * sr / self.fft_size
