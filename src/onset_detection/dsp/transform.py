"""Forward FFT adapter around scipy.fft.

Owns a fixed-size complex input buffer (the "plan"). The buffer must be
released before the adapter is prepared again for a new length.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import scipy.fft

from onset_detection.errors import InputSizeError, TransformResourceError

logger = logging.getLogger(__name__)


class FFTTransform:
    """Complex forward FFT of a real, fixed-length frame.

    Interface:
      fft = FFTTransform()
      fft.prepare(1024)
      real, imag = fft.transform(frame)
      fft.release()
    """

    def __init__(self, length: Optional[int] = None):
        self._length = 0
        self._complex_in: Optional[np.ndarray] = None
        if length is not None:
            self.prepare(length)

    @property
    def length(self) -> int:
        """Transform length, 0 when not prepared."""
        return self._length

    @property
    def is_prepared(self) -> bool:
        return self._complex_in is not None

    def prepare(self, length: int) -> None:
        """Acquire buffers for `length`-point transforms.

        Raises:
            TransformResourceError: already prepared (release first), invalid
                length, or the buffer could not be allocated.
        """
        if self.is_prepared:
            raise TransformResourceError(
                f"FFT already prepared for length {self._length}; release() first"
            )
        if length <= 0:
            raise TransformResourceError(f"FFT length must be positive, got {length}")
        try:
            self._complex_in = np.zeros(length, dtype=np.complex128)
        except MemoryError as exc:
            raise TransformResourceError(
                f"Could not allocate FFT buffer of length {length}"
            ) from exc
        self._length = length
        logger.debug("Prepared FFT for length %d", length)

    def transform(self, frame: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Forward complex FFT of a real frame.

        Args:
            frame: Real samples, shape (length,).

        Returns:
            (real, imag): Each float64, shape (length,).
        """
        if self._complex_in is None:
            raise TransformResourceError("FFT used before prepare()")
        if len(frame) != self._length:
            raise InputSizeError(
                f"FFT expects {self._length} samples, got {len(frame)}"
            )
        self._complex_in.real = frame
        self._complex_in.imag = 0.0
        spectrum = scipy.fft.fft(self._complex_in)
        return spectrum.real.copy(), spectrum.imag.copy()

    def release(self) -> None:
        """Free buffers. Safe to call when not prepared."""
        if self._complex_in is None:
            return
        logger.debug("Released FFT for length %d", self._length)
        self._complex_in = None
        self._length = 0
