"""Analysis window coefficients.

All shapes are symmetric, computed over n = 0 .. length-1 with N = length-1.
The Tukey window uses a fixed taper ratio of 0.5.
"""

from __future__ import annotations

from typing import Callable, Dict, Union

import numpy as np

from onset_detection.errors import ConfigurationError
from onset_detection.types import WindowType

TUKEY_ALPHA = 0.5


def _rectangular(length: int) -> np.ndarray:
    return np.ones(length, dtype=np.float64)


def _hanning(length: int) -> np.ndarray:
    n = np.arange(length, dtype=np.float64)
    N = float(length - 1)
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * (n / N)))


def _hamming(length: int) -> np.ndarray:
    n = np.arange(length, dtype=np.float64)
    N = float(length - 1)
    return 0.54 - 0.46 * np.cos(2.0 * np.pi * (n / N))


def _blackman(length: int) -> np.ndarray:
    n = np.arange(length, dtype=np.float64)
    N = float(length - 1)
    return (
        0.42
        - 0.5 * np.cos(2.0 * np.pi * (n / N))
        + 0.08 * np.cos(4.0 * np.pi * (n / N))
    )


def _tukey(length: int, alpha: float = TUKEY_ALPHA) -> np.ndarray:
    """Flat top with cosine tapers; index is re-centred so the midpoint is 0."""
    N = float(length - 1)
    m = np.arange(length, dtype=np.float64) - (length // 2) + 1
    flat = np.abs(m) <= alpha * (N / 2.0)
    taper = 0.5 * (1.0 + np.cos(np.pi * (((2.0 * m) / (alpha * N)) - 1.0)))
    return np.where(flat, 1.0, taper)


_GENERATORS: Dict[WindowType, Callable[[int], np.ndarray]] = {
    WindowType.RECTANGULAR: _rectangular,
    WindowType.HANNING: _hanning,
    WindowType.HAMMING: _hamming,
    WindowType.BLACKMAN: _blackman,
    WindowType.TUKEY: _tukey,
}


def generate_window(shape: Union[WindowType, str], length: int) -> np.ndarray:
    """Return `length` window coefficients for `shape`.

    Args:
        shape: Window shape; unknown names fall back to Hanning.
        length: Number of coefficients (the analysis frame size).

    Returns:
        float64 array of shape (length,).
    """
    if length <= 0:
        raise ConfigurationError(f"Window length must be positive, got {length}")
    if length == 1:
        # N = 0 makes every tapered formula degenerate
        return np.ones(1, dtype=np.float64)
    return _GENERATORS[WindowType.parse(shape)](length)
