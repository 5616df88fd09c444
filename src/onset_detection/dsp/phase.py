"""Principal-argument phase wrapping into (-pi, pi]."""

from __future__ import annotations

import math

import numpy as np

TWO_PI = 2.0 * math.pi


def princarg(phase: float) -> float:
    """Wrap a single phase value into (-pi, pi] by whole turns of 2*pi."""
    while phase <= -math.pi:
        phase += TWO_PI
    while phase > math.pi:
        phase -= TWO_PI
    return phase


def wrap_phase(phase: np.ndarray) -> np.ndarray:
    """Vectorised princarg: same stepwise 2*pi corrections, applied per element.

    Returns a new array; the input is not modified.
    """
    out = np.array(phase, dtype=np.float64, copy=True)
    low = out <= -np.pi
    while low.any():
        out[low] += TWO_PI
        low = out <= -np.pi
    high = out > np.pi
    while high.any():
        out[high] -= TWO_PI
        high = out > np.pi
    return out
