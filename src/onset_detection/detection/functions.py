"""Onset detection function variants.

Each variant reduces one analysis frame to a scalar and advances the
history it depends on. Time-domain variants see the raw (unwindowed)
frame; spectral variants see the magnitude/phase of the windowed FFT.
History is updated for every bin, including bins whose contribution is
rectified to zero.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from onset_detection.dsp.frame_buffer import SpectralFrame, SpectralHistory
from onset_detection.dsp.phase import wrap_phase
from onset_detection.types import DetectionFunctionType

# Bins at or below this magnitude are ignored by phase deviation
PHASE_DEVIATION_MAGNITUDE_GATE = 0.1

TimeDomainFunction = Callable[[np.ndarray, SpectralHistory], float]
SpectralFunction = Callable[[SpectralFrame, SpectralHistory], float]


# ---------------------------------------------------------------------------
# Time domain
# ---------------------------------------------------------------------------


def energy_envelope(frame: np.ndarray, history: SpectralHistory) -> float:
    """Sum of squared samples."""
    return float(np.dot(frame, frame))


def energy_difference(frame: np.ndarray, history: SpectralHistory) -> float:
    """Half-wave rectified first difference of frame energy."""
    total = float(np.dot(frame, frame))
    sample = total - history.previous_energy_sum
    history.previous_energy_sum = total
    return sample if sample > 0 else 0.0


# ---------------------------------------------------------------------------
# Spectral
# ---------------------------------------------------------------------------


def _magnitude_difference(spectrum: SpectralFrame, history: SpectralHistory) -> np.ndarray:
    diff = spectrum.magnitude - history.previous_magnitude
    history.previous_magnitude[:] = spectrum.magnitude
    return diff


def _bin_weights(size: int) -> np.ndarray:
    return np.arange(1, size + 1, dtype=np.float64)


def _phase_deviation(spectrum: SpectralFrame, history: SpectralHistory) -> np.ndarray:
    """Second difference of phase; advances the phase history."""
    dev = spectrum.phase - 2.0 * history.previous_phase + history.previous_previous_phase
    history.advance_phase(spectrum.phase)
    return dev


def _complex_distance(
    magnitude: np.ndarray, previous_magnitude: np.ndarray, deviation: np.ndarray
) -> np.ndarray:
    """Euclidean distance between the current bin and its phase-predicted value."""
    squared = (
        magnitude ** 2
        + previous_magnitude ** 2
        - 2.0 * magnitude * previous_magnitude * np.cos(deviation)
    )
    # rounding can push identical bins slightly below zero
    return np.sqrt(np.maximum(squared, 0.0))


def spectral_difference(spectrum: SpectralFrame, history: SpectralHistory) -> float:
    return float(np.sum(np.abs(_magnitude_difference(spectrum, history))))


def spectral_difference_hwr(spectrum: SpectralFrame, history: SpectralHistory) -> float:
    diff = _magnitude_difference(spectrum, history)
    return float(np.sum(diff[diff > 0]))


def phase_deviation(spectrum: SpectralFrame, history: SpectralHistory) -> float:
    """Sum of |wrapped phase deviation| over bins above the magnitude gate."""
    dev = wrap_phase(_phase_deviation(spectrum, history))
    gate = spectrum.magnitude > PHASE_DEVIATION_MAGNITUDE_GATE
    return float(np.sum(np.abs(dev[gate])))


def complex_spectral_difference(spectrum: SpectralFrame, history: SpectralHistory) -> float:
    dev = _phase_deviation(spectrum, history)
    csd = _complex_distance(spectrum.magnitude, history.previous_magnitude, dev)
    history.previous_magnitude[:] = spectrum.magnitude
    return float(np.sum(csd))


def complex_spectral_difference_hwr(
    spectrum: SpectralFrame, history: SpectralHistory
) -> float:
    """Complex spectral difference over bins whose magnitude increased."""
    dev = _phase_deviation(spectrum, history)
    rising = (spectrum.magnitude - history.previous_magnitude) > 0
    csd = _complex_distance(spectrum.magnitude, history.previous_magnitude, dev)
    history.previous_magnitude[:] = spectrum.magnitude
    return float(np.sum(csd[rising]))


def high_frequency_content(spectrum: SpectralFrame, history: SpectralHistory) -> float:
    """Magnitude weighted by bin number (1-based)."""
    weights = _bin_weights(spectrum.magnitude.shape[0])
    history.previous_magnitude[:] = spectrum.magnitude
    return float(np.dot(spectrum.magnitude, weights))


def high_frequency_spectral_difference(
    spectrum: SpectralFrame, history: SpectralHistory
) -> float:
    diff = _magnitude_difference(spectrum, history)
    return float(np.dot(np.abs(diff), _bin_weights(diff.shape[0])))


def high_frequency_spectral_difference_hwr(
    spectrum: SpectralFrame, history: SpectralHistory
) -> float:
    diff = _magnitude_difference(spectrum, history)
    return float(np.dot(np.maximum(diff, 0.0), _bin_weights(diff.shape[0])))


TIME_DOMAIN_FUNCTIONS: Dict[DetectionFunctionType, TimeDomainFunction] = {
    DetectionFunctionType.ENERGY_ENVELOPE: energy_envelope,
    DetectionFunctionType.ENERGY_DIFFERENCE: energy_difference,
}

SPECTRAL_FUNCTIONS: Dict[DetectionFunctionType, SpectralFunction] = {
    DetectionFunctionType.SPECTRAL_DIFFERENCE: spectral_difference,
    DetectionFunctionType.SPECTRAL_DIFFERENCE_HWR: spectral_difference_hwr,
    DetectionFunctionType.PHASE_DEVIATION: phase_deviation,
    DetectionFunctionType.COMPLEX_SPECTRAL_DIFFERENCE: complex_spectral_difference,
    DetectionFunctionType.COMPLEX_SPECTRAL_DIFFERENCE_HWR: complex_spectral_difference_hwr,
    DetectionFunctionType.HIGH_FREQUENCY_CONTENT: high_frequency_content,
    DetectionFunctionType.HIGH_FREQUENCY_SPECTRAL_DIFFERENCE: high_frequency_spectral_difference,
    DetectionFunctionType.HIGH_FREQUENCY_SPECTRAL_DIFFERENCE_HWR: (
        high_frequency_spectral_difference_hwr
    ),
}
