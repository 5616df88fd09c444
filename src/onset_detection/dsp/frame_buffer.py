"""Sliding analysis frame and the rolling spectral history."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from onset_detection.errors import ConfigurationError, InputSizeError


class AnalysisFrame:
    """Fixed-size frame of the most recent `frame_size` samples, oldest first.

    Each push shifts the content left by `hop_size` and writes the new hop
    at the tail.
    """

    def __init__(self, frame_size: int, hop_size: int):
        if not 0 < hop_size < frame_size:
            raise ConfigurationError(
                f"Need 0 < hop_size < frame_size, got hop_size={hop_size}, "
                f"frame_size={frame_size}"
            )
        self.frame_size = frame_size
        self.hop_size = hop_size
        self._data = np.zeros(frame_size, dtype=np.float64)

    def push(self, chunk: np.ndarray) -> None:
        """Discard the oldest hop and append `chunk`.

        Raises:
            InputSizeError: chunk is not a 1-D buffer of exactly hop_size
                samples. The frame is left unchanged.
        """
        chunk = np.asarray(chunk, dtype=np.float64)
        if chunk.ndim != 1 or chunk.shape[0] != self.hop_size:
            raise InputSizeError(
                f"Expected {self.hop_size} mono samples, got shape {chunk.shape}"
            )
        keep = self.frame_size - self.hop_size
        self._data[:keep] = self._data[self.hop_size :]
        self._data[keep:] = chunk

    @property
    def data(self) -> np.ndarray:
        """Live view of the frame; do not modify."""
        return self._data

    def get_all(self) -> np.ndarray:
        """Copy of the frame in chronological order."""
        return self._data.copy()


@dataclass
class SpectralFrame:
    """Magnitude and phase of the current FFT frame, one value per bin."""

    magnitude: np.ndarray
    phase: np.ndarray


@dataclass
class SpectralHistory:
    """State carried between calls for the difference-based detection functions."""

    previous_magnitude: np.ndarray
    previous_phase: np.ndarray
    previous_previous_phase: np.ndarray
    previous_energy_sum: float = 0.0

    @classmethod
    def zeros(cls, frame_size: int) -> "SpectralHistory":
        return cls(
            previous_magnitude=np.zeros(frame_size, dtype=np.float64),
            previous_phase=np.zeros(frame_size, dtype=np.float64),
            previous_previous_phase=np.zeros(frame_size, dtype=np.float64),
        )

    def advance_phase(self, phase: np.ndarray) -> None:
        """Shift phase history by one frame."""
        self.previous_previous_phase[:] = self.previous_phase
        self.previous_phase[:] = phase
