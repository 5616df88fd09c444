"""Selectors for the detection function variant and the analysis window."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Union

from onset_detection.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_").replace(" ", "_")


class DetectionFunctionType(str, Enum):
    """The ten onset detection function variants."""

    ENERGY_ENVELOPE = "energy_envelope"
    ENERGY_DIFFERENCE = "energy_difference"
    SPECTRAL_DIFFERENCE = "spectral_difference"
    SPECTRAL_DIFFERENCE_HWR = "spectral_difference_hwr"
    PHASE_DEVIATION = "phase_deviation"
    COMPLEX_SPECTRAL_DIFFERENCE = "complex_spectral_difference"
    COMPLEX_SPECTRAL_DIFFERENCE_HWR = "complex_spectral_difference_hwr"
    HIGH_FREQUENCY_CONTENT = "high_frequency_content"
    HIGH_FREQUENCY_SPECTRAL_DIFFERENCE = "high_frequency_spectral_difference"
    HIGH_FREQUENCY_SPECTRAL_DIFFERENCE_HWR = "high_frequency_spectral_difference_hwr"

    @property
    def is_time_domain(self) -> bool:
        """True for variants computed on the raw frame, without an FFT."""
        return self in (
            DetectionFunctionType.ENERGY_ENVELOPE,
            DetectionFunctionType.ENERGY_DIFFERENCE,
        )

    @classmethod
    def parse(cls, value: Union["DetectionFunctionType", str]) -> "DetectionFunctionType":
        """Resolve a member, member name or value (case-insensitive).

        Raises:
            ConfigurationError: if the name matches no variant.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _normalize(value)
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise ConfigurationError(
            f"Unknown detection function {value!r}, "
            f"valid options: {[m.value for m in cls]}"
        )


class WindowType(str, Enum):
    """Analysis window shapes."""

    RECTANGULAR = "rectangular"
    HANNING = "hanning"
    HAMMING = "hamming"
    BLACKMAN = "blackman"
    TUKEY = "tukey"

    @classmethod
    def parse(cls, value: Union["WindowType", str, None]) -> "WindowType":
        """Resolve a window name; unknown shapes fall back to HANNING."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _normalize(value)
            if key in ("hann", "rect"):
                key = {"hann": "hanning", "rect": "rectangular"}[key]
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        logger.warning("Unknown window type %r, falling back to hanning", value)
        return cls.HANNING
