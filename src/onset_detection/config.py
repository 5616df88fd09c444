"""Engine configuration.

Defaults:
- Hop: 512 samples, frame: 1024 samples (50% overlap)
- Detection function: complex spectral difference, half-wave rectified
- Window: Hanning
"""

from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any

from onset_detection.errors import ConfigurationError
from onset_detection.types import DetectionFunctionType, WindowType


@dataclass(frozen=True)
class DetectionConfig:
    """Hop/frame sizes plus the selected variant and window shape.

    Attributes:
        hop_size: New samples supplied per compute_sample call.
        frame_size: Analysis frame length in samples. Must exceed hop_size
            so consecutive frames overlap, and must be even so the
            magnitude spectrum mirrors around an exact half-point.
        detection_function: Which onset detection function to compute.
        window: Tapering window applied before the FFT.
    """

    hop_size: int = 512
    frame_size: int = 1024
    detection_function: DetectionFunctionType = (
        DetectionFunctionType.COMPLEX_SPECTRAL_DIFFERENCE_HWR
    )
    window: WindowType = WindowType.HANNING

    def __post_init__(self) -> None:
        """Validate sizes and coerce string selectors to their enums."""
        for name in ("hop_size", "frame_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
            # numpy integers are stored as plain int
            object.__setattr__(self, name, int(value))
        if self.frame_size <= self.hop_size:
            raise ConfigurationError(
                f"frame_size ({self.frame_size}) must be greater than "
                f"hop_size ({self.hop_size})"
            )
        if self.frame_size % 2 != 0:
            raise ConfigurationError(f"frame_size must be even, got {self.frame_size}")
        # frozen: bypass __setattr__ to store the coerced enums
        object.__setattr__(
            self, "detection_function", DetectionFunctionType.parse(self.detection_function)
        )
        object.__setattr__(self, "window", WindowType.parse(self.window))

    @property
    def overlap(self) -> int:
        """Samples carried over from the previous frame."""
        return self.frame_size - self.hop_size

    def replace(self, **changes: Any) -> "DetectionConfig":
        """Validated copy with the given fields changed; None values are ignored."""
        return dataclasses.replace(
            self, **{k: v for k, v in changes.items() if v is not None}
        )


DEFAULT_CONFIG = DetectionConfig()
