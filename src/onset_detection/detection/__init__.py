"""Onset detection function engine and its variants."""

from onset_detection.detection.engine import OnsetDetectionFunction, compute_detection_function

__all__ = ["OnsetDetectionFunction", "compute_detection_function"]
