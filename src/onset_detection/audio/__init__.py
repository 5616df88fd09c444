"""Audio input for the onset detection pipeline."""

from onset_detection.audio.collector import AudioCollector

__all__ = ["AudioCollector"]
