"""Streaming onset detection pipeline."""

from onset_detection.pipeline.streaming_loop import HopBlocker, StreamingOnsetPipeline

__all__ = ["HopBlocker", "StreamingOnsetPipeline"]
