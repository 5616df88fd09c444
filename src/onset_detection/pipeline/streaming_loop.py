"""Streaming loop: audio chunks -> hop re-blocking -> onset detection function -> callback.

Chunks may have any length; they are cut into exact hop-size buffers so
the engine always receives `hop_size` new samples per call.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional

import numpy as np

from onset_detection.audio import AudioCollector
from onset_detection.config import DEFAULT_CONFIG, DetectionConfig
from onset_detection.detection import OnsetDetectionFunction
from onset_detection.errors import InputSizeError

SampleCallback = Callable[[float], None]


class HopBlocker:
    """Accumulates arbitrary-size chunks and releases exact hop-size blocks.

    Samples stay pending until taken with next_hop(), so a consumer that
    stops early (or fails) leaves the remainder for the next call.
    """

    def __init__(self, hop_size: int):
        self.hop_size = hop_size
        self._pending = np.zeros(0, dtype=np.float64)

    def push(self, chunk: np.ndarray) -> None:
        """Append a mono chunk to the pending samples."""
        chunk = np.asarray(chunk, dtype=np.float64)
        if chunk.ndim != 1:
            raise InputSizeError(f"Expected a mono 1-D chunk, got shape {chunk.shape}")
        self._pending = np.concatenate([self._pending, chunk])

    def next_hop(self) -> Optional[np.ndarray]:
        """Remove and return the oldest complete hop, or None if there is none."""
        if self._pending.shape[0] < self.hop_size:
            return None
        hop = self._pending[: self.hop_size].copy()
        self._pending = self._pending[self.hop_size :]
        return hop

    @property
    def pending(self) -> int:
        """Samples waiting to be released."""
        return int(self._pending.shape[0])

    def clear(self) -> None:
        self._pending = np.zeros(0, dtype=np.float64)


class StreamingOnsetPipeline:
    """Feeds an audio stream through an OnsetDetectionFunction.

    Interface:
      pipeline = StreamingOnsetPipeline(
          config=DetectionConfig(hop_size=512, frame_size=1024),
          on_sample=print,
      )
      pipeline.run()  # blocks; use stop() from another thread or pass audio_iterator
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        engine: Optional[OnsetDetectionFunction] = None,
        on_sample: Optional[SampleCallback] = None,
        audio_collector: Optional[AudioCollector] = None,
    ):
        if engine is not None:
            self.engine = engine
        else:
            self.engine = OnsetDetectionFunction.from_config(config or DEFAULT_CONFIG)
        self.on_sample = on_sample or (lambda v: None)
        self.audio_collector = audio_collector or AudioCollector()
        self._blocker = HopBlocker(self.engine.hop_size)
        self._stopped = False

    def stop(self) -> None:
        """Signal the run loop to exit (checked each chunk)."""
        self._stopped = True

    @property
    def pending(self) -> int:
        """Samples received but not yet turned into a detection function value."""
        return self._blocker.pending

    def _drain(self, limit: Optional[int] = None) -> list[float]:
        """Process pending hops, at most `limit` of them."""
        values = []
        while limit is None or len(values) < limit:
            hop = self._blocker.next_hop()
            if hop is None:
                break
            value = self.engine.compute_sample(hop)
            self.on_sample(value)
            values.append(value)
        return values

    def run(
        self,
        audio_iterator: Optional[Iterator[np.ndarray]] = None,
        device: Optional[int] = None,
    ) -> None:
        """Run until stopped or the iterator is exhausted.

        Args:
            audio_iterator: Source of audio chunks. If None, use the
                microphone via audio_collector.record_stream(hop_size).
            device: Microphone device index (ignored with audio_iterator).
        """
        self._stopped = False
        if audio_iterator is None:
            audio_iterator = self.audio_collector.record_stream(
                self.engine.hop_size, device=device
            )
        for chunk in audio_iterator:
            if self._stopped:
                break
            self._blocker.push(chunk)
            self._drain()

    def run_for_n_samples(
        self,
        n: int,
        audio_iterator: Iterator[np.ndarray],
    ) -> list[float]:
        """Run until n detection function values are produced; used for tests.

        Hops beyond the n-th are left pending and the callback is not fired
        for them.
        """
        self._stopped = False
        values: list[float] = self._drain(limit=max(n, 0))
        if len(values) >= n:
            return values
        for chunk in audio_iterator:
            self._blocker.push(chunk)
            values.extend(self._drain(limit=n - len(values)))
            if len(values) >= n:
                break
        return values
