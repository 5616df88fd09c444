"""Audio sources that feed the engine: live microphone hops and WAV files."""

from __future__ import annotations

import queue
from typing import Iterator, Optional, Tuple

import numpy as np

try:
    import sounddevice as sd
except ImportError:
    sd = None  # type: ignore


class AudioCollector:
    """Records mono float32 audio in hop-sized blocks, or loads it from WAV."""

    def __init__(self, sample_rate: int = 44_100, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels

    def record_stream(
        self,
        hop_size: int,
        device: Optional[int] = None,
    ) -> Iterator[np.ndarray]:
        """Stream audio continuously, one hop at a time.

        Args:
            hop_size: Samples per yielded block.
            device: Input device index (None = default).

        Yields:
            Mono float32 blocks, shape (hop_size,).
        """
        if sd is None:
            raise ImportError("sounddevice is required for recording. pip install sounddevice")

        q: queue.Queue[np.ndarray] = queue.Queue()

        def callback(indata: np.ndarray, _frames: int, _time: object, _status: object) -> None:
            block = indata.copy()
            q.put(block.mean(axis=1) if block.ndim == 2 else block)

        with sd.InputStream(
            samplerate=self.sample_rate,
            channels=self.channels,
            dtype="float32",
            blocksize=hop_size,
            device=device,
            callback=callback,
        ):
            while True:
                yield q.get()

    @staticmethod
    def read_wav(filepath: str) -> Tuple[int, np.ndarray]:
        """Load a WAV file as mono float32 in [-1, 1].

        Integer PCM is scaled by its full-scale value; multichannel audio
        is averaged down to mono.

        Returns:
            (sample_rate, samples)
        """
        import scipy.io.wavfile as wavfile

        sr, audio = wavfile.read(filepath)
        if np.issubdtype(audio.dtype, np.integer):
            info = np.iinfo(audio.dtype)
            if info.min == 0:
                # unsigned 8-bit PCM is offset binary
                audio = (audio.astype(np.float32) - (info.max + 1) / 2) / ((info.max + 1) / 2)
            else:
                audio = audio.astype(np.float32) / float(-info.min)
        else:
            audio = audio.astype(np.float32)
        if audio.ndim == 2:
            audio = audio.mean(axis=1)
        return int(sr), audio
