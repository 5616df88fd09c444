"""Run every onset detection function over the same audio and report its peaks.

Usage:
  python compare_detection_functions.py                 # synthetic click/tone signal
  python compare_detection_functions.py --file drums.wav
  python compare_detection_functions.py --file drums.wav --hop 256 --frame 1024 --window hamming
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np

from onset_detection import DetectionConfig, DetectionFunctionType, WindowType
from onset_detection.audio import AudioCollector
from onset_detection.pipeline import StreamingOnsetPipeline

SAMPLE_RATE = 44_100


def make_test_signal(seconds: float = 3.0, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Quiet 440 Hz tone with a decaying 1 kHz note every half second."""
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    signal = 0.05 * np.sin(2 * np.pi * 440 * t)
    for start in np.arange(0.25, seconds, 0.5):
        idx = int(start * sample_rate)
        env = np.exp(-np.arange(len(t) - idx) / (0.05 * sample_rate))
        signal[idx:] += 0.5 * env * np.sin(2 * np.pi * 1000 * t[: len(t) - idx])
    return signal.astype(np.float32)


def load_chunks(signal: np.ndarray, chunk_samples: int = 1000):
    """Yield the signal in chunks that do not line up with the hop size."""
    for i in range(0, len(signal), chunk_samples):
        yield signal[i : i + chunk_samples]


def main(wav_path=None, hop=512, frame=1024, window="hanning"):
    if wav_path is not None:
        sample_rate, signal = AudioCollector.read_wav(str(wav_path))
        print(f"Loaded {wav_path}: {len(signal) / sample_rate:.2f}s at {sample_rate} Hz")
    else:
        sample_rate, signal = SAMPLE_RATE, make_test_signal()
        print("Using synthetic signal: notes every 0.5s starting at 0.25s")

    for kind in DetectionFunctionType:
        config = DetectionConfig(hop_size=hop, frame_size=frame, detection_function=kind, window=window)
        pipeline = StreamingOnsetPipeline(config=config)
        values = []
        pipeline.on_sample = values.append
        pipeline.run(load_chunks(signal))
        pipeline.engine.close()

        odf = np.asarray(values)
        if odf.size == 0:
            print(f"{kind.value:40} (signal shorter than one hop)")
            continue
        # Crude local-maximum picking, only for display
        threshold = odf.mean() + odf.std()
        peaks = [
            i for i in range(1, len(odf) - 1)
            if odf[i] > threshold and odf[i] >= odf[i - 1] and odf[i] > odf[i + 1]
        ]
        times = ", ".join(f"{p * hop / sample_rate:.2f}" for p in peaks[:8])
        print(f"{kind.value:40} max={odf.max():10.2f}  peaks(s): {times}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare onset detection functions")
    parser.add_argument("--file", type=Path, default=None, help="WAV file (default: synthetic)")
    parser.add_argument("--hop", type=int, default=512, help="Hop size in samples")
    parser.add_argument("--frame", type=int, default=1024, help="Frame size in samples")
    parser.add_argument(
        "--window",
        default="hanning",
        choices=[w.value for w in WindowType],
        help="Analysis window",
    )
    args = parser.parse_args()
    main(wav_path=args.file, hop=args.hop, frame=args.frame, window=args.window)
