"""CLI: print onset detection function values for a WAV file or live input."""

import argparse
import logging
import sys
from pathlib import Path

from onset_detection.audio import AudioCollector
from onset_detection.config import DetectionConfig
from onset_detection.detection import compute_detection_function
from onset_detection.errors import OnsetDetectionError
from onset_detection.pipeline import StreamingOnsetPipeline
from onset_detection.types import DetectionFunctionType, WindowType


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute an onset detection function, one value per hop"
    )
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Input WAV file (omit with --live)",
    )
    parser.add_argument("--hop-size", type=int, default=512, help="Hop size in samples (default: 512)")
    parser.add_argument("--frame-size", type=int, default=1024, help="Frame size in samples (default: 1024)")
    parser.add_argument(
        "--type",
        default=DetectionFunctionType.COMPLEX_SPECTRAL_DIFFERENCE_HWR.value,
        choices=[t.value for t in DetectionFunctionType],
        help="Detection function (default: complex_spectral_difference_hwr)",
    )
    parser.add_argument(
        "--window",
        default=WindowType.HANNING.value,
        choices=[w.value for w in WindowType],
        help="Analysis window (default: hanning)",
    )
    parser.add_argument(
        "--live",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Read from the microphone for this many seconds instead of a file",
    )
    parser.add_argument("--sample-rate", type=int, default=44_100, help="Live sample rate (default: 44100)")
    parser.add_argument(
        "--device",
        type=int,
        default=None,
        help="Input device index (list with --list-devices)",
    )
    parser.add_argument(
        "--list-devices",
        action="store_true",
        help="List available audio input devices and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_devices:
        try:
            import sounddevice as sd
            print(sd.query_devices())
        except ImportError:
            print("sounddevice not installed: pip install sounddevice", file=sys.stderr)
            sys.exit(1)
        return

    try:
        config = DetectionConfig(
            hop_size=args.hop_size,
            frame_size=args.frame_size,
            detection_function=args.type,
            window=args.window,
        )
    except OnsetDetectionError as exc:
        parser.error(str(exc))

    if args.live is not None:
        _run_live(config, args.live, args.sample_rate, args.device)
        return

    if args.input is None:
        parser.error("an input WAV file is required unless --live is given")

    sr, audio = AudioCollector.read_wav(str(args.input))
    values = compute_detection_function(audio, config)
    for i, value in enumerate(values):
        print(f"{i * config.hop_size / sr:.6f}\t{value:.6f}")


def _run_live(config: DetectionConfig, seconds: float, sample_rate: int, device) -> None:
    n_hops = max(1, int(seconds * sample_rate / config.hop_size))
    collector = AudioCollector(sample_rate=sample_rate)
    count = 0

    def emit(value: float) -> None:
        nonlocal count
        print(f"{count * config.hop_size / sample_rate:.6f}\t{value:.6f}", flush=True)
        count += 1

    pipeline = StreamingOnsetPipeline(config=config, on_sample=emit, audio_collector=collector)
    stream = collector.record_stream(config.hop_size, device=device)
    print(f"Listening for {seconds}s (mono {sample_rate} Hz)...", file=sys.stderr)
    try:
        pipeline.run_for_n_samples(n_hops, stream)
    except KeyboardInterrupt:
        pass
    finally:
        stream.close()
        pipeline.engine.close()


if __name__ == "__main__":
    main()
