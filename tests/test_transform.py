"""Unit tests for the FFT adapter."""

from __future__ import annotations

import unittest

import numpy as np

from onset_detection.dsp.transform import FFTTransform
from onset_detection.errors import InputSizeError, TransformResourceError


class TestFFTTransform(unittest.TestCase):
    """Tests for FFTTransform."""

    def test_matches_numpy_fft(self) -> None:
        rng = np.random.default_rng(1)
        frame = rng.standard_normal(64)
        fft = FFTTransform(64)
        real, imag = fft.transform(frame)
        expected = np.fft.fft(frame)
        np.testing.assert_allclose(real, expected.real, atol=1e-10)
        np.testing.assert_allclose(imag, expected.imag, atol=1e-10)

    def test_repeated_calls_are_independent(self) -> None:
        """The internal buffer is reused; results of earlier calls are unaffected."""
        fft = FFTTransform(8)
        first_real, _ = fft.transform(np.ones(8))
        fft.transform(np.arange(8, dtype=np.float64))
        self.assertAlmostEqual(first_real[0], 8.0)

    def test_unprepared_use(self) -> None:
        fft = FFTTransform()
        self.assertFalse(fft.is_prepared)
        with self.assertRaises(TransformResourceError):
            fft.transform(np.zeros(4))

    def test_prepare_twice_requires_release(self) -> None:
        fft = FFTTransform(16)
        with self.assertRaises(TransformResourceError):
            fft.prepare(32)
        fft.release()
        fft.prepare(32)
        self.assertEqual(fft.length, 32)
        real, _ = fft.transform(np.ones(32))
        self.assertAlmostEqual(real[0], 32.0)

    def test_release_idempotent(self) -> None:
        fft = FFTTransform(16)
        fft.release()
        fft.release()
        self.assertFalse(fft.is_prepared)
        self.assertEqual(fft.length, 0)

    def test_wrong_length(self) -> None:
        fft = FFTTransform(16)
        with self.assertRaises(InputSizeError):
            fft.transform(np.zeros(15))

    def test_invalid_length(self) -> None:
        with self.assertRaises(TransformResourceError):
            FFTTransform(0)


def run_toy_example() -> None:
    """FFT of a single cosine: energy lands in bins k and N - k."""
    print("=== Toy example: FFT adapter (length 16) ===\n")
    n = np.arange(16)
    fft = FFTTransform(16)
    real, imag = fft.transform(np.cos(2.0 * np.pi * 3 * n / 16))
    for k, magnitude in enumerate(np.hypot(real, imag)):
        print(f"  bin {k:2d}: {magnitude:6.3f}")
    fft.release()
    print("\nDone.")


if __name__ == "__main__":
    run_toy_example()
    print("\n--- Running unit tests ---")
    unittest.main(argv=[""], exit=False, verbosity=2)
