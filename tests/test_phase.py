"""Unit tests for phase wrapping."""

from __future__ import annotations

import math
import unittest

import numpy as np

from onset_detection.dsp.phase import princarg, wrap_phase


class TestPrincarg(unittest.TestCase):
    """Tests for princarg / wrap_phase."""

    def test_in_range_unchanged(self) -> None:
        for value in (0.0, 0.5, -0.5, 3.0, -3.0):
            self.assertEqual(princarg(value), value)

    def test_pi_boundaries(self) -> None:
        """Range is (-pi, pi]: pi stays, -pi maps to pi."""
        self.assertEqual(princarg(math.pi), math.pi)
        self.assertEqual(princarg(-math.pi), math.pi)

    def test_multiple_turns(self) -> None:
        self.assertAlmostEqual(princarg(0.5 + 6 * math.pi), 0.5)
        self.assertAlmostEqual(princarg(-7.0), -7.0 + 2 * math.pi)
        self.assertAlmostEqual(princarg(10.0), 10.0 - 4 * math.pi)

    def test_vectorised_matches_scalar(self) -> None:
        rng = np.random.default_rng(0)
        values = rng.uniform(-20.0, 20.0, size=500)
        wrapped = wrap_phase(values)
        expected = np.array([princarg(float(v)) for v in values])
        np.testing.assert_array_equal(wrapped, expected)
        self.assertTrue(np.all(wrapped > -np.pi))
        self.assertTrue(np.all(wrapped <= np.pi))

    def test_vectorised_does_not_modify_input(self) -> None:
        values = np.array([4.0, -4.0, 0.0])
        wrap_phase(values)
        np.testing.assert_array_equal(values, [4.0, -4.0, 0.0])


def run_toy_example() -> None:
    """Wrap a few phases that have drifted several turns."""
    print("=== Toy example: phase wrapping ===\n")
    for value in (0.5, math.pi, -math.pi, 7.0, -7.0, 20.0):
        print(f"  {value:8.4f} -> {princarg(value):8.4f}")
    print("\nDone.")


if __name__ == "__main__":
    run_toy_example()
    print("\n--- Running unit tests ---")
    unittest.main(argv=[""], exit=False, verbosity=2)
