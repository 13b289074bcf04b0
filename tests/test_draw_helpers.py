from __future__ import annotations

import math
import unittest
from unittest.mock import patch

from fairdraw.draw import (
    FixedRandomSource,
    RandomnessSummary,
    SystemRandomSource,
    derive_draw_id,
    durstenfeld_shuffle,
    summarize_random_values,
)
from fairdraw.draw import random_source as random_source_module
from fairdraw.errors import RandomSourceUnavailableError


class DrawIdTests(unittest.TestCase):
    def test_uuid_separators_are_skipped(self) -> None:
        self.assertEqual(derive_draw_id("3F2B-8C1A-0D4E-4A7B"), "3f2b8c1a")
        self.assertEqual(derive_draw_id("3f2b8c1a-0d4e-4a7b-9c6d-1e2f3a4b5c6d", length=4), "3f2b")

    def test_base36_tokens_are_accepted(self) -> None:
        self.assertEqual(derive_draw_id("zx9k-QW12-pp"), "zx9kqw12")

    def test_token_shorter_than_draw_id_raises(self) -> None:
        with self.assertRaises(ValueError):
            derive_draw_id("ab-cd-ef")
        with self.assertRaises(ValueError):
            derive_draw_id("@@@@-@@@@-@@@@")

    def test_system_unique_id_yields_hex_draw_id(self) -> None:
        draw_id = derive_draw_id(SystemRandomSource().unique_id())
        self.assertRegex(draw_id, r"^[0-9a-f]{8}$")


class RandomSourceTests(unittest.TestCase):
    def test_fixed_source_round_trips_words(self) -> None:
        source = FixedRandomSource([1, 2**32 - 1, 0])
        self.assertEqual(source.random_uint32(2), [1, 4294967295])
        self.assertEqual(source.remaining, 1)
        self.assertEqual(source.random_uint32(1), [0])
        self.assertEqual(source.requests, [2, 1])

    def test_fixed_source_rejects_out_of_range_values(self) -> None:
        with self.assertRaises(ValueError):
            FixedRandomSource([2**32])
        with self.assertRaises(ValueError):
            FixedRandomSource([-1])

    def test_system_source_values_are_32_bit(self) -> None:
        values = SystemRandomSource().random_uint32(64)
        self.assertEqual(len(values), 64)
        for value in values:
            self.assertGreaterEqual(value, 0)
            self.assertLess(value, 2**32)

    def test_system_source_unique_ids_differ(self) -> None:
        source = SystemRandomSource()
        self.assertNotEqual(source.unique_id(), source.unique_id())

    def test_missing_os_randomness_is_not_masked(self) -> None:
        with patch.object(
            random_source_module.secrets, "token_bytes", side_effect=NotImplementedError
        ):
            with self.assertRaises(RandomSourceUnavailableError):
                SystemRandomSource().random_uint32(4)


class ShuffleTests(unittest.TestCase):
    def test_value_count_must_match(self) -> None:
        with self.assertRaises(ValueError):
            durstenfeld_shuffle(["a", "b"], [1])

    def test_swaps_follow_bound_i_plus_one(self) -> None:
        shuffled, swaps = durstenfeld_shuffle(["a", "b", "c"], [99, 5, 7])
        # i=2: 7 % 3 == 1 ; i=1: 5 % 2 == 1
        self.assertEqual([(i, j) for i, _, j, _ in swaps], [(2, 1), (1, 1)])
        self.assertEqual(shuffled, ["a", "c", "b"])


class StatisticsTests(unittest.TestCase):
    def test_summary_of_constant_values(self) -> None:
        summary = summarize_random_values([0.5, 0.5])
        self.assertIsInstance(summary, RandomnessSummary)
        self.assertEqual(summary.count, 2)
        self.assertAlmostEqual(summary.mean, 0.5)
        self.assertAlmostEqual(summary.variance, 0.0)
        self.assertAlmostEqual(summary.entropy, 1.0)

    def test_zero_values_use_floor(self) -> None:
        summary = summarize_random_values([0.0, 0.25])
        self.assertAlmostEqual(summary.entropy, -0.25 * math.log2(0.25))
        self.assertAlmostEqual(summary.mean, 0.125)
        self.assertAlmostEqual(summary.variance, 0.015625)

    def test_empty_sequence(self) -> None:
        summary = summarize_random_values([])
        self.assertEqual(summary.to_json(), {"count": 0, "entropy": 0.0, "mean": 0.0, "variance": 0.0})


if __name__ == "__main__":
    unittest.main()
