import io
import json
import unittest

from hexaword import GeneratorConfig, HexawordGenerator, generate
from hexaword.core.constants import PlacementStrategy
from hexaword.utils.pretty import print_generation_stats


class GeneratorConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        self.assertEqual(config.grid_radius, 10)
        self.assertEqual(config.seed, "default")
        self.assertIs(config.strategy, PlacementStrategy.FRONTIER)

    def test_strategy_from_string(self) -> None:
        self.assertIs(GeneratorConfig(strategy="auto").strategy, PlacementStrategy.AUTO)
        with self.assertRaises(ValueError):
            GeneratorConfig(strategy="random")

    def test_rejects_bad_values(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(grid_radius=0)
        with self.assertRaises(ValueError):
            GeneratorConfig(retry_limit=0)

    def test_attempt_seed(self) -> None:
        config = GeneratorConfig(seed="abc")
        self.assertEqual(config.attempt_seed(1), "abc")
        self.assertEqual(config.attempt_seed(3), "abc_3")


class GenerateTests(unittest.TestCase):
    def test_crossing_chain_succeeds(self) -> None:
        result = generate(["cat", "top", "pin"], grid_radius=10, seed="chain")
        self.assertTrue(result.success)
        self.assertEqual(result.validation_messages, [])
        self.assertEqual(result.statistics.placed_words, 3)
        self.assertEqual(result.statistics.intersections, 2)
        self.assertTrue(result.statistics.connected)

    def test_same_inputs_same_output(self) -> None:
        words = ["HELLO", "WORLD", "HOLD", "LOW"]
        first = generate(words, grid_radius=6, seed="test-seed-123")
        second = generate(words, grid_radius=6, seed="test-seed-123")
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_different_seeds_are_each_deterministic(self) -> None:
        words = ["PYTHON", "TYPE", "HONEY", "PHONE", "TOPAZ", "NOTE"]
        for seed in ("one", "two"):
            self.assertEqual(
                generate(words, seed=seed).to_jsonable(),
                generate(words, seed=seed).to_jsonable(),
            )

    def test_empty_word_list(self) -> None:
        result = generate([])
        self.assertFalse(result.success)
        self.assertEqual(result.placed_words, [])
        self.assertEqual(len(result.board), 0)

    def test_word_without_letters_is_reported(self) -> None:
        result = generate(["CAT", "TOP", "PIN", "42"], seed="chain")
        self.assertFalse(result.success)
        self.assertEqual([w.source for w in result.unplaced_words], ["42"])
        self.assertEqual(len(result.placed_words), 3)

    def test_retries_keep_first_best_result(self) -> None:
        config = GeneratorConfig(grid_radius=2, seed="s", retry_limit=3)
        result = HexawordGenerator(config).generate(["ABCDEFGHIJKLMNOP"])
        self.assertFalse(result.success)
        self.assertEqual(result.seed, "s")

    def test_exact_strategy(self) -> None:
        config = GeneratorConfig(grid_radius=5, seed="exact", strategy="exact")
        result = HexawordGenerator(config).generate(["CAT", "TOP", "PIN"])
        self.assertTrue(result.success)
        self.assertEqual(result.validation_messages, [])
        self.assertEqual(result.statistics.components, 1)
        self.assertIs(result.strategy, PlacementStrategy.EXACT)

    def test_skipped_exact_search_reports_frontier(self) -> None:
        config = GeneratorConfig(
            grid_radius=5, seed="exact", strategy="exact", exact_word_limit=2
        )
        result = HexawordGenerator(config).generate(["CAT", "TOP", "PIN"])
        self.assertTrue(result.success)
        self.assertIs(result.strategy, PlacementStrategy.FRONTIER)
        self.assertEqual(result.to_jsonable()["strategy"], "frontier")

    def test_failed_exact_search_reports_frontier(self) -> None:
        config = GeneratorConfig(grid_radius=5, seed="exact", strategy="exact")
        result = HexawordGenerator(config).generate(["AB", "CD", "EF"])
        self.assertIs(result.strategy, PlacementStrategy.FRONTIER)
        self.assertEqual(len(result.placed_words), 3)


class SerializationTests(unittest.TestCase):
    def test_json_shape(self) -> None:
        result = generate(["CAT", "TOP", "PIN"], seed="json")
        data = json.loads(json.dumps(result.to_jsonable()))
        self.assertEqual(data["seed"], "json")
        self.assertEqual(data["grid_radius"], 10)
        self.assertEqual(data["strategy"], "frontier")
        self.assertTrue(data["success"])
        self.assertEqual(len(data["puzzle_id"]), 36)
        self.assertEqual(
            sorted(entry["word"] for entry in data["placed_words"]), ["CAT", "PIN", "TOP"]
        )
        for entry in data["placed_words"]:
            self.assertEqual(set(entry), {"id", "word", "q", "r", "direction"})
            self.assertIn(entry["direction"], (0, 1, 2))
        for key, cell in data["board"].items():
            q, r = (int(part) for part in key.split(","))
            self.assertLessEqual(max(abs(q), abs(r), abs(q + r)), 10)
            self.assertEqual(len(cell["letter"]), 1)
        self.assertEqual(data["statistics"]["components"], 1)

    def test_stats_report(self) -> None:
        result = generate(["CAT", "TOP", "PIN"], grid_radius=4, seed="report")
        stream = io.StringIO()
        print_generation_stats(result, stream=stream)
        output = stream.getvalue()
        self.assertIn("--- Board ---", output)
        self.assertIn("Placed:        3/3", output)
        self.assertIn("Seed: report", output)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
