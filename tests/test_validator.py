import unittest

from hexaword.core.constants import Direction
from hexaword.core.models import HexCoordinate, Placement, Word
from hexaword.engine.board import HexBoard
from hexaword.engine.validator import (BoardValidator, PuzzleStatistics, assess_quality,
                                       count_components)


def _board_with(*entries) -> HexBoard:
    board = HexBoard()
    for word_id, (text, q, r, direction) in enumerate(entries):
        board.place_word(Word(id=word_id, text=text), Placement(HexCoordinate(q, r), direction))
    return board


class BoardValidatorTests(unittest.TestCase):
    def test_valid_crossing(self) -> None:
        board = _board_with(
            ("CAT", 0, 0, Direction.HORIZONTAL),
            ("TOP", 2, 0, Direction.VERTICAL),
        )
        result = BoardValidator(4).validate(board)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_detects_touching_words(self) -> None:
        board = _board_with(
            ("AB", 0, 0, Direction.HORIZONTAL),
            ("CD", 0, 1, Direction.HORIZONTAL),
        )
        result = BoardValidator(4).validate(board)
        self.assertFalse(result.ok)
        self.assertIn("touch", result.messages[0])

    def test_relaxed_words_skip_adjacency(self) -> None:
        board = _board_with(
            ("AB", 0, 0, Direction.HORIZONTAL),
            ("CD", 0, 1, Direction.HORIZONTAL),
        )
        self.assertTrue(BoardValidator(4).validate(board, relaxed_word_ids=[1]).ok)

    def test_detects_out_of_bounds(self) -> None:
        board = _board_with(("ABC", 0, 0, Direction.HORIZONTAL))
        result = BoardValidator(1).validate(board)
        self.assertFalse(result.ok)
        self.assertIn("outside radius 1", result.messages[0])
        self.assertTrue(BoardValidator(1).validate(board, relaxed_word_ids=[0]).ok)


class StatisticsTests(unittest.TestCase):
    def test_counts(self) -> None:
        board = _board_with(
            ("CAT", 0, 0, Direction.HORIZONTAL),
            ("TOP", 2, 0, Direction.VERTICAL),
            ("DOG", -4, 4, Direction.HORIZONTAL),
        )
        stats = BoardValidator(5).statistics(board, total_words=4)
        self.assertEqual(stats.placed_words, 3)
        self.assertEqual(stats.cells, 8)
        self.assertEqual(stats.intersections, 1)
        self.assertEqual(stats.components, 2)
        self.assertFalse(stats.connected)
        self.assertAlmostEqual(stats.placement_ratio, 0.75)
        self.assertAlmostEqual(stats.density, 8 / 91)

    def test_count_components_empty(self) -> None:
        self.assertEqual(count_components(HexBoard()), 0)


class QualityTests(unittest.TestCase):
    def test_good_layout(self) -> None:
        stats = PuzzleStatistics(
            total_words=3, placed_words=3, cells=7, intersections=2, density=0.5, components=1
        )
        report = assess_quality(stats)
        self.assertTrue(report.is_valid)
        self.assertEqual(report.issues, [])
        self.assertEqual(report.score, 40 + 29 + 30)

    def test_weak_layout(self) -> None:
        stats = PuzzleStatistics(
            total_words=4, placed_words=1, cells=3, intersections=0, density=0.01, components=1
        )
        report = assess_quality(stats)
        self.assertFalse(report.is_valid)
        self.assertEqual(
            report.issues,
            [
                "Less than 50% of words are placed",
                "Too few word intersections",
                "Puzzle is too sparse",
            ],
        )

    def test_disconnected(self) -> None:
        stats = PuzzleStatistics(
            total_words=2, placed_words=2, cells=6, intersections=0, density=0.1, components=2
        )
        report = assess_quality(stats)
        self.assertIn("Too few word intersections", report.issues)
        self.assertIn("Not all words are connected", report.issues)
        self.assertNotIn("Puzzle is too sparse", report.issues)

    def test_single_intersection_is_too_few(self) -> None:
        stats = PuzzleStatistics(
            total_words=2, placed_words=2, cells=8, intersections=1, density=0.5, components=1
        )
        report = assess_quality(stats)
        self.assertEqual(report.issues, ["Too few word intersections"])

    def test_score_rounds_half_up(self) -> None:
        # 40 + 12.5 + 30
        stats = PuzzleStatistics(
            total_words=2, placed_words=2, cells=8, intersections=1, density=0.5, components=1
        )
        self.assertEqual(assess_quality(stats).score, 83)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
