import unittest

from hexaword.core.constants import Direction
from hexaword.core.exceptions import PlacementInvariantError
from hexaword.core.models import HexCoordinate, Placement, Word
from hexaword.engine.board import HexBoard
from hexaword.utils.pretty import format_board


def _place(board: HexBoard, word_id: int, text: str, q: int, r: int, direction: Direction) -> Word:
    word = Word(id=word_id, text=text)
    board.place_word(word, Placement(HexCoordinate(q, r), direction))
    return word


class HexBoardTests(unittest.TestCase):
    def test_place_word_writes_letters(self) -> None:
        board = HexBoard()
        _place(board, 0, "CAT", 0, 0, Direction.HORIZONTAL)
        self.assertEqual(len(board), 3)
        self.assertEqual(board.letter_at(HexCoordinate(2, 0)), "T")
        self.assertIsNone(board.letter_at(HexCoordinate(0, 1)))
        self.assertEqual(board.radius(), 2)

    def test_crossing_shares_cell(self) -> None:
        board = HexBoard()
        _place(board, 0, "CAT", 0, 0, Direction.HORIZONTAL)
        _place(board, 1, "TOP", 2, 0, Direction.VERTICAL)
        cell = board.cell(HexCoordinate(2, 0))
        self.assertEqual(cell.word_ids, {0, 1})
        self.assertTrue(cell.is_intersection)
        self.assertEqual(len(board), 5)
        self.assertEqual([w.text for w in board.words()], ["CAT", "TOP"])

    def test_letter_conflict_raises_and_leaves_board_unchanged(self) -> None:
        board = HexBoard()
        _place(board, 0, "CAT", 0, 0, Direction.HORIZONTAL)
        with self.assertRaises(PlacementInvariantError):
            _place(board, 1, "DOG", 2, 0, Direction.VERTICAL)
        self.assertEqual(len(board), 3)
        self.assertEqual(board.word_count, 1)

    def test_invariant_error_is_assertion(self) -> None:
        board = HexBoard()
        word = _place(board, 0, "CAT", 0, 0, Direction.HORIZONTAL)
        with self.assertRaises(AssertionError):
            board.place_word(word, Placement(HexCoordinate(5, 5), Direction.VERTICAL))

    def test_has_word_along(self) -> None:
        board = HexBoard()
        _place(board, 0, "CAT", 0, 0, Direction.HORIZONTAL)
        _place(board, 1, "TOP", 2, 0, Direction.VERTICAL)
        self.assertTrue(board.has_word_along(HexCoordinate(2, 0), Direction.HORIZONTAL))
        self.assertTrue(board.has_word_along(HexCoordinate(2, 0), Direction.VERTICAL))
        self.assertFalse(board.has_word_along(HexCoordinate(2, 0), Direction.DIAGONAL))
        self.assertFalse(board.has_word_along(HexCoordinate(9, 9), Direction.HORIZONTAL))

    def test_to_jsonable(self) -> None:
        board = HexBoard()
        _place(board, 3, "CAT", 0, 0, Direction.HORIZONTAL)
        _place(board, 1, "TOP", 2, 0, Direction.VERTICAL)
        data = board.to_jsonable()
        self.assertEqual(data["2,0"], {"letter": "T", "word_ids": [1, 3]})
        self.assertEqual(data["2,2"], {"letter": "P", "word_ids": [1]})
        self.assertEqual(len(data), 5)


class FormatBoardTests(unittest.TestCase):
    def test_offset_rows(self) -> None:
        board = HexBoard()
        _place(board, 0, "AB", 0, 0, Direction.HORIZONTAL)
        self.assertEqual(format_board(board, 1), " . .\n. A B\n . .")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
