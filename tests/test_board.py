import numpy as np
import pytest

from stakefour.errors import CellNotEmpty
from stakefour.game.board import Board
from stakefour.utils import COLS, EMPTY, ROWS

LINES = {
    "horizontal": [(5, 0), (5, 1), (5, 2), (5, 3)],
    "vertical": [(5, 0), (4, 0), (3, 0), (2, 0)],
    "diagonal_down": [(2, 0), (3, 1), (4, 2), (5, 3)],
    "diagonal_up": [(5, 0), (4, 1), (3, 2), (2, 3)],
}


def _board_with(cells, player=0) -> Board:
    board = Board()
    for row, col in cells:
        board.grid[row, col] = player
    return board


def test_new_board_is_empty() -> None:
    board = Board()

    assert board.move_count() == 0
    assert not board.is_full()
    assert board.get_valid_moves() == list(range(COLS))
    assert board.cell(0, 0) is None


def test_piece_lands_in_lowest_empty_row() -> None:
    board = Board()
    board.place(5, 2, 0)
    board.place(4, 2, 1)

    assert board.landing_row(2) == 3
    assert board.landing_row(3) == ROWS - 1


def test_full_column_has_no_landing_row() -> None:
    board = Board()
    for row in range(ROWS):
        board.place(row, 0, row % 2)

    assert board.landing_row(0) is None
    assert not board.is_valid_move(0)
    assert 0 not in board.get_valid_moves()


@pytest.mark.parametrize("column", [-1, COLS, 100])
def test_out_of_range_column_is_not_a_valid_move(column: int) -> None:
    assert not Board().is_valid_move(column)


def test_place_never_overwrites_a_cell() -> None:
    board = Board()
    board.place(5, 0, 0)

    with pytest.raises(CellNotEmpty):
        board.place(5, 0, 1)

    assert board.cell(5, 0) == 0


def test_cell_off_the_board_raises() -> None:
    with pytest.raises(IndexError):
        Board().cell(ROWS, 0)


def test_board_rejects_wrong_shape() -> None:
    with pytest.raises(ValueError):
        Board(np.zeros((7, 6), dtype=np.int8))


@pytest.mark.parametrize("name", sorted(LINES))
def test_four_in_a_row_wins_from_any_cell_of_the_line(name: str) -> None:
    cells = LINES[name]
    board = _board_with(cells)

    for row, col in cells:
        assert board.check_win(row, col), f"{name} not detected from ({row}, {col})"


@pytest.mark.parametrize("replacement", [1, EMPTY])
@pytest.mark.parametrize("name", sorted(LINES))
def test_broken_line_does_not_win(name: str, replacement: int) -> None:
    cells = LINES[name]

    for broken in range(len(cells)):
        board = _board_with(cells)
        board.grid[cells[broken]] = replacement
        for i, (row, col) in enumerate(cells):
            if i != broken:
                assert not board.check_win(row, col)


def test_win_only_counts_the_movers_pieces() -> None:
    board = _board_with(LINES["horizontal"][:3], player=0)
    board.place(5, 3, 1)

    assert not board.check_win(5, 3)
    assert not board.check_win(5, 2)


def test_check_win_on_empty_cell_is_false() -> None:
    assert not Board().check_win(5, 0)


def test_winning_line_through_middle_of_diagonal() -> None:
    cells = LINES["diagonal_up"]
    board = _board_with(cells)

    assert sorted(board.get_winning_line(4, 1)) == sorted(cells)
    assert board.get_winning_line(0, 6) == []


def test_full_board_without_line_has_no_win(draw_grid: np.ndarray) -> None:
    board = Board(draw_grid)

    assert board.is_full()
    assert board.get_valid_moves() == []
    for row in range(ROWS):
        for col in range(COLS):
            assert not board.check_win(row, col), f"unexpected win at ({row}, {col})"


def test_list_conversion_keeps_cells() -> None:
    board = Board()
    board.place(5, 3, 0)
    board.place(5, 4, 1)

    rows = board.to_list()
    assert rows[5][3] == 0 and rows[5][4] == 1 and rows[0][0] is None
    assert Board.from_list(rows) == board


def test_copy_is_independent() -> None:
    board = Board()
    clone = board.copy()
    clone.place(5, 0, 0)

    assert board.cell(5, 0) is None


def test_render() -> None:
    board = Board()
    board.place(5, 0, 0)
    board.place(5, 1, 1)

    lines = board.render().split("\n")

    assert len(lines) == ROWS + 3
    assert lines[ROWS] == "|X O" + " " * 10 + "|"
    assert lines[-1] == "|0 1 2 3 4 5 6|"


def test_winning_line_agrees_with_check_win_on_any_board() -> None:
    # row 5 holds a line at columns 0-3 that does not pass through (5, 6)
    board = _board_with(LINES["horizontal"] + [(5, 6)])

    assert board.check_win(5, 6)
    assert board.get_winning_line(5, 6) == LINES["horizontal"]


def test_winning_line_for_every_orientation() -> None:
    for name, cells in LINES.items():
        board = _board_with(cells)
        for row, col in cells:
            assert sorted(board.get_winning_line(row, col)) == sorted(cells), name
