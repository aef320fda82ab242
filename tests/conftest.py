import numpy as np
import pytest

from stakefour.data import InMemoryGameStore, InMemoryLedger
from stakefour.game import rules
from stakefour.game.board import Board
from stakefour.game.manager import GameManager
from stakefour.game.record import GameRecord
from stakefour.utils import EMPTY, Phase


@pytest.fixture()
def ledger() -> InMemoryLedger:
    ledger = InMemoryLedger()
    ledger.deposit("alice", 1000)
    ledger.deposit("bob", 1000)
    return ledger


@pytest.fixture()
def manager(ledger: InMemoryLedger) -> GameManager:
    return GameManager(InMemoryGameStore(), ledger)


@pytest.fixture()
def started() -> GameRecord:
    """Match g1 between alice (player 0) and bob (player 1), nobody has moved."""
    record = rules.create_game("alice", "g1", 100)
    rules.join_game("bob", record, 100)
    return record


@pytest.fixture()
def draw_grid() -> np.ndarray:
    """A full board with no four in a row anywhere.

    cell(r, c) = f[r] xor g[c]; no 4-long window of f matches a window of g or
    its complement, so no diagonal is constant, and f/g have runs of at most 3/2.
    """
    f = [0, 0, 0, 1, 0, 0]
    g = [0, 0, 1, 1, 0, 0, 1]
    return np.array([[f[r] ^ g[c] for c in range(7)] for r in range(6)], dtype=np.int8)


@pytest.fixture()
def last_move_record(draw_grid: np.ndarray):
    """Factory for an in-progress record whose only empty cell is the top of column 0."""

    def _make(grid: np.ndarray = None, reference: str = "g2") -> GameRecord:
        grid = (draw_grid if grid is None else grid).copy()
        grid[0, 0] = EMPTY
        return GameRecord(
            reference=reference,
            player0="alice",
            player1="bob",
            stake=200,
            board=Board(grid),
            phase=Phase.IN_PROGRESS,
            turn=0,
        )

    return _make
