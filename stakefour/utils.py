"""
utils.py - Constants, enumerations and helper functions for the stakefour engine

This module provides the board dimensions, the match phase and move outcome
types, and small helpers shared by the board, the rules and the escrow code.
"""

from enum import Enum, auto
from typing import NamedTuple, Optional

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
EMPTY = -1     # Cell value for an empty cell; filled cells hold 0 or 1

# Player index that receives the spare unit when an odd stake is split on a draw
DRAW_REMAINDER_TO = 0


class Phase(Enum):
    """Lifecycle phase of a match."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    PLAYER0_WON = auto()
    PLAYER1_WON = auto()
    DRAW = auto()
    
    def is_terminal(self) -> bool:
        """Check if the match is over."""
        return self in (Phase.PLAYER0_WON, Phase.PLAYER1_WON, Phase.DRAW)
    
    @classmethod
    def won_by(cls, player: int) -> 'Phase':
        """Get the won phase for a player index."""
        if player == 0:
            return cls.PLAYER0_WON
        if player == 1:
            return cls.PLAYER1_WON
        raise ValueError(f"Invalid player index: {player}")


class OutcomeKind(Enum):
    """Result of a single move."""
    CONTINUE = auto()
    WIN = auto()
    DRAW = auto()


class MoveOutcome(NamedTuple):
    """Outcome of a move, with the cell the piece landed in."""
    kind: OutcomeKind
    row: int
    column: int
    player: int  # index of the player who moved

    @property
    def winner(self) -> Optional[int]:
        return self.player if self.kind == OutcomeKind.WIN else None


def other_player(player: int) -> int:
    """Get the other player index."""
    if player not in (0, 1):
        raise ValueError(f"Invalid player index: {player}")
    return 1 - player


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.
    
    Args:
        row: Row index
        col: Column index
    
    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.
    
    Player 0 is drawn as X, player 1 as O. Row 0 is the top of the board.
    
    Args:
        grid: The board grid
    
    Returns:
        ASCII representation of the board
    """
    symbols = {EMPTY: " ", 0: "X", 1: "O"}
    
    result = ["|" + "-" * (COLS * 2 - 1) + "|"]
    for row in range(ROWS):
        result.append("|" + " ".join(symbols[int(cell)] for cell in grid[row]) + "|")
    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")
    
    return "\n".join(result)
