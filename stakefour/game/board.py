"""
board.py - Board representation and win detection for staked Connect Four

This module implements the Board class which owns the fixed 6x7 grid, computes
gravity landing rows, places pieces and evaluates win and draw conditions from
the last placed piece.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from stakefour.debug import debug
from stakefour.errors import CellNotEmpty
from stakefour.utils import (ROWS, COLS, CONNECT_N, EMPTY,
                             is_valid_position, render_board_ascii)

# Diagonal directions (row step, col step), both stepping down the board
DIAGONALS = {
    "diagonal_down": (1, 1),  # top-left to bottom-right
    "diagonal_up": (1, -1),   # top-right to bottom-left
}


class Board:
    """
    A Connect Four board.
    
    Row 0 is the top row and row ROWS-1 the bottom row. Each cell holds EMPTY
    or the index (0 or 1) of the player who filled it. Cells are only ever
    filled; nothing on the board clears a cell.
    """
    
    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a board, empty unless a grid is given.
        
        Args:
            grid: Optional ROWS x COLS array of EMPTY/0/1 values to start from
        """
        if grid is None:
            self.grid = np.full((ROWS, COLS), EMPTY, dtype=np.int8)
        else:
            grid = np.asarray(grid, dtype=np.int8)
            if grid.shape != (ROWS, COLS):
                raise ValueError(f"Board grid must be {ROWS}x{COLS}, got {grid.shape}")
            if not np.isin(grid, (EMPTY, 0, 1)).all():
                raise ValueError("Board cells must be EMPTY, 0 or 1")
            self.grid = grid.copy()
    
    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        return Board(self.grid)
    
    def cell(self, row: int, col: int) -> Optional[int]:
        """
        Get the owner of a cell.
        
        Returns:
            0 or 1 for a filled cell, None for an empty one
        
        Raises:
            IndexError: If the position is off the board
        """
        if not is_valid_position(row, col):
            raise IndexError(f"Position ({row}, {col}) is off the board")
        value = int(self.grid[row, col])
        return None if value == EMPTY else value
    
    def landing_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped in a column would land in.
        
        Scans from the bottom row upward and returns the first empty row.
        
        Returns:
            The landing row, or None if the column is full
        """
        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == EMPTY:
                return row
        return None
    
    def is_valid_move(self, column: int) -> bool:
        """Check if a piece can be dropped in a column."""
        if not (0 <= column < COLS):
            return False
        return self.landing_row(column) is not None
    
    def get_valid_moves(self) -> List[int]:
        """Get the columns that still have room."""
        return [col for col in range(COLS) if self.is_valid_move(col)]
    
    def move_count(self) -> int:
        """Number of filled cells."""
        return int(np.count_nonzero(self.grid != EMPTY))
    
    def place(self, row: int, column: int, player: int) -> None:
        """
        Fill a cell with a player's marker.
        
        Raises:
            IndexError: If the position is off the board
            CellNotEmpty: If the cell is already filled
        """
        if player not in (0, 1):
            raise ValueError(f"Invalid player index: {player}")
        if self.cell(row, column) is not None:
            raise CellNotEmpty(f"Cell ({row}, {column}) is not empty")
        debug.trace(f"Placing piece for player {player} at ({row}, {column})", "board")
        self.grid[row, column] = player
    
    def check_win(self, row: int, col: int) -> bool:
        """
        Check if the piece at a position completes a line of CONNECT_N.
        
        Horizontal and vertical lines are found by sliding a window across the
        whole row and column of the cell; diagonals are checked only over the
        windows that contain the cell. On boards built by play() every line in
        the row or column that can be complete passes through the last piece.
        
        Args:
            row: Row index of the placed piece
            col: Column index of the placed piece
        
        Returns:
            True if the piece is part of a winning line, False otherwise
        """
        player = self.cell(row, col)
        if player is None:
            return False
        
        if self._check_horizontal_win(player, row):
            return True
        if self._check_vertical_win(player, col):
            return True
        return any(self._check_diagonal_win(player, row, col, step)
                   for step in DIAGONALS.values())
    
    def _check_horizontal_win(self, player: int, row: int) -> bool:
        for col in range(COLS - CONNECT_N + 1):
            if np.all(self.grid[row, col:col + CONNECT_N] == player):
                return True
        return False
    
    def _check_vertical_win(self, player: int, col: int) -> bool:
        for row in range(ROWS - CONNECT_N + 1):
            if np.all(self.grid[row:row + CONNECT_N, col] == player):
                return True
        return False
    
    def _check_diagonal_win(self, player: int, row: int, col: int,
                            step: Tuple[int, int]) -> bool:
        for window in self._windows_through(row, col, step):
            if all(self.grid[r, c] == player for r, c in window):
                return True
        return False
    
    @staticmethod
    def _windows_through(row: int, col: int,
                         step: Tuple[int, int]) -> Iterator[List[Tuple[int, int]]]:
        """Yield every in-bounds CONNECT_N-long window along a direction containing (row, col)."""
        dr, dc = step
        for offset in range(CONNECT_N):
            start_r, start_c = row - offset * dr, col - offset * dc
            end_r = start_r + (CONNECT_N - 1) * dr
            end_c = start_c + (CONNECT_N - 1) * dc
            if not (is_valid_position(start_r, start_c) and is_valid_position(end_r, end_c)):
                continue
            yield [(start_r + i * dr, start_c + i * dc) for i in range(CONNECT_N)]
    
    def is_full(self) -> bool:
        """Check if every cell is filled."""
        return bool(np.all(self.grid != EMPTY))
    
    def get_winning_line(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get the cells of the line that makes check_win(row, col) true.
        
        Scans the same windows as check_win: the whole row and column of the
        cell, then the diagonal windows through it.
        
        Returns:
            The CONNECT_N (row, col) positions of the first complete line found,
            or an empty list if there is none
        """
        player = self.cell(row, col)
        if player is None:
            return []
        
        windows = [[(row, c + i) for i in range(CONNECT_N)]
                   for c in range(COLS - CONNECT_N + 1)]
        windows += [[(r + i, col) for i in range(CONNECT_N)]
                    for r in range(ROWS - CONNECT_N + 1)]
        for step in DIAGONALS.values():
            windows.extend(self._windows_through(row, col, step))
        
        for window in windows:
            if all(self.grid[r, c] == player for r, c in window):
                return window
        return []
    
    def to_list(self) -> List[List[Optional[int]]]:
        """Convert the board to nested lists with None for empty cells."""
        return [[None if cell == EMPTY else int(cell) for cell in row] for row in self.grid]
    
    @classmethod
    def from_list(cls, rows: List[List[Optional[int]]]) -> 'Board':
        """Build a board from nested lists as produced by to_list()."""
        return cls(np.array([[EMPTY if cell is None else cell for cell in row] for row in rows],
                            dtype=np.int8))
    
    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.grid)
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))
    
    def __str__(self) -> str:
        return self.render()
