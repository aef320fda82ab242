"""
stakefour.game - Core game mechanics for staked Connect Four

This package contains the board and win detection, the match record, the
lifecycle and move rules, and the high-level match manager.
"""

from stakefour.game.board import Board
from stakefour.game.record import GameRecord, Payout

# Don't import the manager here; it depends on stakefour.data, which imports the record
__all__ = ['Board', 'GameRecord', 'Payout']
