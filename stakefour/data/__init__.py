"""
stakefour.data - Collaborators the game manager relies on

Keyed record stores and the fund transfer ledger.
"""

from stakefour.data.ledger import Ledger, InMemoryLedger
from stakefour.data.store import GameStore, InMemoryGameStore, JsonGameStore

__all__ = ['Ledger', 'InMemoryLedger', 'GameStore', 'InMemoryGameStore', 'JsonGameStore']
