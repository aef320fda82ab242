"""
record.py - The authoritative in-memory record of one staked match

A GameRecord holds everything about a match: the participants, the board,
the phase, whose turn it is, the escrowed stake and, once the match is over,
any payouts the ledger has not yet confirmed.
"""

from typing import Any, Dict, Hashable, List, NamedTuple, Optional

from stakefour.game.board import Board
from stakefour.utils import Phase


class Payout(NamedTuple):
    """An amount owed to a recipient out of a match's escrow."""
    recipient: Hashable
    amount: int


class GameRecord:
    """
    State of a single match.
    
    Players are identified by opaque hashable ids (strings in practice). On the
    board they are represented by their index: 0 for the creator, 1 for the
    player who joined.
    """
    
    def __init__(self, reference: Hashable, player0: Hashable, stake: int,
                 player1: Optional[Hashable] = None,
                 board: Optional[Board] = None,
                 phase: Phase = Phase.NOT_STARTED,
                 turn: int = 0,
                 winner: Optional[Hashable] = None,
                 outstanding: Optional[List[Payout]] = None):
        self._reference = reference
        self._stake = stake
        self.player0 = player0
        self.player1 = player1
        self.board = board if board is not None else Board()
        self.phase = phase
        self.turn = turn
        self.winner = winner
        self.outstanding: List[Payout] = list(outstanding or [])
    
    @property
    def reference(self) -> Hashable:
        return self._reference
    
    @property
    def stake(self) -> int:
        return self._stake
    
    @property
    def players(self) -> List[Hashable]:
        """Both participants, player 0 first. Only meaningful once joined."""
        return [self.player0, self.player1]
    
    def player_index(self, player: Hashable) -> Optional[int]:
        """Get the board index of a participant, or None for a stranger."""
        if player == self.player0:
            return 0
        if self.player1 is not None and player == self.player1:
            return 1
        return None
    
    def opponent_of(self, player: Hashable) -> Optional[Hashable]:
        """Get the counter-party of a participant."""
        index = self.player_index(player)
        if index is None:
            return None
        return self.player1 if index == 0 else self.player0
    
    def is_settled(self) -> bool:
        """Check if a finished match has no payouts left to confirm."""
        return self.phase.is_terminal() and not self.outstanding
    
    def copy(self) -> 'GameRecord':
        """Create an independent copy of the record."""
        return GameRecord(
            reference=self._reference,
            player0=self.player0,
            stake=self._stake,
            player1=self.player1,
            board=self.board.copy(),
            phase=self.phase,
            turn=self.turn,
            winner=self.winner,
            outstanding=self.outstanding,
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a JSON-compatible dict."""
        return {
            "reference": self._reference,
            "player0": self.player0,
            "player1": self.player1,
            "board": self.board.to_list(),
            "phase": self.phase.name,
            "turn": self.turn,
            "stake": self._stake,
            "winner": self.winner,
            "outstanding": [[p.recipient, p.amount] for p in self.outstanding],
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameRecord':
        """Build a record from a dict produced by to_dict()."""
        return cls(
            reference=data["reference"],
            player0=data["player0"],
            stake=data["stake"],
            player1=data.get("player1"),
            board=Board.from_list(data["board"]),
            phase=Phase[data["phase"]],
            turn=data.get("turn", 0),
            winner=data.get("winner"),
            outstanding=[Payout(recipient, amount)
                         for recipient, amount in data.get("outstanding", [])],
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, GameRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()
    
    def __repr__(self) -> str:
        return (f"GameRecord(reference={self._reference!r}, phase={self.phase.name}, "
                f"turn={self.turn}, stake={self._stake})")
