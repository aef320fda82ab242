"""
manager.py - High-level staked match manager

GameManager exposes the four match operations (create, cancel, join, play) and
settle over a keyed record store and a ledger. The rules and the payout
computation stay pure; this class only loads records, sequences the fund
transfers around them and saves the result.
"""

from typing import Hashable, NamedTuple

from stakefour.data.ledger import Ledger
from stakefour.data.store import GameStore
from stakefour.debug import debug
from stakefour.errors import DuplicateReference, TransferFailed
from stakefour.escrow import PayoutPlan, cancel_plan, escrow_account, payout_plan
from stakefour.game import rules
from stakefour.game.record import GameRecord
from stakefour.utils import DRAW_REMAINDER_TO, MoveOutcome


class PlayResult(NamedTuple):
    """Outcome of a play call."""
    outcome: MoveOutcome
    plan: PayoutPlan      # empty unless the move ended the match
    record: GameRecord    # record as stored after the call


class GameManager:
    """
    Run staked matches against a store and a ledger.
    
    Funds committed to a match are held in the ledger account returned by
    escrow.escrow_account(reference) until they are paid out.
    """
    
    def __init__(self, store: GameStore, ledger: Ledger,
                 remainder_to: int = DRAW_REMAINDER_TO):
        """
        Initialize the manager.
        
        Args:
            store: Keyed store holding the records
            ledger: Ledger used for every fund movement
            remainder_to: Player index receiving the odd unit of a drawn odd stake

        Raises:
            ValueError: If remainder_to is not a player index
        """
        if remainder_to not in (0, 1):
            raise ValueError(f"Invalid player index: {remainder_to}")
        self.store = store
        self.ledger = ledger
        self.remainder_to = remainder_to
    
    def _transfer(self, source: Hashable, destination: Hashable, amount: int) -> None:
        if not self.ledger.transfer(source, destination, amount):
            debug.error(f"Transfer of {amount} from {source!r} to {destination!r} failed",
                        "manager")
            raise TransferFailed(f"Could not transfer {amount} from {source!r} "
                                 f"to {destination!r}")
    
    def create(self, creator: Hashable, reference: Hashable, commitment: int) -> GameRecord:
        """
        Create a match and escrow the creator's commitment.
        
        Raises:
            InvalidCommitment, DuplicateReference, TransferFailed
        """
        record = rules.create_game(creator, reference, commitment)
        if reference in self.store:
            raise DuplicateReference(f"Game {reference!r} already exists")
        
        escrow = escrow_account(reference)
        self._transfer(creator, escrow, commitment)
        try:
            self.store.insert(record)
        except DuplicateReference:
            # Lost an insert race; hand the commitment back before reporting it
            self._transfer(escrow, creator, commitment)
            raise
        return record
    
    def cancel(self, caller: Hashable, reference: Hashable) -> PayoutPlan:
        """
        Cancel a match nobody has joined and refund its creator.
        
        Returns:
            The refund plan that was paid out
        
        Raises:
            GameNotFound, InvalidPlayer, GameStarted, TransferFailed
        """
        record = self.store.get(reference)
        rules.check_cancel(caller, record)
        
        plan = cancel_plan(record)
        for payout in plan:
            self._transfer(escrow_account(reference), payout.recipient, payout.amount)
        self.store.delete(reference)
        debug.info(f"Game {reference!r} cancelled by {caller!r}", "manager")
        return plan
    
    def join(self, caller: Hashable, reference: Hashable, commitment: int) -> GameRecord:
        """
        Join a match, escrowing the joiner's commitment.
        
        Raises:
            GameNotFound, GameFull, InvalidPlayer, InvalidCommitment, TransferFailed
        """
        record = self.store.get(reference)
        rules.check_join(caller, record, commitment)
        
        self._transfer(caller, escrow_account(reference), commitment)
        rules.join_game(caller, record, commitment)
        self.store.update(record)
        return record
    
    def play(self, caller: Hashable, opponent: Hashable, reference: Hashable,
             column: int) -> PlayResult:
        """
        Play a move and pay out the stake if it ends the match.
        
        A finishing move is stored together with its payout plan before any
        transfer is attempted. Each payout is removed from the record once the
        ledger confirms it; if a transfer fails, TransferFailed is raised and the
        rest stays outstanding for settle(). Replaying play() on a finished
        match raises GameOver and never pays again.
        
        Raises:
            GameNotFound, GameOver, GameNotStarted, InvalidPlayer, NotYourTurn,
            InvalidColumn, InvalidRow, CellNotEmpty, TransferFailed
        """
        record = self.store.get(reference)
        outcome = rules.play(caller, opponent, record, column)
        
        plan = payout_plan(outcome, record, self.remainder_to)
        record.outstanding = list(plan)
        self.store.update(record)
        
        if plan:
            self._pay_outstanding(record)
        return PlayResult(outcome, plan, record)
    
    def settle(self, reference: Hashable) -> PayoutPlan:
        """
        Retry the payouts of a finished match that the ledger has not confirmed.
        
        Returns:
            The payouts that were made by this call
        
        Raises:
            GameNotFound, TransferFailed
        """
        record = self.store.get(reference)
        if not record.outstanding:
            debug.debug(f"Game {reference!r} has nothing outstanding", "manager")
            return []
        return self._pay_outstanding(record)
    
    def _pay_outstanding(self, record: GameRecord) -> PayoutPlan:
        escrow = escrow_account(record.reference)
        paid = []
        while record.outstanding:
            payout = record.outstanding[0]
            # The stored record still lists this payout if the transfer raises
            if payout.amount > 0:
                self._transfer(escrow, payout.recipient, payout.amount)
            record.outstanding.pop(0)
            paid.append(payout)
            self.store.update(record)
            debug.info(f"Paid {payout.amount} to {payout.recipient!r} "
                       f"from game {record.reference!r}", "manager")
        return paid
