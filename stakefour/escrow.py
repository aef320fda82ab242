"""
escrow.py - Payout computation for staked matches

Pure functions that turn a finished (or cancelled) match into a payout plan: a
list of Payout(recipient, amount) entries. Nothing here moves funds; the plan
is handed to a ledger by the game manager.
"""

from typing import Hashable, List, Tuple

from stakefour.debug import debug
from stakefour.game.record import GameRecord, Payout
from stakefour.utils import DRAW_REMAINDER_TO, MoveOutcome, OutcomeKind, Phase

PayoutPlan = List[Payout]


def escrow_account(reference: Hashable) -> Tuple[str, Hashable]:
    """
    Ledger account that holds the stake of a match.
    
    A tuple key, so it can never equal a player id string.
    """
    return ("escrow", reference)


def plan_total(plan: PayoutPlan) -> int:
    """Sum of all amounts in a plan."""
    return sum(payout.amount for payout in plan)


def win_plan(record: GameRecord) -> PayoutPlan:
    """The winner takes the whole stake."""
    if record.phase not in (Phase.PLAYER0_WON, Phase.PLAYER1_WON) or record.winner is None:
        raise ValueError(f"Game {record.reference!r} has no winner ({record.phase.name})")
    return [Payout(record.winner, record.stake)]


def draw_plan(record: GameRecord, remainder_to: int = DRAW_REMAINDER_TO) -> PayoutPlan:
    """
    Split the stake evenly between both players.
    
    Each player gets stake // 2. An odd stake leaves one unit over, which is
    added to the share of the player at index ``remainder_to`` so the plan
    always sums to the stake.
    """
    if record.phase != Phase.DRAW:
        raise ValueError(f"Game {record.reference!r} is not a draw ({record.phase.name})")
    if remainder_to not in (0, 1):
        raise ValueError(f"Invalid player index: {remainder_to}")
    
    half, remainder = divmod(record.stake, 2)
    shares = [half, half]
    if remainder:
        shares[remainder_to] += remainder
        debug.warning(f"Odd stake {record.stake} in game {record.reference!r}: "
                      f"remainder {remainder} goes to player {remainder_to}", "escrow")
    return [Payout(record.player0, shares[0]), Payout(record.player1, shares[1])]


def cancel_plan(record: GameRecord) -> PayoutPlan:
    """Refund the creator's commitment, which is half the stake."""
    if record.phase != Phase.NOT_STARTED:
        raise ValueError(f"Game {record.reference!r} cannot be cancelled ({record.phase.name})")
    return [Payout(record.player0, record.stake // 2)]


def payout_plan(outcome: MoveOutcome, record: GameRecord,
                remainder_to: int = DRAW_REMAINDER_TO) -> PayoutPlan:
    """
    Compute the plan for the outcome of a move.
    
    Args:
        outcome: Outcome returned by rules.play()
        record: The record after the move was applied
        remainder_to: Player index receiving the odd unit of a drawn odd stake
    
    Returns:
        The payout plan; empty when the match continues
    """
    if outcome.kind == OutcomeKind.CONTINUE:
        return []
    if outcome.kind == OutcomeKind.WIN:
        plan = win_plan(record)
    elif outcome.kind == OutcomeKind.DRAW:
        plan = draw_plan(record, remainder_to)
    else:
        raise ValueError(f"Unknown outcome: {outcome.kind}")
    
    debug.debug(f"Payout plan for {record.reference!r}: {plan}", "escrow")
    return plan
