"""
rules.py - Lifecycle and move rules for staked Connect Four

This module provides:
1. The lifecycle transitions of a match (create, cancel, join)
2. The play rule, which validates a move, applies it and scores the result

Every function checks all of its preconditions before touching the record, so a
rejected call leaves the record exactly as it was.
"""

import numbers
from typing import Hashable, Optional

import numpy as np

from stakefour.debug import debug
from stakefour.errors import (CellNotEmpty, GameFull, GameNotStarted, GameOver, GameStarted,
                              InvalidColumn, InvalidCommitment, InvalidPlayer, InvalidRow,
                              NotYourTurn)
from stakefour.game.record import GameRecord
from stakefour.utils import COLS, MoveOutcome, OutcomeKind, Phase, other_player


def _reject(error):
    debug.debug(f"Rejected: {error.code}: {error.message}", "rules")
    raise error


def _as_int(value) -> Optional[int]:
    """Convert an integral value (Python or numpy) to int; None for anything else."""
    # bool is an int subclass; reject it explicitly
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        return None
    return int(value)


def _check_commitment(commitment) -> int:
    amount = _as_int(commitment)
    if amount is None or amount <= 0:
        _reject(InvalidCommitment(f"Commitment must be a positive integer, got {commitment!r}"))
    return amount


def create_game(creator: Hashable, reference: Hashable, commitment: int) -> GameRecord:
    """
    Create a new match waiting for an opponent.
    
    Args:
        creator: Id of the creating player, who becomes player 0
        reference: Unique reference of the match
        commitment: Amount the creator puts in; the stake is twice this
    
    Returns:
        A record in phase NOT_STARTED with an empty board
    """
    amount = _check_commitment(commitment)
    record = GameRecord(reference=reference, player0=creator, stake=amount * 2)
    debug.info(f"Created game {reference!r} by {creator!r} with stake {record.stake}", "rules")
    return record


def check_cancel(caller: Hashable, record: GameRecord) -> None:
    """
    Check that a match may be cancelled by the caller.
    
    Only the creator may cancel, and only before anyone has joined.
    
    Raises:
        InvalidPlayer: If the caller is not the creator
        GameStarted: If the match has already been joined
    """
    if caller != record.player0:
        _reject(InvalidPlayer(f"{caller!r} did not create game {record.reference!r}"))
    if record.phase != Phase.NOT_STARTED:
        _reject(GameStarted(f"Game {record.reference!r} is {record.phase.name}"))


def check_join(caller: Hashable, record: GameRecord, commitment: int) -> None:
    """
    Check that the caller may join a match with the given commitment.
    
    Raises:
        GameFull: If the match already has a second player
        InvalidPlayer: If the caller created the match
        InvalidCommitment: If the commitment does not match the creator's
    """
    if record.player1 is not None:
        _reject(GameFull(f"Game {record.reference!r} already has two players"))
    if caller == record.player0:
        _reject(InvalidPlayer("A player cannot join their own game"))
    amount = _as_int(commitment)
    if amount is None or amount * 2 != record.stake:
        _reject(InvalidCommitment(
            f"Commitment must be {record.stake // 2}, got {commitment!r}"))


def join_game(caller: Hashable, record: GameRecord, commitment: int) -> GameRecord:
    """
    Join a match as player 1 and start it.
    
    Returns:
        The same record, now IN_PROGRESS with player 0 to move
    """
    check_join(caller, record, commitment)
    record.player1 = caller
    record.phase = Phase.IN_PROGRESS
    debug.info(f"{caller!r} joined game {record.reference!r}", "rules")
    return record


def play(caller: Hashable, opponent: Hashable, record: GameRecord, column: int) -> MoveOutcome:
    """
    Drop the caller's piece in a column and score the move.
    
    Args:
        caller: Id of the moving player
        opponent: Id the caller claims as their opponent
        record: The match record; mutated only if the move is legal
        column: Column to drop the piece in (0-indexed)
    
    Returns:
        The move outcome: CONTINUE, WIN or DRAW
    
    Raises:
        GameOver, GameNotStarted, InvalidPlayer, NotYourTurn,
        InvalidColumn, InvalidRow, CellNotEmpty
    """
    phase = record.phase
    if phase.is_terminal():
        _reject(GameOver(f"Game {record.reference!r} is {phase.name}"))
    if phase != Phase.IN_PROGRESS:
        _reject(GameNotStarted(f"Game {record.reference!r} is {phase.name}"))
    
    players = record.players
    if caller not in players or opponent not in players:
        _reject(InvalidPlayer(f"{caller!r} and {opponent!r} are not the players of this game"))
    if opponent != record.opponent_of(caller):
        _reject(InvalidPlayer(f"{opponent!r} is not the opponent of {caller!r}"))
    
    player = 0 if caller == record.player0 else 1
    if player != record.turn:
        _reject(NotYourTurn(f"It is player {record.turn}'s turn"))
    
    requested = column
    column = _as_int(column)
    if column is None or not (0 <= column < COLS):
        _reject(InvalidColumn(f"Column must be in [0, {COLS}), got {requested!r}"))
    
    board = record.board
    row = board.landing_row(column)
    if row is None:
        _reject(InvalidRow(f"Column {column} is full"))
    if board.cell(row, column) is not None:
        _reject(CellNotEmpty(f"Cell ({row}, {column}) is not empty"))
    
    board.place(row, column, player)
    
    debug.start_timer("win_check")
    if board.check_win(row, column):
        record.phase = Phase.won_by(player)
        record.winner = caller
        outcome = MoveOutcome(OutcomeKind.WIN, row, column, player)
        debug.info(f"Player {player} ({caller!r}) wins game {record.reference!r} "
                   f"after move at ({row}, {column})", "rules")
    elif board.is_full():
        record.phase = Phase.DRAW
        outcome = MoveOutcome(OutcomeKind.DRAW, row, column, player)
        debug.info(f"Game {record.reference!r} ends in a draw", "rules")
    else:
        record.turn = other_player(player)
        outcome = MoveOutcome(OutcomeKind.CONTINUE, row, column, player)
        debug.debug(f"Switching to player {record.turn}", "rules")
    debug.end_timer("win_check", "rules")
    
    return outcome
