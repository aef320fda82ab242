#!/usr/bin/env python3
"""
run.py - Play a scripted staked Connect Four match

Both players start with a funded ledger account, the first player creates the
match, the second joins, and the given columns are played in turn until the
match ends or the moves run out.
"""

import argparse
import sys

from stakefour.data import InMemoryLedger, InMemoryGameStore, JsonGameStore
from stakefour.debug import debug, DebugLevel
from stakefour.errors import GameError
from stakefour.escrow import escrow_account
from stakefour.game.manager import GameManager
from stakefour.utils import OutcomeKind

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level from the environment, then args.debug or args.debug_level."""
    debug.configure_from_env()
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    elif args.debug_level:
        debug.set_from_string(args.debug_level)

def parse_moves(moves_str):
    """Parse comma-separated columns or return None on error."""
    if not moves_str:
        return []
    try:
        return [int(col) for col in moves_str.split(',')]
    except ValueError:
        print(f"Error parsing moves '{moves_str}'.")
        return None

def play_match(manager, players, reference, commitment, moves):
    """Create, join and play a match. Returns the last play result, or None."""
    first, second = players
    manager.create(first, reference, commitment)
    manager.join(second, reference, commitment)
    
    record = manager.store.get(reference)
    print(record.board.render())
    
    result = None
    for i, column in enumerate(moves):
        mover = players[i % 2]
        opponent = players[(i + 1) % 2]
        result = manager.play(mover, opponent, reference, column)
        print(f"\n{mover} plays column {column} (row {result.outcome.row})")
        print(result.record.board.render())
        
        if result.outcome.kind != OutcomeKind.CONTINUE:
            break
    return result

def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Play a scripted staked Connect Four match',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Vertical win for the first player
    python run.py --moves 0,1,0,1,0,1,0

    # Larger stake, records kept in a JSON file
    python run.py --moves 3,3,4,4,5,5,6 --commitment 250 --store data/games.json
"""
    )
    parser.add_argument('--moves', type=str, required=True,
                        help='Comma-separated columns, alternating between the players')
    parser.add_argument('--commitment', type=int, default=100,
                        help='Amount each player commits')
    parser.add_argument('--reference', type=str, default='g1', help='Match reference')
    parser.add_argument('--players', type=str, default='alice,bob',
                        help='Comma-separated ids of the creator and the joiner')
    parser.add_argument('--store', type=str, default=None,
                        help='JSON file to keep records in (in-memory if omitted)')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--debug_level', type=str, default=None,
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        help='Debug level')
    args = parser.parse_args()
    
    configure_debug(args)
    
    moves = parse_moves(args.moves)
    if moves is None:
        return 1
    players = [p.strip() for p in args.players.split(',')]
    if len(players) != 2:
        print("Exactly two players are required.")
        return 1
    
    store = JsonGameStore(args.store) if args.store else InMemoryGameStore()
    ledger = InMemoryLedger()
    for player in players:
        ledger.deposit(player, args.commitment)
    manager = GameManager(store, ledger)
    
    try:
        result = play_match(manager, players, args.reference, args.commitment, moves)
    except GameError as e:
        print(f"Rejected: {e.code}: {e.message}")
        return 1
    
    if result is None or result.outcome.kind == OutcomeKind.CONTINUE:
        print("\nMatch still in progress.")
    elif result.outcome.kind == OutcomeKind.WIN:
        line = result.record.board.get_winning_line(result.outcome.row, result.outcome.column)
        print(f"\nWinner: {result.record.winner} with {line}")
    else:
        print("\nDraw.")
    
    for payout in result.plan if result else []:
        print(f"Payout: {payout.amount} to {payout.recipient}")
    for account in players + [escrow_account(args.reference)]:
        print(f"Balance {account}: {ledger.balance(account)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
