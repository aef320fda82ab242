"""
stakefour - Staked two-player Connect Four engine

This package provides a Connect Four board and win engine, the lifecycle rules
of a staked match, the escrow payout computation, and a manager that runs
matches against a pluggable record store and ledger.
"""

# Version number
__version__ = '0.1.0'
