"""
ledger.py - Fund transfer collaborator

The game manager moves funds only through a Ledger's transfer() method, called
once per committed stake movement. InMemoryLedger is a reference
implementation that keeps balances in a dict.
"""

from typing import Dict, Hashable, List, Tuple

from stakefour.debug import debug


class Ledger:
    """Interface of the fund transfer service."""
    
    def transfer(self, source: Hashable, destination: Hashable, amount: int) -> bool:
        """
        Move an amount between two accounts.
        
        Returns:
            True if the transfer happened, False if it was refused
        """
        raise NotImplementedError


class InMemoryLedger(Ledger):
    """Ledger keeping account balances in memory."""
    
    def __init__(self):
        self._balances: Dict[Hashable, int] = {}
        self.history: List[Tuple[Hashable, Hashable, int]] = []
    
    def deposit(self, account: Hashable, amount: int) -> None:
        """Credit an account from outside the ledger."""
        if amount <= 0:
            raise ValueError(f"Deposit must be positive, got {amount}")
        self._balances[account] = self._balances.get(account, 0) + amount
    
    def balance(self, account: Hashable) -> int:
        return self._balances.get(account, 0)
    
    def total(self) -> int:
        """Sum of all balances."""
        return sum(self._balances.values())
    
    def transfer(self, source: Hashable, destination: Hashable, amount: int) -> bool:
        if amount <= 0:
            debug.warning(f"Refused transfer of non-positive amount {amount}", "ledger")
            return False
        if self.balance(source) < amount:
            debug.warning(f"Refused transfer of {amount} from {source!r}: "
                          f"balance is {self.balance(source)}", "ledger")
            return False
        
        self._balances[source] -= amount
        self._balances[destination] = self.balance(destination) + amount
        self.history.append((source, destination, amount))
        debug.debug(f"Transferred {amount} from {source!r} to {destination!r}", "ledger")
        return True
