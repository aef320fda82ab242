"""
store.py - Keyed storage of game records

A GameStore maps a match reference to its record with insert-if-absent
semantics, which is what makes references unique. Two implementations are
provided: an in-memory store and a JSON file store guarded by a file lock.
"""

import json
import os
import shutil
from typing import Dict, Hashable, List

import filelock

from stakefour.debug import debug
from stakefour.errors import DuplicateReference, GameNotFound
from stakefour.game.record import GameRecord


class GameStore:
    """Interface of a keyed record store."""
    
    def insert(self, record: GameRecord) -> None:
        """Store a new record. Raises DuplicateReference if the reference is taken."""
        raise NotImplementedError
    
    def get(self, reference: Hashable) -> GameRecord:
        """Load a record. Raises GameNotFound if there is none."""
        raise NotImplementedError
    
    def update(self, record: GameRecord) -> None:
        """Overwrite an existing record. Raises GameNotFound if there is none."""
        raise NotImplementedError
    
    def delete(self, reference: Hashable) -> None:
        """Remove a record. Raises GameNotFound if there is none."""
        raise NotImplementedError
    
    def __contains__(self, reference: Hashable) -> bool:
        raise NotImplementedError


class InMemoryGameStore(GameStore):
    """
    Store records in a dict.
    
    Records are copied on the way in and out, so callers never hold a
    reference into the store.
    """
    
    def __init__(self):
        self._records: Dict[Hashable, GameRecord] = {}
    
    def insert(self, record: GameRecord) -> None:
        if record.reference in self._records:
            raise DuplicateReference(f"Game {record.reference!r} already exists")
        self._records[record.reference] = record.copy()
        debug.trace(f"Inserted game {record.reference!r}", "store")
    
    def get(self, reference: Hashable) -> GameRecord:
        try:
            return self._records[reference].copy()
        except KeyError:
            raise GameNotFound(f"Game {reference!r} not found") from None
    
    def update(self, record: GameRecord) -> None:
        if record.reference not in self._records:
            raise GameNotFound(f"Game {record.reference!r} not found")
        self._records[record.reference] = record.copy()
        debug.trace(f"Updated game {record.reference!r}", "store")
    
    def delete(self, reference: Hashable) -> None:
        if self._records.pop(reference, None) is None:
            raise GameNotFound(f"Game {reference!r} not found")
        debug.trace(f"Deleted game {reference!r}", "store")
    
    def __contains__(self, reference: Hashable) -> bool:
        return reference in self._records
    
    def __len__(self) -> int:
        return len(self._records)


class JsonGameStore(GameStore):
    """
    Store records in a single JSON file.
    
    Every operation takes a file lock next to the data file, reads the file and,
    for writes, replaces it atomically through a temporary file. References are
    stored as JSON object keys, so they must be strings.
    """
    
    def __init__(self, path: str):
        self.path = path
        self._lock = filelock.FileLock(f"{path}.lock")
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
    
    def _read(self) -> Dict[str, dict]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r') as f:
            return json.load(f)
    
    def _write(self, data: Dict[str, dict]) -> None:
        temp_file = f"{self.path}.tmp"
        with open(temp_file, 'w') as f:
            json.dump(data, f, indent=2)
        shutil.move(temp_file, self.path)
    
    @staticmethod
    def _key(reference: Hashable) -> str:
        if not isinstance(reference, str):
            raise TypeError(f"JsonGameStore references must be strings, got {reference!r}")
        return reference
    
    def insert(self, record: GameRecord) -> None:
        key = self._key(record.reference)
        with self._lock:
            data = self._read()
            if key in data:
                raise DuplicateReference(f"Game {key!r} already exists")
            data[key] = record.to_dict()
            self._write(data)
        debug.trace(f"Inserted game {key!r} into {self.path}", "store")
    
    def get(self, reference: Hashable) -> GameRecord:
        key = self._key(reference)
        with self._lock:
            data = self._read()
        if key not in data:
            raise GameNotFound(f"Game {key!r} not found")
        return GameRecord.from_dict(data[key])
    
    def update(self, record: GameRecord) -> None:
        key = self._key(record.reference)
        with self._lock:
            data = self._read()
            if key not in data:
                raise GameNotFound(f"Game {key!r} not found")
            data[key] = record.to_dict()
            self._write(data)
        debug.trace(f"Updated game {key!r} in {self.path}", "store")
    
    def delete(self, reference: Hashable) -> None:
        key = self._key(reference)
        with self._lock:
            data = self._read()
            if key not in data:
                raise GameNotFound(f"Game {key!r} not found")
            del data[key]
            self._write(data)
        debug.trace(f"Deleted game {key!r} from {self.path}", "store")
    
    def references(self) -> List[str]:
        """All stored references."""
        with self._lock:
            return list(self._read())
    
    def __contains__(self, reference: Hashable) -> bool:
        with self._lock:
            return self._key(reference) in self._read()
