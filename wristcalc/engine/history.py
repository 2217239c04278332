"""
History Ledger

Bounded, newest-first list of completed calculations.
"""

import uuid
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

HISTORY_LIMIT = 8


@dataclass(frozen=True)
class HistoryRecord:
    """A completed calculation."""
    expression: str
    result: str
    id: str


def _uuid_id() -> str:
    return str(uuid.uuid4())


class HistoryLedger:
    """Insertion-ordered history with FIFO eviction by capacity."""
    
    def __init__(self, id_factory: Optional[Callable[[], str]] = None,
                 limit: int = HISTORY_LIMIT):
        """
        Initialize the ledger.
        
        Args:
            id_factory: Zero-argument callable returning a unique id
                        (default: random UUID strings)
            limit: Maximum number of records kept
        """
        self._id_factory = id_factory or _uuid_id
        self.limit = limit
        self._records: List[HistoryRecord] = []
    
    def push(self, expression: str, result: str) -> HistoryRecord:
        """Prepend a record, evicting the oldest beyond the limit."""
        record = HistoryRecord(expression=expression, result=result,
                               id=self._id_factory())
        self._records.insert(0, record)
        del self._records[self.limit:]
        return record
    
    def clear(self):
        """Remove all records."""
        self._records.clear()
    
    @property
    def records(self) -> Tuple[HistoryRecord, ...]:
        """Records, newest first."""
        return tuple(self._records)
    
    def __len__(self) -> int:
        return len(self._records)
    
    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self.records)
