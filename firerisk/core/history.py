"""
Risk History Buffer

Bounded, append-only record of recent assessments for the trend chart.
"""
from collections import deque
from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

from firerisk.core.inference.network import RawInputs

DEFAULT_CAPACITY = 20


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of the inputs and the risk they produced."""
    inputs: RawInputs
    risk: int

    def to_dict(self) -> Dict[str, Any]:
        return {**self.inputs.to_dict(), "risk": self.risk}


class HistoryBuffer:
    """FIFO of at most ``capacity`` entries, oldest evicted first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._entries: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def push(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def all(self) -> Tuple[HistoryEntry, ...]:
        """Entries in chronological order, most recent last."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def chart_series(self) -> Dict[str, List]:
        """1-based labels and risk values for a line chart on a 0-100 axis."""
        return {
            "labels": [str(i + 1) for i in range(len(self._entries))],
            "risk": [entry.risk for entry in self._entries],
        }
