"""
In-memory storage of recorded game results, partitioned by connector.
"""

import logging
import threading
from typing import Dict, Hashable, List, Optional

from .models import GameResult

logger = logging.getLogger(__name__)


class ResultStore:
    """
    Append-only mapping from connector to its recorded results.

    Results keep insertion order. A single lock covers the append path and
    every read snapshot, so readers always scan a consistent copy.
    """

    def __init__(self):
        self._results: Dict[Hashable, List[GameResult]] = {}
        self._lock = threading.Lock()

    def add(self, connector: Hashable, result: GameResult) -> None:
        """
        Append a result to the connector's list.

        Args:
            connector: Connector identity (used only as a key)
            result: The resolved game result
        """
        with self._lock:
            results = self._results.get(connector)
            if results is None:
                results = []
                self._results[connector] = results
                logger.debug(f"Started result list for connector {connector!r}")
            results.append(result)

    def get_results(self, connector: Hashable) -> List[GameResult]:
        """
        Get a snapshot of a connector's results.

        Returns:
            List of GameResult in recording order (empty if none)
        """
        with self._lock:
            return list(self._results.get(connector, ()))

    def has_connector(self, connector: Hashable) -> bool:
        """Check if any result was recorded for a connector."""
        with self._lock:
            return connector in self._results

    def get_connectors(self) -> List[Hashable]:
        """Get all connectors with at least one result."""
        with self._lock:
            return list(self._results)

    def count(self, connector: Optional[Hashable] = None) -> int:
        """Count results for one connector, or across all connectors when None."""
        with self._lock:
            if connector is not None:
                return len(self._results.get(connector, ()))
            return sum(len(results) for results in self._results.values())

    def __len__(self) -> int:
        return self.count()
