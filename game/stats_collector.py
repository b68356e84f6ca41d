"""
Statistics aggregation over recorded results.
"""

from collections import defaultdict
from typing import Any, Dict, Hashable

from utils import names_match
from .models import VsStats
from .result_store import ResultStore


class StatsCollector:
    """
    Aggregates a connector's recorded results.
    """

    def __init__(self, store: ResultStore):
        self.store = store

    def get_vs_stats(self, connector: Hashable, opponent_name: str) -> VsStats:
        """
        Get head-to-head stats against one opponent.

        Names are compared case-insensitively.

        Returns:
            VsStats (all zero when no games were played)
        """
        stats = VsStats()
        for result in self.store.get_results(connector):
            if names_match(result.opponent_name, opponent_name):
                stats.games_played += 1
                stats.total_score += result.score
        return stats

    def get_variant_records(self, connector: Hashable) -> Dict[str, Dict[str, Any]]:
        """
        Calculate per-variant win/loss/draw records.

        Returns:
            Dict mapping variant value to stats dict
        """
        records = defaultdict(lambda: {
            "games": 0,
            "wins": 0,
            "losses": 0,
            "draws": 0,
            "score": 0.0,
            "opponents": set(),
        })

        for result in self.store.get_results(connector):
            record = records[result.variant.value]
            record["games"] += 1
            record["score"] += result.score
            record["opponents"].add(result.opponent_name.casefold())

            if result.score == 1.0:
                record["wins"] += 1
            elif result.score == 0.0:
                record["losses"] += 1
            else:
                record["draws"] += 1

        for record in records.values():
            record["score_rate"] = record["score"] / record["games"]
            record["num_opponents"] = len(record.pop("opponents"))

        return dict(records)
