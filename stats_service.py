"""
Playing statistics service.

Owns one ResultStore and wires the recorder, estimator, collector and
summary formatter to it. Construct one per process and pass it around.
"""

from typing import Any, Dict, Hashable, Optional

from game.finished_game import BaseFinishedGame
from game.models import GameResult, StatsConfig, Variant, VsStats
from game.recorder import ResultRecorder
from game.result_store import ResultStore
from game.stats_collector import StatsCollector
from rating.performance import PerformanceEstimator
from rating.summary import SummaryFormatter


class PlayingStatsService:
    """Keeps track of statistics on games played by the user."""

    def __init__(
        self,
        store: Optional[ResultStore] = None,
        config: Optional[StatsConfig] = None,
    ):
        """
        Args:
            store: Result store to use (a new empty one if None)
            config: Summary settings (defaults if None)
        """
        self.store = store if store is not None else ResultStore()
        self.config = config or StatsConfig()

        self.recorder = ResultRecorder(self.store)
        self.estimator = PerformanceEstimator(self.store)
        self.collector = StatsCollector(self.store)
        self.formatter = SummaryFormatter(
            self.estimator,
            self.collector,
            gate=self.config.summary_gate,
            premove_threshold_ms=self.config.premove_threshold_ms,
            skipped_plies=self.config.skipped_plies,
        )

    def record_game_end(
        self, connector: Hashable, game: BaseFinishedGame, is_user_white: bool
    ) -> Optional[GameResult]:
        return self.recorder.record_game_end(connector, game, is_user_white)

    def performance_rating(self, connector: Hashable, variant: Variant) -> Optional[int]:
        return self.estimator.estimate(connector, variant)

    def vs_stats(self, connector: Hashable, opponent_name: str) -> VsStats:
        return self.collector.get_vs_stats(connector, opponent_name)

    def variant_records(self, connector: Hashable) -> Dict[str, Dict[str, Any]]:
        return self.collector.get_variant_records(connector)

    def build_summary(
        self, connector: Hashable, game: BaseFinishedGame, is_user_white: bool
    ) -> Optional[str]:
        """Summary text for a game already passed to record_game_end, or None."""
        return self.formatter.build_summary(connector, game, is_user_white)
