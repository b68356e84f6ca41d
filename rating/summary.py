"""
End-of-game statistics summary.
"""

import logging
from typing import Hashable, List, Optional

from game.finished_game import BaseFinishedGame
from game.models import Outcome
from game.move_timing import PREMOVE_THRESHOLD_MS, SKIPPED_PLIES, scan_move_timing
from game.stats_collector import StatsCollector
from .performance import PerformanceEstimator

logger = logging.getLogger(__name__)

SUMMARY_GATES = ("strict", "legacy")


def strict_gate(game: BaseFinishedGame) -> bool:
    """The user played the game, it has a result, and more than one ply was made."""
    return (
        game.is_playing
        and game.outcome.is_resolved
        and game.half_move_count > 1
    )


def legacy_gate(game: BaseFinishedGame) -> bool:
    """
    Older condition kept for compatibility.

    Only black wins require the playing flag, and only draws require more
    than one ply.
    """
    outcome = game.outcome
    return (
        (game.is_playing and outcome == Outcome.BLACK_WON)
        or outcome == Outcome.WHITE_WON
        or (outcome == Outcome.DRAW and game.half_move_count > 1)
    )


class SummaryFormatter:
    """
    Builds the multi-line summary shown when one of the user's games ends.
    """

    def __init__(
        self,
        estimator: PerformanceEstimator,
        collector: StatsCollector,
        gate: str = "strict",
        premove_threshold_ms: int = PREMOVE_THRESHOLD_MS,
        skipped_plies: int = SKIPPED_PLIES,
    ):
        """
        Args:
            estimator: Performance rating source
            collector: Head-to-head stats source
            gate: "strict" or "legacy" summary condition
            premove_threshold_ms: Premove cut-off for the timing scan
            skipped_plies: Leading plies ignored by the timing scan
        """
        if gate not in SUMMARY_GATES:
            raise ValueError(f"Unknown summary gate: {gate}. Use 'strict' or 'legacy'")
        self.estimator = estimator
        self.collector = collector
        self.gate = gate
        self.premove_threshold_ms = premove_threshold_ms
        self.skipped_plies = skipped_plies

    def should_summarize(self, game: BaseFinishedGame) -> bool:
        if self.gate == "legacy":
            return legacy_gate(game)
        return strict_gate(game)

    def build_summary(
        self,
        connector: Hashable,
        game: BaseFinishedGame,
        is_user_white: bool,
    ) -> Optional[str]:
        """
        Build the summary for a finished game.

        Assumes the game was already recorded, so the performance rating and
        series include it.

        Returns:
            Summary text, or None if the game does not qualify
        """
        if not self.should_summarize(game):
            logger.debug(f"No summary for game with result {game.outcome.value}")
            return None

        timing = scan_move_timing(
            game.moves,
            is_user_white,
            premove_threshold_ms=self.premove_threshold_ms,
            skipped_plies=self.skipped_plies,
        )

        variant = game.variant
        performance = self.estimator.estimate(connector, variant)
        opponent_name = game.header("Black") if is_user_white else game.header("White")
        vs_stats = self.collector.get_vs_stats(connector, opponent_name)

        lines: List[str] = []
        if performance is not None:
            lines.append(f"Performance({variant.value}): {performance}")
        if vs_stats.games_played > 0:
            lines.append(f"Series({opponent_name}): {vs_stats.total_score}/{vs_stats.games_played}")
        lines.append(
            f"Average Move Time(you/opponent): "
            f"{timing.player_average()}/{timing.opponent_average()}"
        )
        lines.append(f"Premoves(you/opp): {timing.player_premoves}/{timing.opponent_premoves}")

        return "\n".join(lines)
