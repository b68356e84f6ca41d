"""
Performance rating estimate from recorded results.

Not a true performance rating solve: each game is converted to a single
number from the opponent's rating and the outcome, and those are averaged.
"""

import logging
from typing import Hashable, Optional

from game.models import GameResult, Variant
from game.result_store import ResultStore

logger = logging.getLogger(__name__)

RATING_OFFSET = 400   # added for a win, subtracted for a loss
LOSS_FLOOR = 100      # lowest value a loss can contribute


def game_performance(result: GameResult) -> Optional[int]:
    """
    Opponent-adjusted value of a single game.

    Returns:
        rating for a draw, rating + 400 for a win, max(rating - 400, 100)
        for a loss, or None if the opponent rating is unknown
    """
    rating = result.opponent_rating
    if rating is None:
        return None

    if result.score == 0.5:
        return rating
    elif result.score == 0.0:
        return max(rating - RATING_OFFSET, LOSS_FLOOR)
    return rating + RATING_OFFSET


class PerformanceEstimator:
    """Estimates per-variant performance ratings for a connector."""

    def __init__(self, store: ResultStore):
        self.store = store

    def estimate(self, connector: Hashable, variant: Variant) -> Optional[int]:
        """
        Estimate the user's performance rating in a variant.

        Args:
            connector: Connector whose results are scanned
            variant: Only results in this variant count

        Returns:
            Truncated mean of the per-game values, or None if no result
            with a known opponent rating exists
        """
        n = 0
        total = 0

        for result in self.store.get_results(connector):
            if result.variant != variant:
                continue
            value = game_performance(result)
            if value is None:
                continue
            n += 1
            total += value

        if n == 0:
            return None

        logger.debug(f"Performance over {n} {variant.value} games: {total // n}")
        return total // n
