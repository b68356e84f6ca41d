"""
Turns finished games into stored results.
"""

import logging
from typing import Hashable, Optional

from utils import parse_opponent_rating
from .finished_game import BaseFinishedGame
from .models import EXCLUDED_VARIANTS, GameResult, Outcome
from .result_store import ResultStore

logger = logging.getLogger(__name__)


def score_for_user(outcome: Outcome, is_user_white: bool) -> Optional[float]:
    """Score from the user's side, or None if the game is unresolved."""
    if outcome == Outcome.BLACK_WON:
        return 0.0 if is_user_white else 1.0
    elif outcome == Outcome.WHITE_WON:
        return 1.0 if is_user_white else 0.0
    elif outcome == Outcome.DRAW:
        return 0.5
    return None


class ResultRecorder:
    """
    Records the user's finished games into a ResultStore.
    """

    def __init__(self, store: ResultStore):
        self.store = store

    def record_game_end(
        self,
        connector: Hashable,
        game: BaseFinishedGame,
        is_user_white: bool,
    ) -> Optional[GameResult]:
        """
        Record a finished game.

        Bughouse games and games without a resolved result are ignored.

        Args:
            connector: Connector the game was played on
            game: The finished game
            is_user_white: True if the user had the white pieces

        Returns:
            The stored GameResult, or None if nothing was recorded
        """
        variant = game.variant
        if variant in EXCLUDED_VARIANTS:
            logger.debug(f"Not recording {variant.value} game")
            return None

        score = score_for_user(game.outcome, is_user_white)
        if score is None:
            logger.debug(f"Not recording game with result {game.outcome.value}")
            return None

        if is_user_white:
            opponent_name = game.header("Black")
            raw_rating = game.header("BlackElo")
        else:
            opponent_name = game.header("White")
            raw_rating = game.header("WhiteElo")

        opponent_rating = parse_opponent_rating(raw_rating)
        if opponent_rating is None:
            logger.debug(f"Unknown rating {raw_rating!r} for opponent {opponent_name!r}")

        result = GameResult(
            score=score,
            variant=variant,
            opponent_name=opponent_name,
            opponent_rating=opponent_rating,
        )
        self.store.add(connector, result)
        logger.debug(
            f"Recorded {variant.value} result {score} vs {opponent_name} "
            f"({opponent_rating if opponent_rating is not None else '?'})"
        )
        return result
