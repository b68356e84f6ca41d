"""
Pytest configuration and shared fixtures for playing statistics tests.
"""

from typing import Dict, List, Optional, Sequence

import pytest

from game.finished_game import BaseFinishedGame
from game.models import MoveRecord, Outcome, Variant
from stats_service import PlayingStatsService


class FakeGame(BaseFinishedGame):
    """In-memory finished game with just the accessors the stats code reads."""

    def __init__(
        self,
        outcome: Outcome = Outcome.WHITE_WON,
        variant: Variant = Variant.STANDARD,
        headers: Optional[Dict[str, str]] = None,
        moves: Optional[List[MoveRecord]] = None,
        playing: bool = True,
    ):
        self._outcome = outcome
        self._variant = variant
        self._headers = headers or {}
        self._moves = moves if moves is not None else timed_moves([1000] * 4)
        self._playing = playing

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    def header(self, name: str) -> str:
        return self._headers.get(name, "")

    @property
    def moves(self) -> List[MoveRecord]:
        return self._moves

    @property
    def is_playing(self) -> bool:
        return self._playing


def timed_moves(times_ms: Sequence[Optional[int]], white_first: bool = True) -> List[MoveRecord]:
    """Alternating-colour moves; None means a move without timing."""
    moves = []
    is_white = white_first
    for elapsed in times_ms:
        time_taken = () if elapsed is None else (elapsed,)
        moves.append(MoveRecord(is_white=is_white, time_taken=time_taken))
        is_white = not is_white
    return moves


def make_game(
    opponent: str = "Magnus",
    opponent_rating: str = "1500",
    user_white: bool = True,
    **kwargs,
) -> FakeGame:
    """FakeGame with the opponent's name and rating on the side the user did not play."""
    if user_white:
        headers = {"White": "me", "Black": opponent, "WhiteElo": "1400", "BlackElo": opponent_rating}
    else:
        headers = {"White": opponent, "Black": "me", "WhiteElo": opponent_rating, "BlackElo": "1400"}
    return FakeGame(headers=headers, **kwargs)


@pytest.fixture
def service() -> PlayingStatsService:
    """Fresh service with an empty store."""
    return PlayingStatsService()
