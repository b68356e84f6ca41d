"""
Data models for playing statistics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Variant(str, Enum):
    """Rules-set a game was played under."""
    STANDARD = "standard"
    CHESS960 = "chess960"
    CRAZYHOUSE = "crazyhouse"
    BUGHOUSE = "bughouse"
    FISCHER_RANDOM_BUGHOUSE = "fischer_random_bughouse"
    SUICIDE = "suicide"
    LOSERS = "losers"
    ATOMIC = "atomic"
    WILD = "wild"
    THREE_CHECK = "three_check"
    KING_OF_THE_HILL = "king_of_the_hill"
    ANTICHESS = "antichess"
    HORDE = "horde"
    RACING_KINGS = "racing_kings"
    UNKNOWN = "unknown"

    @classmethod
    def from_header(cls, raw: Optional[str]) -> "Variant":
        """
        Map a PGN "Variant" header to a Variant.

        Matching ignores case, spaces, dashes and underscores. A blank
        header is standard chess; anything unrecognised is UNKNOWN.
        """
        if not raw or not raw.strip():
            return cls.STANDARD
        key = "".join(ch for ch in raw.lower() if ch.isalnum())
        return _VARIANT_ALIASES.get(key, cls.UNKNOWN)


_VARIANT_ALIASES = {
    "standard": Variant.STANDARD,
    "chess": Variant.STANDARD,
    "classic": Variant.STANDARD,
    "classical": Variant.STANDARD,
    "normal": Variant.STANDARD,
    "fromposition": Variant.STANDARD,
    "chess960": Variant.CHESS960,
    "fischerandom": Variant.CHESS960,
    "fischerrandom": Variant.CHESS960,
    "fr": Variant.CHESS960,
    "crazyhouse": Variant.CRAZYHOUSE,
    "zh": Variant.CRAZYHOUSE,
    "bughouse": Variant.BUGHOUSE,
    "bug": Variant.BUGHOUSE,
    "fischerrandombughouse": Variant.FISCHER_RANDOM_BUGHOUSE,
    "frbughouse": Variant.FISCHER_RANDOM_BUGHOUSE,
    "bughouse960": Variant.FISCHER_RANDOM_BUGHOUSE,
    "suicide": Variant.SUICIDE,
    "losers": Variant.LOSERS,
    "atomic": Variant.ATOMIC,
    "wild": Variant.WILD,
    "threecheck": Variant.THREE_CHECK,
    "3check": Variant.THREE_CHECK,
    "kingofthehill": Variant.KING_OF_THE_HILL,
    "koth": Variant.KING_OF_THE_HILL,
    "antichess": Variant.ANTICHESS,
    "giveaway": Variant.ANTICHESS,
    "horde": Variant.HORDE,
    "racingkings": Variant.RACING_KINGS,
}

# Bughouse scores belong to a team, not to the user alone
EXCLUDED_VARIANTS = frozenset({Variant.BUGHOUSE, Variant.FISCHER_RANDOM_BUGHOUSE})


class Outcome(str, Enum):
    """Resolved result of a game."""
    WHITE_WON = "white_won"
    BLACK_WON = "black_won"
    DRAW = "draw"
    UNDETERMINED = "undetermined"

    @classmethod
    def from_pgn(cls, result: Optional[str]) -> "Outcome":
        """Map a PGN "Result" tag ("1-0", "0-1", "1/2-1/2", "*")."""
        return _PGN_RESULTS.get((result or "").strip(), cls.UNDETERMINED)

    @property
    def is_resolved(self) -> bool:
        return self is not Outcome.UNDETERMINED


_PGN_RESULTS = {
    "1-0": Outcome.WHITE_WON,
    "0-1": Outcome.BLACK_WON,
    "1/2-1/2": Outcome.DRAW,
}


class GameResult(BaseModel):
    """A finished game, scored from the user's side. Immutable once recorded."""
    model_config = ConfigDict(frozen=True)

    score: float                # 0.0 loss, 0.5 draw, 1.0 win
    variant: Variant
    opponent_name: str
    opponent_rating: Optional[int] = Field(default=None, ge=0)  # None = unknown

    @field_validator("score")
    @classmethod
    def _resolved_score(cls, value: float) -> float:
        if value not in (0.0, 0.5, 1.0):
            raise ValueError(f"score must be 0, 0.5 or 1, got {value}")
        return value


class VsStats(BaseModel):
    """Head-to-head totals against one opponent."""
    games_played: int = 0
    total_score: float = 0.0


@dataclass(frozen=True)
class MoveRecord:
    """One ply of a finished game as seen by the timing scan."""
    is_white: bool
    time_taken: Tuple[int, ...] = ()    # elapsed milliseconds, first sample is used


class StatsConfig(BaseModel):
    """Tunables for summaries and the command line."""
    summary_gate: Literal["strict", "legacy"] = "strict"
    premove_threshold_ms: int = Field(default=100, ge=0)
    skipped_plies: int = Field(default=2, ge=0)
    connector: str = "local"
