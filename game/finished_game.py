"""
Read-only view of a finished game.

The statistics code only needs a handful of accessors on a game, captured by
BaseFinishedGame. PgnFinishedGame implements them over a python-chess PGN game,
taking move times from [%emt] or [%clk] comment annotations.
"""

import abc
import io
import logging
import re
from typing import Iterator, List, Optional

import chess
import chess.pgn

from .models import MoveRecord, Outcome, Variant

logger = logging.getLogger(__name__)

# [%emt H:MM:SS.d] or [%emt S.ddd] - elapsed move time
EMT_REGEX = re.compile(r"\[%emt\s+(?:(\d+):)?(?:(\d+):)?(\d+(?:\.\d+)?)\]")
# [%clk H:MM:SS.d] - clock remaining after the move
CLK_REGEX = re.compile(r"\[%clk\s+(?:(\d+):)?(?:(\d+):)?(\d+(?:\.\d+)?)\]")


class BaseFinishedGame(abc.ABC):
    """Abstract read accessors consumed by the statistics components."""

    @property
    @abc.abstractmethod
    def variant(self) -> Variant:
        ...

    @property
    @abc.abstractmethod
    def outcome(self) -> Outcome:
        ...

    @abc.abstractmethod
    def header(self, name: str) -> str:
        """Return a PGN header value, or "" if it is not set."""
        ...

    @property
    @abc.abstractmethod
    def moves(self) -> List[MoveRecord]:
        """Moves in the order they were played."""
        ...

    @property
    @abc.abstractmethod
    def is_playing(self) -> bool:
        """True if this is a game the user took part in (not just observed)."""
        ...

    @property
    def half_move_count(self) -> int:
        return len(self.moves)


def _to_milliseconds(match: re.Match) -> int:
    """Milliseconds from "S.ddd", "M:SS.d" or "H:MM:SS.d"."""
    *prefix, seconds = [part for part in match.groups() if part is not None]
    total = float(seconds)
    for power, part in enumerate(reversed(prefix), start=1):
        total += int(part) * 60 ** power
    return round(total * 1000)


def _parse_increment_ms(time_control: str) -> int:
    """Increment from a TimeControl header like "180+2"; 0 when absent or odd."""
    if "+" not in time_control:
        return 0
    increment = time_control.split("+", 1)[1].strip()
    if not increment.isdecimal():
        return 0
    return int(increment) * 1000


class PgnFinishedGame(BaseFinishedGame):
    """
    BaseFinishedGame over a python-chess game.

    Move times come from [%emt] when present. Otherwise they are derived from
    successive [%clk] values of the same colour plus the increment; the first
    clock reading of each colour yields no sample.
    """

    def __init__(self, game: chess.pgn.Game, playing: bool = True):
        """
        Args:
            game: Parsed PGN game
            playing: Whether the user played this game
        """
        self.game = game
        self.playing = playing
        self._moves: Optional[List[MoveRecord]] = None

    @classmethod
    def from_pgn_string(cls, pgn_str: str, playing: bool = True) -> Optional["PgnFinishedGame"]:
        """Parse the first game of a PGN string, or None if there is none."""
        game = chess.pgn.read_game(io.StringIO(pgn_str))
        if game is None:
            return None
        return cls(game, playing=playing)

    @property
    def variant(self) -> Variant:
        return Variant.from_header(self.game.headers.get("Variant"))

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_pgn(self.game.headers.get("Result"))

    def header(self, name: str) -> str:
        return self.game.headers.get(name, "")

    @property
    def is_playing(self) -> bool:
        return self.playing

    @property
    def moves(self) -> List[MoveRecord]:
        if self._moves is None:
            self._moves = self._build_moves()
        return self._moves

    def _white_moves_first(self) -> bool:
        try:
            return self.game.board().turn == chess.WHITE
        except ValueError as e:
            logger.warning(f"Cannot set up start position, assuming white to move: {e}")
            return True

    def _build_moves(self) -> List[MoveRecord]:
        increment_ms = _parse_increment_ms(self.game.headers.get("TimeControl", ""))
        is_white = self._white_moves_first()
        prev_clock = {True: None, False: None}

        records = []
        for node in self.game.mainline():
            comment = node.comment or ""
            time_taken = ()

            emt_match = EMT_REGEX.search(comment)
            clk_match = CLK_REGEX.search(comment)
            if emt_match:
                time_taken = (_to_milliseconds(emt_match),)
            if clk_match:
                clock_ms = _to_milliseconds(clk_match)
                if not emt_match and prev_clock[is_white] is not None:
                    spent = prev_clock[is_white] - clock_ms + increment_ms
                    time_taken = (max(spent, 0),)
                prev_clock[is_white] = clock_ms

            records.append(MoveRecord(is_white=is_white, time_taken=time_taken))
            is_white = not is_white

        return records


def read_pgn_games(path: str, playing: bool = True) -> Iterator[PgnFinishedGame]:
    """
    Yield every game in a PGN file.

    Args:
        path: Path to the PGN file
        playing: Passed through to each PgnFinishedGame

    Undecodable bytes (Latin-1 archives) are replaced rather than raising.

    Raises:
        OSError: If the file cannot be opened
    """
    with open(path, encoding="utf-8", errors="replace") as f:
        while True:
            game = chess.pgn.read_game(f)
            if game is None:
                break
            if game.errors:
                logger.warning(f"{path}: game parsed with errors: {game.errors[0]}")
            yield PgnFinishedGame(game, playing=playing)
