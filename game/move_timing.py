"""
Move time and premove analysis for a finished game.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from .models import MoveRecord

PREMOVE_THRESHOLD_MS = 100  # inclusive
SKIPPED_PLIES = 2           # opening plies carry no useful timing
UNKNOWN_MOVE_TIME = "UNKNOWN"


@dataclass
class MoveTimingStats:
    """Per-side premove counts and move time totals."""
    player_premoves: int = 0
    opponent_premoves: int = 0
    player_total_ms: int = 0
    opponent_total_ms: int = 0
    player_moves: int = 0
    opponent_moves: int = 0

    @property
    def player_average_ms(self) -> int:
        return self.player_total_ms // self.player_moves if self.player_moves else 0

    @property
    def opponent_average_ms(self) -> int:
        return self.opponent_total_ms // self.opponent_moves if self.opponent_moves else 0

    def player_average(self) -> str:
        return format_average_move_time(self.player_total_ms, self.player_moves)

    def opponent_average(self) -> str:
        return format_average_move_time(self.opponent_total_ms, self.opponent_moves)


def format_average_move_time(total_ms: int, moves: int) -> str:
    """
    Render an average move time like "2.4sec".

    The average is truncated to whole milliseconds, then rounded half-up to
    a tenth of a second. Returns UNKNOWN_MOVE_TIME when no moves were timed.
    """
    if moves == 0:
        return UNKNOWN_MOVE_TIME
    seconds = Decimal(total_ms // moves / 1000.0)
    return f"{seconds.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}sec"


def scan_move_timing(
    moves: Iterable[MoveRecord],
    is_user_white: bool,
    premove_threshold_ms: int = PREMOVE_THRESHOLD_MS,
    skipped_plies: int = SKIPPED_PLIES,
) -> MoveTimingStats:
    """
    Count premoves and sum move times for both sides.

    Args:
        moves: Moves in play order
        is_user_white: True if the user had the white pieces
        premove_threshold_ms: Moves at or under this elapsed time are premoves
        skipped_plies: Leading plies to ignore regardless of their timing

    Returns:
        MoveTimingStats for the user ("player") and the opponent
    """
    stats = MoveTimingStats()

    for ply, move in enumerate(moves):
        if ply < skipped_plies or not move.time_taken:
            continue

        elapsed = move.time_taken[0]
        is_premove = elapsed <= premove_threshold_ms

        if move.is_white == is_user_white:
            if is_premove:
                stats.player_premoves += 1
            stats.player_moves += 1
            stats.player_total_ms += elapsed
        else:
            if is_premove:
                stats.opponent_premoves += 1
            stats.opponent_moves += 1
            stats.opponent_total_ms += elapsed

    return stats
