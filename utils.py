"""Shared utility functions."""

from typing import Optional

# Servers append this to ratings that are estimated rather than earned
PROVISIONAL_MARKER = "E"
PROVISIONAL_RATING = 1600


def parse_opponent_rating(raw: Optional[str]) -> Optional[int]:
    """
    Parse a PGN rating header ("WhiteElo"/"BlackElo").

    A provisional marker anywhere in the value wins over everything else
    and yields PROVISIONAL_RATING. Purely numeric values are parsed.
    Anything else ("", "-", "----", "?") is unknown.

    NOTE: This never raises; malformed ratings degrade to None.
    """
    if not raw:
        return None

    if PROVISIONAL_MARKER in raw:
        return PROVISIONAL_RATING

    if raw.isdecimal():
        return int(raw)

    return None


def names_match(name_a: Optional[str], name_b: Optional[str]) -> bool:
    """Case-insensitive player name comparison."""
    if name_a is None or name_b is None:
        return False
    return name_a.casefold() == name_b.casefold()
