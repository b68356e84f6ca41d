# Game results and move analysis
from .models import GameResult, MoveRecord, Outcome, StatsConfig, Variant, VsStats
from .finished_game import BaseFinishedGame, PgnFinishedGame, read_pgn_games
from .result_store import ResultStore
from .recorder import ResultRecorder
from .stats_collector import StatsCollector
from .move_timing import MoveTimingStats, scan_move_timing

__all__ = [
    "GameResult",
    "MoveRecord",
    "Outcome",
    "StatsConfig",
    "Variant",
    "VsStats",
    "BaseFinishedGame",
    "PgnFinishedGame",
    "read_pgn_games",
    "ResultStore",
    "ResultRecorder",
    "StatsCollector",
    "MoveTimingStats",
    "scan_move_timing",
]
