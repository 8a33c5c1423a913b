"""Ranking and statistics engine."""

from domain.stats.aggregator import (
    PlayerStats,
    calculate_performance,
    compute_stats,
    points_for_position,
    round_half_away_from_zero,
)
from domain.stats.engine import RankingView, StatsEngine
from domain.stats.ranking import (
    GameSummary,
    RankedPlayer,
    get_best_player_for_game,
    get_game_ranking,
    get_games_where_player_is_best,
    get_ranking,
)
from domain.stats.summary import performance_tier

__all__ = [
    "GameSummary",
    "PlayerStats",
    "RankedPlayer",
    "RankingView",
    "StatsEngine",
    "calculate_performance",
    "compute_stats",
    "get_best_player_for_game",
    "get_game_ranking",
    "get_games_where_player_is_best",
    "get_ranking",
    "performance_tier",
    "points_for_position",
    "round_half_away_from_zero",
]
