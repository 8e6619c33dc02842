from django.urls import path
from .views import (
    health,
    submit_score_view,
    estimate_score,
    get_level_leaderboard,
    get_global_leaderboard,
    get_player_scores,
    get_stats,
    get_levels,
    get_solution,
    get_hint_view,
)

urlpatterns = [
    path('health', health, name='health'),
    path('scores', submit_score_view, name='submit-score'),
    path('scores/estimate', estimate_score, name='estimate-score'),
    path('scores/leaderboard', get_global_leaderboard, name='global-leaderboard'),
    path('scores/leaderboard/<int:level>', get_level_leaderboard, name='level-leaderboard'),
    path('scores/player/<str:player_name>', get_player_scores, name='player-scores'),
    path('scores/stats', get_stats, name='score-stats'),
    path('levels', get_levels, name='levels'),
    path('levels/<int:level>/solution', get_solution, name='level-solution'),
    path('levels/<int:level>/hint', get_hint_view, name='level-hint'),
]
