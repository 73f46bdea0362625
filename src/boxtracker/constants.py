from __future__ import annotations

# Game identity
DEFAULT_GAME_ID = "main"
TEAM_SLOTS = ("teamA", "teamB")

# Squares grid
DIGIT_MIN = 0
DIGIT_MAX = 9
GRID_SIZE = 10

# Single scoring plays considered for "close" (label, points)
FIELD_GOAL_POINTS = 3
TOUCHDOWN_POINTS = 7
SCORING_PLAYS = (("FG", FIELD_GOAL_POINTS), ("TD", TOUCHDOWN_POINTS))

# Persisted slices, one blob each
STATE_SLICES = ("teams", "score", "pools")
DEFAULT_STORAGE_PREFIX = "sbt_"
DEFAULT_SHARE_PARAM = "data"
