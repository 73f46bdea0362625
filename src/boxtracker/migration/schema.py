"""
Normalize persisted or shared state blobs into the canonical ``AppState``.

Historical shapes handled here:

- flat legacy score ``{"teamA": 24, "teamB": 14}`` vs nested per-game score
  ``{"<gameId>": {"teamA": .., "teamB": ..}}``
- flat legacy teams ``{"teamA": "..", "teamB": ".."}`` vs nested per-game teams
- pools with or without ``gameId``

``migrate`` is total: any input, including ``None`` or a non-object, yields a
valid state. Whenever a slice is unrecognized it falls back to its default and
logs a warning.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from boxtracker.constants import DEFAULT_GAME_ID, DIGIT_MAX, DIGIT_MIN, TEAM_SLOTS
from boxtracker.state import AppState, NumberPair, Pool, Score, TeamPair

_logger = logging.getLogger(__name__)


def default_state(
    default_teams: Optional[TeamPair] = None,
    default_game_id: str = DEFAULT_GAME_ID,
) -> AppState:
    """Minimal valid state: zeroed score, no pools, default teams if known."""
    teams = {default_game_id: default_teams} if default_teams is not None else {}
    return AppState(teams=teams, score={default_game_id: Score()}, pools=())


def migrate(
    raw: Any,
    *,
    default_teams: Optional[TeamPair] = None,
    default_game_id: str = DEFAULT_GAME_ID,
) -> AppState:
    if isinstance(raw, AppState):
        raw = raw.to_dict()
    if not isinstance(raw, dict):
        _logger.warning("Unrecognized state of type %s; using defaults", type(raw).__name__)
        return default_state(default_teams, default_game_id)

    score = {default_game_id: Score(), **_migrate_score(raw.get("score"), default_game_id)}
    teams = _migrate_teams(raw.get("teams"), default_game_id)
    if default_game_id not in teams and default_teams is not None:
        teams[default_game_id] = default_teams
    pools = _migrate_pools(raw.get("pools"), default_game_id)

    # a game referenced anywhere must own a score
    for game_id in list(teams) + [p.gameId for p in pools]:
        if game_id not in score:
            _logger.debug("Registering game %r with a zero score", game_id)
            score[game_id] = Score()

    return AppState(teams=teams, score=score, pools=tuple(pools))


# --- score -------------------------------------------------------------------

def _migrate_score(raw: Any, game_id: str) -> Dict[str, Score]:
    match raw:
        case None | {} if not raw:
            return {}
        case dict() if all(isinstance(v, dict) for v in raw.values()):
            return {str(gid): _score(value) for gid, value in raw.items()}
        case {"teamA": _} | {"teamB": _}:
            # legacy single-game score
            return {game_id: _score(raw)}
        case _:
            _logger.warning("Unrecognized score shape; using a zero score")
            return {}


def _score(raw: Dict[str, Any]) -> Score:
    points = [_as_int(raw.get(slot)) for slot in TEAM_SLOTS]
    return Score(*(p if p is not None and p >= 0 else 0 for p in points))


# --- teams -------------------------------------------------------------------

def _migrate_teams(raw: Any, game_id: str) -> Dict[str, TeamPair]:
    match raw:
        case None | {} if not raw:
            return {}
        case {"teamA": str(), "teamB": str()}:
            pair = _team_pair(raw)
            return {game_id: pair} if pair is not None else {}
        case dict() if all(isinstance(v, dict) for v in raw.values()):
            teams = {}
            for gid, value in raw.items():
                pair = _team_pair(value)
                if pair is not None:
                    teams[str(gid)] = pair
            return teams
        case _:
            _logger.warning("Unrecognized teams shape; ignoring")
            return {}


def _team_pair(raw: Dict[str, Any]) -> Optional[TeamPair]:
    team_a, team_b = raw.get("teamA"), raw.get("teamB")
    if not (isinstance(team_a, str) and isinstance(team_b, str)):
        return None
    if not (team_a.strip() and team_b.strip()):
        return None
    extras = [raw.get(k) for k in ("label", "logoA", "logoB")]
    return TeamPair(team_a, team_b, *(v if isinstance(v, str) else None for v in extras))


# --- pools -------------------------------------------------------------------

def _migrate_pools(raw: Any, game_id: str) -> List[Pool]:
    if not isinstance(raw, list):
        if raw is not None:
            _logger.warning("Pools is a %s, not a list; starting empty", type(raw).__name__)
        return []

    pools: List[Pool] = []
    seen = set()
    for index, item in enumerate(raw):
        pool = _pool(item, index, game_id)
        if pool is None:
            _logger.warning("Dropping malformed pool at index %d", index)
            continue
        pool_id = _unique_id(pool.id, seen)
        if pool_id != pool.id:
            _logger.warning("Duplicate pool id %r renamed to %r", pool.id, pool_id)
            pool = replace(pool, id=pool_id)
        seen.add(pool_id)
        pools.append(pool)
    return pools


def _pool(raw: Any, index: int, game_id: str) -> Optional[Pool]:
    match raw:
        case {"pairs": list() as raw_pairs}:
            pairs = tuple(p for p in map(_pair, raw_pairs) if p is not None)
        case _:
            return None
    if not pairs:
        return None

    pool_id = raw.get("id")
    if isinstance(pool_id, int) and not isinstance(pool_id, bool):
        pool_id = str(pool_id)
    if not isinstance(pool_id, str) or not pool_id:
        pool_id = f"pool-{index}"

    notes = raw.get("notes")
    if not isinstance(notes, str):
        notes = "" if notes is None else str(notes)

    pool_game = raw.get("gameId")
    if isinstance(pool_game, int) and not isinstance(pool_game, bool):
        pool_game = str(pool_game)
    if not isinstance(pool_game, str) or not pool_game:
        pool_game = game_id

    return Pool(id=pool_id, pairs=pairs, notes=notes, gameId=pool_game)


def _pair(raw: Any) -> Optional[NumberPair]:
    match raw:
        case {"a": a, "b": b}:
            a, b = _as_int(a), _as_int(b)
        case _:
            return None
    if a is None or b is None:
        return None
    if not (DIGIT_MIN <= a <= DIGIT_MAX and DIGIT_MIN <= b <= DIGIT_MAX):
        return None
    return NumberPair(a, b)


def _unique_id(pool_id: str, seen: set) -> str:
    if pool_id not in seen:
        return pool_id
    n = 2
    while f"{pool_id}-{n}" in seen:
        n += 1
    return f"{pool_id}-{n}"


# --- helpers -----------------------------------------------------------------

def _as_int(value: Any) -> Optional[int]:
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str() if value.strip().isascii() and value.strip().isdigit():
            return int(value.strip())
        case _:
            return None
