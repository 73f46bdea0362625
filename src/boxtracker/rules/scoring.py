from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from boxtracker.constants import GRID_SIZE, SCORING_PLAYS, TEAM_SLOTS
from boxtracker.state import AppState, NumberPair, Pool, Score, TeamPair


@dataclass(frozen=True, slots=True)
class PairResult:
    pair: NumberPair
    winning: bool
    close: bool
    close_reasons: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PoolResult:
    pool_id: str
    winning: bool
    close: bool
    close_reasons: Tuple[str, ...]   # first-occurrence order, no repeats
    pairs: Tuple[PairResult, ...]


def winning_digits(score: Score) -> Tuple[int, int]:
    return score.digits()


def close_reasons(pair: NumberPair, score: Score, teams: Optional[TeamPair] = None) -> Tuple[str, ...]:
    """
    Single scoring plays (FG=3, TD=7) by one team that would turn `pair` into the
    winner while the other team's digit already matches. Empty for the current winner.
    """
    win = dict(zip(TEAM_SLOTS, score.digits()))
    want = {"teamA": pair.a, "teamB": pair.b}
    if want == win:
        return ()
    reasons: List[str] = []
    for slot, other in (("teamA", "teamB"), ("teamB", "teamA")):
        if want[other] != win[other]:
            continue
        name = teams.name(slot) if teams is not None else slot
        for label, points in SCORING_PLAYS:
            if (score.points(slot) + points) % 10 == want[slot]:
                reasons.append(f"{name} {label}")
    return tuple(reasons)


def evaluate_pair(pair: NumberPair, score: Score, teams: Optional[TeamPair] = None) -> PairResult:
    winning = (pair.a, pair.b) == score.digits()
    reasons = () if winning else close_reasons(pair, score, teams)
    return PairResult(pair, winning, bool(reasons), reasons)


def evaluate_pool(pool: Pool, score: Score, teams: Optional[TeamPair] = None) -> PoolResult:
    pairs = tuple(evaluate_pair(p, score, teams) for p in pool.pairs)
    winning = any(r.winning for r in pairs)
    reasons = tuple(dict.fromkeys(reason for r in pairs for reason in r.close_reasons))
    close = not winning and any(r.close for r in pairs)
    return PoolResult(pool.id, winning, close, reasons, pairs)


def evaluate(pools: Sequence[Pool], score: Score, teams: Optional[TeamPair] = None) -> List[PoolResult]:
    return [evaluate_pool(p, score, teams) for p in pools]


def evaluate_state(state: AppState) -> Dict[str, PoolResult]:
    """Every pool against its own game's score and teams, keyed by pool id."""
    return {
        p.id: evaluate_pool(p, state.score_for(p.gameId), state.teams_for(p.gameId))
        for p in state.pools
    }


def square_masks(score: Score) -> Dict[str, np.ndarray]:
    """10x10 boolean grids indexed [a, b] for the winning and close squares."""
    winning = np.zeros((GRID_SIZE, GRID_SIZE), dtype=bool)
    close = np.zeros((GRID_SIZE, GRID_SIZE), dtype=bool)
    win_a, win_b = score.digits()
    winning[win_a, win_b] = True
    for _, points in SCORING_PLAYS:
        close[(score.teamA + points) % 10, win_b] = True
        close[win_a, (score.teamB + points) % 10] = True
    return {"winning": winning, "close": close}
