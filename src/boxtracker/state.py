from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from boxtracker.constants import DEFAULT_GAME_ID


@dataclass(frozen=True, slots=True)
class TeamPair:
    teamA: str
    teamB: str
    label: Optional[str] = None
    logoA: Optional[str] = None
    logoB: Optional[str] = None

    def name(self, slot: str) -> str:
        return self.teamA if slot == "teamA" else self.teamB

    def to_dict(self) -> dict:
        out = {"teamA": self.teamA, "teamB": self.teamB}
        for key in ("label", "logoA", "logoB"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True, slots=True)
class Score:
    teamA: int = 0          # point totals, >= 0
    teamB: int = 0

    def digits(self) -> Tuple[int, int]:
        return self.teamA % 10, self.teamB % 10

    def points(self, slot: str) -> int:
        return self.teamA if slot == "teamA" else self.teamB

    def to_dict(self) -> dict:
        return {"teamA": self.teamA, "teamB": self.teamB}


@dataclass(frozen=True, slots=True)
class NumberPair:
    a: int                  # teamA last digit, 0..9
    b: int                  # teamB last digit, 0..9

    def to_dict(self) -> dict:
        return {"a": self.a, "b": self.b}


@dataclass(frozen=True, slots=True)
class Pool:
    id: str
    pairs: Tuple[NumberPair, ...]
    notes: str = ""
    gameId: str = DEFAULT_GAME_ID

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pairs": [p.to_dict() for p in self.pairs],
            "notes": self.notes,
            "gameId": self.gameId,
        }


@dataclass(frozen=True, slots=True)
class AppState:
    teams: Mapping[str, TeamPair] = field(default_factory=dict)
    score: Mapping[str, Score] = field(default_factory=lambda: {DEFAULT_GAME_ID: Score()})
    pools: Tuple[Pool, ...] = ()

    @property
    def game_ids(self) -> Tuple[str, ...]:
        return tuple(self.score)

    def teams_for(self, game_id: str) -> Optional[TeamPair]:
        return self.teams.get(game_id)

    def score_for(self, game_id: str) -> Score:
        return self.score.get(game_id, Score())

    def pool_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.pools)

    def with_pool(self, pool: Pool) -> "AppState":
        # most recent first
        return replace(self, pools=(pool,) + self.pools)

    def without_pool(self, pool_id: str) -> "AppState":
        return replace(self, pools=tuple(p for p in self.pools if p.id != pool_id))

    def with_score(self, game_id: str, score: Score) -> "AppState":
        return replace(self, score={**self.score, game_id: score})

    def with_teams(self, game_id: str, teams: TeamPair) -> "AppState":
        score = self.score if game_id in self.score else {**self.score, game_id: Score()}
        return replace(self, teams={**self.teams, game_id: teams}, score=score)

    def to_dict(self) -> dict:
        return {
            "teams": {gid: t.to_dict() for gid, t in self.teams.items()},
            "score": {gid: s.to_dict() for gid, s in self.score.items()},
            "pools": [p.to_dict() for p in self.pools],
        }
