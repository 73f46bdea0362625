"""
Pool tracker session: the caller that ties storage, share links, migration and
win detection together.

State is rebuilt in full on every ``load`` and written back slice by slice
(``<prefix>teams``, ``<prefix>score``, ``<prefix>pools``) after each change.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Dict, Iterable, Optional, Sequence, Union

from boxtracker.codec.share import DecodeFailure, Projection, build_share_url, consume_share_url, decode, encode
from boxtracker.config import FullConfig
from boxtracker.constants import DIGIT_MAX, DIGIT_MIN, STATE_SLICES, TEAM_SLOTS
from boxtracker.errors import InvalidPoolError, InvalidScoreError, InvalidTeamsError, UnknownTeamError
from boxtracker.migration.schema import migrate
from boxtracker.rules.scoring import PoolResult, evaluate_state
from boxtracker.state import AppState, NumberPair, Pool, Score, TeamPair
from boxtracker.storage.store import KeyValueStore

_logger = logging.getLogger(__name__)

PairLike = Union[NumberPair, Sequence[int]]


class PoolTracker:
    def __init__(self, store: KeyValueStore, config: Optional[FullConfig] = None):
        self.store = store
        self.config = config or FullConfig()
        self.state: AppState = self._migrate(None)

    # --- loading / saving ----------------------------------------------------

    def _migrate(self, raw) -> AppState:
        return migrate(
            raw,
            default_teams=self.config.default_team_pair(),
            default_game_id=self.config.default_game_id,
        )

    def _key(self, name: str) -> str:
        return f"{self.config.storage.prefix}{name}"

    def _read_stored(self) -> dict:
        raw = {}
        for name in STATE_SLICES:
            blob = self.store.get(self._key(name))
            if blob is None:
                continue
            try:
                raw[name] = json.loads(blob)
            except ValueError:
                _logger.warning("Stored %s is not valid JSON; ignoring it", name)
        return raw

    def load(self, url: Optional[str] = None) -> Optional[str]:
        """
        Rebuild state from a share link in `url` or from storage.

        Returns `url` with the share parameter removed, so a caller that rewrites
        its location never imports the same link twice.
        """
        stored = self._read_stored()
        token, cleaned = (None, url) if url is None else consume_share_url(url, self.config.share.param)
        if token is not None:
            decoded = decode(token)
            if isinstance(decoded, DecodeFailure):
                _logger.warning("Could not read shared link (%s); using saved state", decoded.reason)
            else:
                # slices missing from the token keep local values
                shared = {k: v for k, v in decoded.items() if k in STATE_SLICES}
                self.state = self._migrate({**stored, **shared})
                self.save()
                _logger.info("Imported %d pools from shared link", len(self.state.pools))
                return cleaned
        self.state = self._migrate(stored)
        return cleaned

    def save(self) -> None:
        data = self.state.to_dict()
        for name in STATE_SLICES:
            self.store.set(self._key(name), json.dumps(data[name]))

    # --- queries -------------------------------------------------------------

    @property
    def game_id(self) -> str:
        return self.config.default_game_id

    @property
    def needs_onboarding(self) -> bool:
        return self.state.teams_for(self.game_id) is None

    def results(self) -> Dict[str, PoolResult]:
        return evaluate_state(self.state)

    def share_token(self, projection: Optional[Projection] = None) -> str:
        return encode(self.state, projection or Projection(self.config.share.projection))

    def share_url(self, base_url: str, projection: Optional[Projection] = None) -> str:
        return build_share_url(base_url, self.share_token(projection), self.config.share.param)

    # --- mutations -----------------------------------------------------------

    def add_pool(self, pairs: Iterable[PairLike], notes: str = "", game_id: Optional[str] = None) -> Pool:
        game_id = game_id or self.game_id
        if game_id not in self.state.score:
            raise InvalidPoolError(f"unknown game {game_id!r}")
        checked = tuple(_number_pair(p) for p in pairs)
        if not checked:
            raise InvalidPoolError("a pool needs at least one number pair")
        pool = Pool(id=self._new_pool_id(), pairs=checked, notes=notes, gameId=game_id)
        self.state = self.state.with_pool(pool)
        self.save()
        return pool

    def delete_pool(self, pool_id: str) -> bool:
        if pool_id not in self.state.pool_ids():
            return False
        self.state = self.state.without_pool(pool_id)
        self.save()
        return True

    def set_score(self, team: str, value: int, game_id: Optional[str] = None) -> Score:
        if team not in TEAM_SLOTS:
            raise UnknownTeamError(team)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidScoreError(f"score must be a non-negative integer, got {value!r}")
        game_id = game_id or self.game_id
        current = self.state.score_for(game_id)
        score = Score(value, current.teamB) if team == "teamA" else Score(current.teamA, value)
        self.state = self.state.with_score(game_id, score)
        self.save()
        return score

    def set_teams(self, team_a: str, team_b: str, game_id: Optional[str] = None,
                  label: Optional[str] = None) -> TeamPair:
        if not (team_a.strip() and team_b.strip()):
            raise InvalidTeamsError("both team names are required")
        teams = TeamPair(team_a.strip(), team_b.strip(), label)
        self.state = self.state.with_teams(game_id or self.game_id, teams)
        self.save()
        return teams

    def reset(self) -> None:
        """Clear scores and pools. Teams are kept."""
        self.state = AppState(
            teams=dict(self.state.teams),
            score={gid: Score() for gid in self.state.score},
            pools=(),
        )
        self.store.remove(self._key("score"))
        self.store.remove(self._key("pools"))

    def _new_pool_id(self) -> str:
        taken = set(self.state.pool_ids())
        stamp = int(time.time() * 1000)
        while str(stamp) in taken:
            stamp += 1
        return str(stamp)


def _number_pair(value: PairLike) -> NumberPair:
    try:
        a, b = (value.a, value.b) if isinstance(value, NumberPair) else value
    except (TypeError, ValueError):
        raise InvalidPoolError(f"expected a pair of digits, got {value!r}") from None
    for digit in (a, b):
        if isinstance(digit, bool) or not isinstance(digit, int) or not DIGIT_MIN <= digit <= DIGIT_MAX:
            raise InvalidPoolError(f"pair digits must be 0-9, got {(a, b)!r}")
    return NumberPair(a, b)
