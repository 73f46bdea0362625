from __future__ import annotations
from pydantic import BaseModel
from typing import Literal, Optional
import yaml

from boxtracker.constants import DEFAULT_GAME_ID, DEFAULT_SHARE_PARAM, DEFAULT_STORAGE_PREFIX
from boxtracker.state import TeamPair

class TeamsCfg(BaseModel):
    teamA: str
    teamB: str
    label: Optional[str] = None
    logoA: Optional[str] = None
    logoB: Optional[str] = None

    def to_team_pair(self) -> TeamPair:
        return TeamPair(self.teamA, self.teamB, self.label, self.logoA, self.logoB)

class StorageCfg(BaseModel):
    prefix: str = DEFAULT_STORAGE_PREFIX
    path: str = "data/boxtracker.json"

class ShareCfg(BaseModel):
    param: str = DEFAULT_SHARE_PARAM
    projection: Literal["full", "shared", "pools"] = "shared"

class FullConfig(BaseModel):
    default_game_id: str = DEFAULT_GAME_ID
    default_teams: Optional[TeamsCfg] = None
    storage: StorageCfg = StorageCfg()
    share: ShareCfg = ShareCfg()

    def default_team_pair(self) -> Optional[TeamPair]:
        return self.default_teams.to_team_pair() if self.default_teams else None

def load_config(path: str) -> FullConfig:
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return FullConfig.model_validate(raw)
