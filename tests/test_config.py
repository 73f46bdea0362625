from pathlib import Path

from boxtracker.config import FullConfig, load_config
from boxtracker.state import TeamPair

ROOT = Path(__file__).resolve().parents[1]


def test_defaults():
    cfg = FullConfig()
    assert cfg.default_game_id == "main"
    assert cfg.default_team_pair() is None
    assert cfg.storage.prefix == "sbt_"
    assert cfg.share.param == "data"


def test_load_shipped_config():
    cfg = load_config(str(ROOT / "configs" / "default.yaml"))
    assert cfg.default_team_pair() == TeamPair(
        "Seahawks", "Patriots", "Superbowl LX", "/logo_seahawks.png", "/logo_patriots.png"
    )
    assert cfg.share.projection == "shared"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == FullConfig()
