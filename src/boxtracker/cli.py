from __future__ import annotations

import argparse
import logging
import re
import sys

from boxtracker.codec.share import Projection
from boxtracker.config import FullConfig, load_config
from boxtracker.errors import BoxTrackerError
from boxtracker.storage.store import JsonFileStore
from boxtracker.tracker import PoolTracker

PAIR_RE = re.compile(r"^\s*(\d)\s*[-,:]\s*(\d)\s*$")


def parse_pair(text: str) -> tuple[int, int]:
    m = PAIR_RE.match(text)
    if not m:
        raise argparse.ArgumentTypeError(f"expected A-B with digits 0-9, got {text!r}")
    return int(m.group(1)), int(m.group(2))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="boxtracker", description="Track squares pools against a live score.")
    ap.add_argument("--config", default=None, help="YAML config (defaults built in)")
    ap.add_argument("--store", default=None, help="JSON state file (overrides storage.path)")
    ap.add_argument("--log-level", default="WARNING")
    sub = ap.add_subparsers(dest="cmd", required=True)

    sub.add_parser("status", help="show score and pool results")

    p = sub.add_parser("add", help="add a pool")
    p.add_argument("pairs", nargs="+", type=parse_pair, metavar="A-B")
    p.add_argument("--notes", default="")
    p.add_argument("--game", default=None)

    p = sub.add_parser("delete", help="delete a pool by id")
    p.add_argument("pool_id")

    p = sub.add_parser("score", help="set one team's points")
    p.add_argument("team", choices=["teamA", "teamB"])
    p.add_argument("points", type=int)
    p.add_argument("--game", default=None)

    p = sub.add_parser("teams", help="name the two teams")
    p.add_argument("team_a")
    p.add_argument("team_b")
    p.add_argument("--label", default=None)
    p.add_argument("--game", default=None)

    p = sub.add_parser("share", help="print a share link")
    p.add_argument("--base-url", default="http://localhost:5173/")
    p.add_argument("--projection", choices=[x.value for x in Projection], default=None)

    p = sub.add_parser("import", help="load state from a share link")
    p.add_argument("url")

    sub.add_parser("reset", help="clear score and pools")
    return ap


def print_status(tracker: PoolTracker) -> None:
    state = tracker.state
    if tracker.needs_onboarding:
        print("No teams set; run `boxtracker teams TEAM_A TEAM_B` first.")
    results = tracker.results()
    for game_id in state.game_ids:
        teams = state.teams_for(game_id)
        score = state.score_for(game_id)
        name_a, name_b = (teams.teamA, teams.teamB) if teams else ("teamA", "teamB")
        win_a, win_b = score.digits()
        print(f"[{game_id}] {name_a} {score.teamA} - {score.teamB} {name_b}   winning: {win_a}-{win_b}")
        pools = [p for p in state.pools if p.gameId == game_id]
        if not pools:
            print("  no pools")
        for pool in pools:
            r = results[pool.id]
            flag = "WINNING" if r.winning else ("CLOSE " + ", ".join(r.close_reasons) if r.close else "")
            nums = " ".join(f"{pr.pair.a}-{pr.pair.b}{'*' if pr.winning else ''}" for pr in r.pairs)
            print(f"  {pool.id}  {nums}  {flag}".rstrip())
            if pool.notes:
                print(f"      {pool.notes}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config) if args.config else FullConfig()
    tracker = PoolTracker(JsonFileStore(args.store or cfg.storage.path), cfg)

    try:
        if args.cmd == "import":
            tracker.load(args.url)
        else:
            tracker.load()

        if args.cmd == "add":
            pool = tracker.add_pool(args.pairs, notes=args.notes, game_id=args.game)
            print("Added pool", pool.id)
        elif args.cmd == "delete":
            if not tracker.delete_pool(args.pool_id):
                print(f"No pool {args.pool_id!r}", file=sys.stderr)
                return 1
            print("Deleted pool", args.pool_id)
        elif args.cmd == "score":
            tracker.set_score(args.team, args.points, game_id=args.game)
        elif args.cmd == "teams":
            tracker.set_teams(args.team_a, args.team_b, game_id=args.game, label=args.label)
        elif args.cmd == "share":
            projection = Projection(args.projection) if args.projection else None
            print(tracker.share_url(args.base_url, projection))
            return 0
        elif args.cmd == "reset":
            tracker.reset()
            print("Cleared score and pools")
            return 0
    except BoxTrackerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print_status(tracker)
    return 0


if __name__ == "__main__":
    sys.exit(main())
