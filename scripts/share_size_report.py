from __future__ import annotations

import argparse
import json

import numpy as np

from boxtracker.codec.share import Projection, encode
from boxtracker.state import AppState, NumberPair, Pool, Score, TeamPair


def make_state(n_pools: int, rng: np.random.Generator) -> AppState:
    pools = []
    for i in range(n_pools):
        digits = rng.integers(0, 10, size=(2, 2))
        pools.append(Pool(
            id=f"{1700000000000 + i}",
            pairs=tuple(NumberPair(int(a), int(b)) for a, b in digits),
            notes=f"Pool {i + 1} - Q1: $50, Q2: $100, Q3: $50, Final: $200. Good luck to everyone involved!",
        ))
    return AppState(
        teams={"main": TeamPair("Kansas City Chiefs", "Philadelphia Eagles")},
        score={"main": Score(24, 14)},
        pools=tuple(pools),
    )


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--pools", type=int, nargs="+", default=[1, 10, 50])
    ap.add_argument("--projection", choices=[x.value for x in Projection], default="full")
    ap.add_argument("--seed", type=int, default=0)
    args = ap.parse_args()

    rng = np.random.default_rng(args.seed)
    print(f"\n== Share token size ({args.projection}) ==\n")
    for n in args.pools:
        state = make_state(n, rng)
        raw = json.dumps(state.to_dict(), separators=(",", ":"))
        token = encode(state, Projection(args.projection))
        print(f"{n:>4} pools  json={len(raw):>6}  token={len(token):>6}  ratio={len(token) / len(raw):.1%}")


if __name__ == "__main__":
    main()
