# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cannonrange import RangeConfig, RangeController, TickLoop


def run_session(seed: int, max_shots: int, record: bool) -> tuple[dict, dict | None]:
    ctrl = RangeController(RangeConfig(seed=seed, record_replay=record))
    loop = TickLoop(ctrl)
    rng = np.random.default_rng(seed)

    lo_a, hi_a = ctrl.config.launcher.angle_range_deg
    lo_p, hi_p = ctrl.config.launcher.power_range
    for _ in range(max_shots):
        if ctrl.complete:
            break
        loop.play_shot(float(rng.uniform(lo_a, hi_a)), float(rng.uniform(lo_p, hi_p)))

    s = ctrl.session
    result = {"seed": seed, "target_x": round(ctrl.target.x, 1), "hits": s.hits, "attempts": s.attempts}
    return result, ctrl.get_replay()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--sessions", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--shots", type=int, default=10, help="Shot budget per session")
    parser.add_argument("--record", action="store_true", help="Record replay frames to JSON")
    parser.add_argument("--out", type=str, default="runs/smoke", help="Output directory for replays")
    args = parser.parse_args()

    out_dir = Path(args.out)
    if args.record:
        out_dir.mkdir(parents=True, exist_ok=True)

    results = []
    for i in range(args.sessions):
        seed = args.seed + i
        result, replay = run_session(seed, args.shots, args.record)
        results.append(result)
        print(f"session {i}: {result}")

        if args.record and replay is not None:
            p = out_dir / f"replay_seed_{seed}.json"
            p.write_text(json.dumps(replay), encoding="utf-8")

    total_hits = sum(r["hits"] for r in results)
    total_attempts = sum(r["attempts"] for r in results)
    print(f"summary: {total_hits} hits / {total_attempts} attempts over {len(results)} sessions")


if __name__ == "__main__":
    main()
