"""Entry point: python -m cannonrange 45:20 40:18 ..."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from .config import RangeConfig
from .loop import TickLoop
from .session.controller import RangeController, SessionRecord
from .session.feedback import angle_label, power_label
from .settings import settings

logger = logging.getLogger("cannonrange")


def parse_shot(text: str) -> tuple[float, float]:
    try:
        angle, power = text.split(":")
        return float(angle), float(power)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected ANGLE:POWER, got {text!r}") from e


def build_config(args: argparse.Namespace) -> RangeConfig:
    cfg = RangeConfig(seed=args.seed, record_replay=args.record)
    if args.target_x is not None:
        cfg = replace(cfg, target=replace(cfg.target, x_band=(args.target_x, args.target_x)))
    return cfg


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless projectile range session")
    parser.add_argument("shots", nargs="+", type=parse_shot, metavar="ANGLE:POWER")
    parser.add_argument("--seed", type=int, default=settings.SEED)
    parser.add_argument("--target-x", type=float, default=None, help="Pin the target x instead of randomizing")
    parser.add_argument("--max-ticks", type=int, default=settings.MAX_TICKS_PER_SHOT)
    parser.add_argument("--record", action="store_true", help="Record replay frames to JSON")
    parser.add_argument("--out", type=Path, default=settings.REPLAY_DIR, help="Output directory for replays")
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL)
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    def announce(record: SessionRecord) -> None:
        print(f"session complete: {record.hits}/{record.max_hits} hits in {record.attempts} attempts")

    ctrl = RangeController(build_config(args), on_complete=announce)
    loop = TickLoop(ctrl, max_ticks=args.max_ticks)
    print(f"target at x={ctrl.target.x:.1f} y={ctrl.target.y:.1f} (hit radius {ctrl.target.hit_radius:g})")

    for angle, power in args.shots:
        if ctrl.complete:
            logger.info("Session already complete, ignoring remaining shots")
            break
        events = loop.play_shot(angle, power)
        resolved = next((e for e in events if e["type"] == "resolve"), None)
        if resolved is None:
            continue
        line = (
            f"shot {resolved['attempt']}: {angle:g} deg ({angle_label(angle)}), "
            f"power {power:g} ({power_label(power)}) -> {resolved['outcome']}"
        )
        if "miss_margin" in resolved:
            line += f" (off by {resolved['miss_margin']})"
        print(line)

    s = ctrl.session
    print(f"hits {s.hits}/{s.max_hits}, attempts {s.attempts}")

    replay = ctrl.get_replay()
    if args.record and replay is not None:
        args.out.mkdir(parents=True, exist_ok=True)
        path = args.out / f"replay_seed_{args.seed if args.seed is not None else 'none'}.json"
        path.write_text(json.dumps(replay), encoding="utf-8")
        logger.info(f"Wrote replay to {path}")


if __name__ == "__main__":
    main()
