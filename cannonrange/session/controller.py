"""Range session state machine.

One controller owns one target, one session record and at most one projectile
in flight. An external scheduler drives it::

    ready --request_launch--> firing --advance (retired)--> result
      ^                                                       |
      +------------------acknowledge_result-------------------+

Every operation returns the list of events it emitted. Calls made in the wrong
state are ignored and return an empty list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ..config import RangeConfig
from ..models import ProjectileView, RangeFrame, SessionView, TargetView
from ..sim.projectile import Point, Projectile
from ..sim.trajectory import launch, rest_projectile, step
from .feedback import miss_margin
from .target import ShotOutcome, Target, classify_shot, spawn_target

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    READY = "ready"
    FIRING = "firing"
    RESULT = "result"


@dataclass
class SessionRecord:
    max_hits: int
    hits: int = 0
    attempts: int = 0
    status: SessionStatus = SessionStatus.READY
    last_outcome: ShotOutcome = ShotOutcome.NONE
    # Trail of the most recent hit, kept until the next hit replaces it.
    ghost_trail: tuple[Point, ...] = ()

    @property
    def complete(self) -> bool:
        return self.hits >= self.max_hits


@dataclass
class ShotRecord:
    attempt: int
    angle_deg: float
    power: float
    outcome: ShotOutcome = ShotOutcome.NONE
    final_pos: tuple[float, float] | None = None
    distance: float | None = None
    ticks: int = 0
    trail: tuple[Point, ...] = field(default_factory=tuple, repr=False)

    def to_dict(self) -> dict:
        return {
            "attempt": self.attempt,
            "angle_deg": self.angle_deg,
            "power": self.power,
            "outcome": self.outcome.value,
            "final_pos": list(self.final_pos) if self.final_pos is not None else None,
            "distance": self.distance,
            "ticks": self.ticks,
        }


CompletionHook = Callable[[SessionRecord], None]


class RangeController:
    def __init__(
        self,
        config: RangeConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        on_complete: CompletionHook | None = None,
    ) -> None:
        self.config = config or RangeConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.on_complete = on_complete

        self.tick = 0
        self.session: SessionRecord
        self.projectile: Projectile
        self.target: Target
        self.shots: list[ShotRecord]
        self._replay: list[dict] | None

        self.new_session()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def request_launch(self, angle_deg: float, power: float) -> list[dict]:
        s = self.session
        if s.status is not SessionStatus.READY:
            logger.warning(f"Launch ignored: session is {s.status.value}")
            return []
        if s.hits >= s.max_hits:
            logger.warning("Launch ignored: session already complete")
            return []

        self.projectile = launch(angle_deg, power, self.config)
        s.attempts += 1
        s.last_outcome = ShotOutcome.NONE
        s.status = SessionStatus.FIRING
        self.shots.append(ShotRecord(attempt=s.attempts, angle_deg=float(angle_deg), power=float(power)))
        logger.debug(f"Shot {s.attempts} launched at {angle_deg} deg, power {power}")

        events = [{"type": "launch", "attempt": s.attempts, "angle_deg": float(angle_deg), "power": float(power)}]
        self._record(events)
        return events

    def advance(self) -> list[dict]:
        s = self.session
        if s.status is not SessionStatus.FIRING:
            logger.warning(f"Advance ignored: session is {s.status.value}")
            return []

        self.projectile = step(self.projectile, self.config)
        self.tick += 1
        shot = self.shots[-1]
        shot.ticks += 1

        events: list[dict] = []
        if not self.projectile.active:
            events.append(self._resolve(shot))
        self._record(events)
        return events

    def acknowledge_result(self) -> list[dict]:
        s = self.session
        if s.status is not SessionStatus.RESULT:
            logger.warning(f"Acknowledge ignored: session is {s.status.value}")
            return []

        scored = s.last_outcome is ShotOutcome.HIT
        if scored:
            s.hits += 1
        self.projectile = rest_projectile(self.config)
        s.last_outcome = ShotOutcome.NONE

        s.status = SessionStatus.READY

        events: list[dict] = [{"type": "acknowledge", "scored": scored, "hits": s.hits}]
        completed = scored and s.hits == s.max_hits
        if completed:
            logger.info(f"Session complete: {s.hits}/{s.max_hits} hits in {s.attempts} attempts")
            events.append({"type": "session_complete", "hits": s.hits, "attempts": s.attempts})
        self._record(events)

        # The hook may call new_session() to replay; nothing below may touch state.
        if completed and self.on_complete is not None:
            self.on_complete(s)
        return events

    def new_session(self) -> list[dict]:
        self.session = SessionRecord(max_hits=self.config.max_hits)
        self.target = spawn_target(self.config.target, self.rng)
        self.projectile = rest_projectile(self.config)
        self.shots = []
        self._replay = [] if self.config.record_replay else None
        logger.info(f"New session: target at x={self.target.x:.1f}, y={self.target.y:.1f}")

        events = [{"type": "new_session", "target": [self.target.x, self.target.y]}]
        self._record(events)
        return events

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def complete(self) -> bool:
        return self.session.complete

    def snapshot(self) -> RangeFrame:
        s = self.session
        p = self.projectile
        margin = None
        if s.last_outcome is ShotOutcome.MISS and self.shots and self.shots[-1].distance is not None:
            margin = miss_margin(self.shots[-1].distance, self.target.hit_radius)
        return RangeFrame(
            tick=self.tick,
            projectile=ProjectileView(
                pos=(p.x, p.y),
                vel=(float(p.vel[0]), float(p.vel[1])),
                active=p.active,
                trail=list(p.trail),
            ),
            target=TargetView(
                center=self.target.center,
                visual_radius=self.target.visual_radius,
                hit_radius=self.target.hit_radius,
            ),
            session=SessionView(
                status=s.status.value,
                last_outcome=s.last_outcome.value,
                ghost_trail=list(s.ghost_trail),
                hits=s.hits,
                max_hits=s.max_hits,
                attempts=s.attempts,
                complete=s.complete,
                miss_margin=margin,
            ),
        )

    def get_replay(self) -> dict | None:
        if self._replay is None:
            return None
        return {"config": self.config.to_dict(), "frames": self._replay}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, shot: ShotRecord) -> dict:
        s = self.session
        p = self.projectile
        outcome, dist = classify_shot(p.pos, self.target)

        s.last_outcome = outcome
        if outcome is ShotOutcome.HIT:
            s.ghost_trail = p.trail
        s.status = SessionStatus.RESULT

        shot.outcome = outcome
        shot.final_pos = (p.x, p.y)
        shot.distance = dist
        shot.trail = p.trail
        logger.debug(f"Shot {shot.attempt} {outcome.value} after {shot.ticks} ticks, distance {dist:.2f}")

        event = {
            "type": "resolve",
            "attempt": shot.attempt,
            "outcome": outcome.value,
            "pos": [p.x, p.y],
            "distance": dist,
            "ticks": shot.ticks,
        }
        if outcome is ShotOutcome.MISS:
            event["miss_margin"] = miss_margin(dist, self.target.hit_radius)
        return event

    def _record(self, events: list[dict]) -> None:
        if self._replay is None:
            return
        frame = self.snapshot().model_dump(mode="json")
        frame["events"] = events
        self._replay.append(frame)
