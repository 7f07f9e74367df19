"""Cooperative tick driver for a RangeController.

Stands in for a display-refresh callback: each iteration is one tick, and
control returns to the caller between ticks only through ``on_frame``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .session.controller import SessionStatus

if TYPE_CHECKING:
    from .models import RangeFrame
    from .session.controller import RangeController

logger = logging.getLogger(__name__)

FrameHook = Callable[["RangeFrame"], None]


class TickLoop:
    def __init__(
        self,
        controller: RangeController,
        *,
        max_ticks: int = 10_000,
        on_frame: FrameHook | None = None,
    ) -> None:
        if max_ticks < 1:
            raise ValueError(f"max_ticks must be >= 1, got {max_ticks}")
        self.controller = controller
        self.max_ticks = max_ticks
        self.on_frame = on_frame

    def run_flight(self) -> list[dict]:
        """Advance until the current shot resolves. No-op unless firing."""
        ctrl = self.controller
        events: list[dict] = []
        ticks = 0
        while ctrl.session.status is SessionStatus.FIRING:
            if ticks >= self.max_ticks:
                raise RuntimeError(f"projectile still in flight after {ticks} ticks")
            events.extend(ctrl.advance())
            ticks += 1
            if self.on_frame is not None:
                self.on_frame(ctrl.snapshot())
        return events

    def play_shot(self, angle_deg: float, power: float, *, acknowledge: bool = True) -> list[dict]:
        """Launch, fly to resolution and (optionally) acknowledge one shot.

        Returns every event emitted along the way; empty if the launch was refused.
        """
        ctrl = self.controller
        events = ctrl.request_launch(angle_deg, power)
        if not events:
            return []
        events.extend(self.run_flight())
        if acknowledge:
            events.extend(ctrl.acknowledge_result())
        return events
