from dataclasses import replace

import pytest

from cannonrange.config import RangeConfig, TargetConfig
from cannonrange.session.controller import RangeController
from cannonrange.sim.trajectory import fly, launch


def landing_point(angle_deg: float, power: float, cfg: RangeConfig | None = None) -> tuple[float, float]:
    """Where a shot retires on an empty range."""
    cfg = cfg or RangeConfig()
    p, _ = fly(launch(angle_deg, power, cfg), cfg)
    return p.x, p.y


@pytest.fixture
def make_controller():
    def _make(
        *,
        target_at: tuple[float, float] | None = None,
        hit_radius: float = 40.0,
        seed: int = 0,
        record_replay: bool = False,
        on_complete=None,
    ) -> RangeController:
        cfg = RangeConfig(seed=seed, record_replay=record_replay)
        if target_at is not None:
            x, y = target_at
            cfg = replace(
                cfg,
                target=TargetConfig(y=y, x_band=(x, x), visual_radius=min(20.0, hit_radius), hit_radius=hit_radius),
            )
        return RangeController(cfg, on_complete=on_complete)

    return _make


@pytest.fixture
def reachable_controller(make_controller):
    """Controller whose target sits just beside where a 45 deg / power 20 shot lands."""

    def _make(**kwargs) -> RangeController:
        x, y = landing_point(45.0, 20.0)
        return make_controller(target_at=(x - 10.0, y + 5.0), **kwargs)

    return _make
