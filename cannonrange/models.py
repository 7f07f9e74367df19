"""Pydantic models for the per-tick render snapshot."""

from pydantic import BaseModel


class ProjectileView(BaseModel):
    """Current shot as the renderer draws it."""

    pos: tuple[float, float]
    vel: tuple[float, float]
    active: bool
    trail: list[tuple[float, float]]


class TargetView(BaseModel):
    """Target circle plus its (larger) detection radius."""

    center: tuple[float, float]
    visual_radius: float
    hit_radius: float


class SessionView(BaseModel):
    """Attempt/score bookkeeping."""

    status: str
    last_outcome: str
    ghost_trail: list[tuple[float, float]]
    hits: int
    max_hits: int
    attempts: int
    complete: bool
    miss_margin: int | None = None


class RangeFrame(BaseModel):
    """Everything the render collaborator reads once per tick."""

    tick: int
    projectile: ProjectileView
    target: TargetView
    session: SessionView
