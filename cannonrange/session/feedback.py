"""Player-facing labels and miss feedback shown next to the controls."""

from __future__ import annotations

import math

from ..constants import ANGLE_FLAT_BELOW_DEG, ANGLE_GOOD_BELOW_DEG, POWER_GOOD_BELOW, POWER_WEAK_BELOW


def angle_label(angle_deg: float) -> str:
    if angle_deg < ANGLE_FLAT_BELOW_DEG:
        return "flat"
    if angle_deg < ANGLE_GOOD_BELOW_DEG:
        return "good"
    return "high"


def power_label(power: float) -> str:
    if power < POWER_WEAK_BELOW:
        return "weak"
    if power < POWER_GOOD_BELOW:
        return "good"
    return "strong"


def miss_margin(distance: float, hit_radius: float) -> int:
    """How far outside the hit radius a shot landed, in whole units.

    Halves round up (the on-screen "off by N" readout), not to even.
    """
    return int(math.floor(distance - hit_radius + 0.5))
