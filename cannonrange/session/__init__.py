from .controller import RangeController, SessionRecord, SessionStatus, ShotRecord
from .target import ShotOutcome, Target, classify_shot, spawn_target

__all__ = [
    "RangeController",
    "SessionRecord",
    "SessionStatus",
    "ShotOutcome",
    "ShotRecord",
    "Target",
    "classify_shot",
    "spawn_target",
]
