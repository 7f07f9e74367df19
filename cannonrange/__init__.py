from .config import FieldConfig, LauncherConfig, RangeConfig, TargetConfig
from .loop import TickLoop
from .session.controller import RangeController, SessionStatus
from .session.target import ShotOutcome

__all__ = [
    "FieldConfig",
    "LauncherConfig",
    "RangeConfig",
    "RangeController",
    "SessionStatus",
    "ShotOutcome",
    "TargetConfig",
    "TickLoop",
]
