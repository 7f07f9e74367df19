from .projectile import Projectile
from .trajectory import fly, launch, out_of_bounds, rest_projectile, step

__all__ = ["Projectile", "fly", "launch", "out_of_bounds", "rest_projectile", "step"]
