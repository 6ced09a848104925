from . import box, config, vis

__all__ = [
    "box",
    "config",
    "vis",
]
