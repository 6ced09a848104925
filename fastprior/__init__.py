from . import ops, utils
from .api import build_prior_box, get_preset, list_presets
from .config import LayerConfig, PresetConfig, PriorBoxConfig
from .module import MultiPriorBox, PriorBox
from .ops import expand_aspect_ratios, infer_shape, prior_box
from .version import __version__

__all__ = [
    "list_presets",
    "get_preset",
    "build_prior_box",
    "ops",
    "utils",
    "PriorBoxConfig",
    "LayerConfig",
    "PresetConfig",
    "PriorBox",
    "MultiPriorBox",
    "expand_aspect_ratios",
    "infer_shape",
    "prior_box",
    "__version__",
]
