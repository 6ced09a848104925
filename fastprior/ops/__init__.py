from .aspect_ratio import expand_aspect_ratios
from .generator import (
    BoxLayout,
    generate_prior_boxes,
    num_priors_per_cell,
    prior_box,
    prior_sizes,
    resolve_steps,
)
from .shape import infer_shape
from .transform import (
    ClipFunctor,
    LoopTransform,
    VectorizedTransform,
    clip_boxes,
    get_transform,
    list_transforms,
)
from .variance import broadcast_variances

__all__ = [
    "expand_aspect_ratios",
    "BoxLayout",
    "generate_prior_boxes",
    "num_priors_per_cell",
    "prior_box",
    "prior_sizes",
    "resolve_steps",
    "infer_shape",
    "ClipFunctor",
    "LoopTransform",
    "VectorizedTransform",
    "clip_boxes",
    "get_transform",
    "list_transforms",
    "broadcast_variances",
]
