import math
from typing import TYPE_CHECKING, List, Tuple

import torch

from ..utils.box import cxcywh2xyxy, generate_grids
from .aspect_ratio import EPS, expand_aspect_ratios
from .transform import clip_boxes
from .variance import broadcast_variances

if TYPE_CHECKING:
    from ..config import PriorBoxConfig

__all__ = [
    "BoxLayout",
    "num_priors_per_cell",
    "resolve_steps",
    "prior_sizes",
    "generate_prior_boxes",
    "prior_box",
]


class BoxLayout:
    """Row-major addressing of a flat `layer_height x layer_width x num_priors x 4` box buffer"""

    def __init__(self, layer_height: int, layer_width: int, num_priors: int, box_dim: int = 4):
        self.layer_height = layer_height
        self.layer_width = layer_width
        self.num_priors = num_priors
        self.box_dim = box_dim

    @property
    def shape(self) -> Tuple[int, int, int, int]:
        return (self.layer_height, self.layer_width, self.num_priors, self.box_dim)

    @property
    def num_boxes(self) -> int:
        return self.layer_height * self.layer_width * self.num_priors

    @property
    def numel(self) -> int:
        return self.num_boxes * self.box_dim

    def offset(self, h: int, w: int, prior_idx: int = 0, coord: int = 0) -> int:
        """Returns flat buffer index of the given box coordinate

        Args:
            h (int): feature map row
            w (int): feature map column
            prior_idx (int, optional): prior index within the cell. Defaults to 0.
            coord (int, optional): coordinate index as xmin, ymin, xmax, ymax. Defaults to 0.

        Returns:
            int: index of the value in the flat buffer
        """
        return ((h * self.layer_width + w) * self.num_priors + prior_idx) * self.box_dim + coord


def num_priors_per_cell(min_sizes: List[float], max_sizes: List[float],
        expanded_ratios: List[float]) -> int:
    # only valid if `max_sizes` is empty or index aligned with `min_sizes`
    return len(expanded_ratios) * len(min_sizes) + len(max_sizes)


def resolve_steps(step_w: float, step_h: float, layer_height: int, layer_width: int,
        img_height: int, img_width: int) -> Tuple[float, float]:
    """Returns step sizes as width, height.
    If any of the given steps is zero, both are derived from image and feature map dimensions.
    """
    if step_w == 0 or step_h == 0:
        return img_width / layer_width, img_height / layer_height
    return float(step_w), float(step_h)


def _sqrt(value: float) -> float:
    # negative sizes or ratios end up as nan boxes instead of raising
    return math.sqrt(value) if value >= 0 else math.nan


def prior_sizes(min_sizes: List[float], max_sizes: List[float],
        expanded_ratios: List[float]) -> List[Tuple[float, float]]:
    """Computes width and height of every prior within a feature map cell.
    Priors are ordered by min size, then as ratio 1, max size variant (if any)
    and remaining ratios in expansion order.

    Args:
        min_sizes (List[float]): box base scales
        max_sizes (List[float]): empty or index aligned with `min_sizes`
        expanded_ratios (List[float]): aspect ratios, output of `expand_aspect_ratios`

    Returns:
        List[Tuple[float, float]]: prior sizes as (width, height)
    """
    sizes = []
    for s, min_size in enumerate(min_sizes):
        min_size = float(min_size)
        # first prior: aspect ratio 1, size = min_size
        sizes.append((min_size, min_size))

        if len(max_sizes) > 0:
            # second prior: aspect ratio 1, size = sqrt(min_size * max_size)
            side = _sqrt(min_size * max_sizes[s])
            sizes.append((side, side))

        for ar in expanded_ratios:
            if abs(ar - 1.0) < EPS:
                continue
            sizes.append((min_size * _sqrt(ar), min_size / _sqrt(ar)))

    return sizes


def generate_prior_boxes(
    min_sizes: List[float],
    max_sizes: List[float],
    expanded_ratios: List[float],
    layer_height: int,
    layer_width: int,
    img_height: int,
    img_width: int,
    step_w: float = 0.0,
    step_h: float = 0.0,
    offset: float = 0.5,
    dtype: torch.dtype = torch.float32,
    device: torch.device = None,
) -> torch.Tensor:
    """Generates normalized prior boxes for every feature map cell

    Args:
        min_sizes (List[float]): box base scales in pixels
        max_sizes (List[float]): empty or index aligned with `min_sizes`
        expanded_ratios (List[float]): aspect ratios, output of `expand_aspect_ratios`
        layer_height (int): feature map height
        layer_width (int): feature map width
        img_height (int): image height
        img_width (int): image width
        step_w (float, optional): horizontal stride between cell centers. Defaults to 0.0.
        step_h (float, optional): vertical stride between cell centers. Defaults to 0.0.
        offset (float, optional): cell center offset. Defaults to 0.5.
        dtype (torch.dtype, optional): dtype of the boxes. Defaults to torch.float32.
        device (torch.device, optional): device of the boxes. Defaults to None.

    Returns:
        torch.Tensor: boxes with shape (layer_height x layer_width x num_priors x 4) as xmin, ymin, xmax, ymax
    """
    sizes = prior_sizes(min_sizes, max_sizes, expanded_ratios)
    layout = BoxLayout(layer_height, layer_width, len(sizes))

    step_width, step_height = resolve_steps(
        step_w, step_h, layer_height, layer_width, img_height, img_width
    )

    boxes = torch.empty(layout.numel, dtype=dtype, device=device)

    # computed in double precision, casted while writing
    # pylint: disable=not-callable
    steps = torch.tensor([step_width, step_height], dtype=torch.float64, device=device)
    normalizer = torch.tensor(
        [img_width, img_height, img_width, img_height], dtype=torch.float64, device=device
    )
    wh = torch.tensor(sizes, dtype=torch.float64, device=device).reshape(1, layout.num_priors, 2)

    # centers: fh x fw x 2 as cx, cy
    centers = (generate_grids(layer_height, layer_width, dtype=torch.float64, device=device) + offset) * steps

    for h in range(layer_height):
        # row: fw x nP x 4 as cx, cy, w, h
        row = torch.cat(
            [
                centers[h].unsqueeze(1).expand(layer_width, layout.num_priors, 2),
                wh.expand(layer_width, layout.num_priors, 2),
            ],
            dim=2,
        )
        row = cxcywh2xyxy(row.reshape(-1, 4)) / normalizer

        start = layout.offset(h, 0)
        boxes[start : start + row.numel()] = row.reshape(-1).to(dtype)

    return boxes.view(layout.shape)


def prior_box(
    config: "PriorBoxConfig",
    layer_hw: Tuple[int, int],
    image_hw: Tuple[int, int],
    dtype: torch.dtype = torch.float32,
    device: torch.device = None,
    transform: str = "vectorized",
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Generates prior boxes and their variances for a single feature map

    Args:
        config (PriorBoxConfig): prior box configuration
        layer_hw (Tuple[int, int]): feature map dimensions as height, width
        image_hw (Tuple[int, int]): image dimensions as height, width
        dtype (torch.dtype, optional): dtype of the outputs. Defaults to torch.float32.
        device (torch.device, optional): device of the outputs. Defaults to None.
        transform (str, optional): elementwise transform used for clipping. Defaults to "vectorized".

    Returns:
        Tuple[torch.Tensor, torch.Tensor]:
            boxes as (layer_height x layer_width x num_priors x 4) xmin, ymin, xmax, ymax
            variances as (layer_height * layer_width * num_priors x 4)
    """
    layer_height, layer_width = layer_hw
    img_height, img_width = image_hw

    expanded_ratios = expand_aspect_ratios(config.aspect_ratios, config.flip)

    boxes = generate_prior_boxes(
        config.min_sizes,
        config.max_sizes,
        expanded_ratios,
        layer_height,
        layer_width,
        img_height,
        img_width,
        step_w=config.step_w,
        step_h=config.step_h,
        offset=config.offset,
        dtype=dtype,
        device=device,
    )

    if config.clip:
        clip_boxes(boxes, transform=transform)

    num_priors = num_priors_per_cell(config.min_sizes, config.max_sizes, expanded_ratios)
    num_boxes = layer_height * layer_width * num_priors
    num_generated = boxes.shape[0] * boxes.shape[1] * boxes.shape[2]

    assert num_boxes == num_generated, (
        "expected {} boxes but generated {}, max_sizes must be empty "
        "or match min_sizes in length".format(num_boxes, num_generated)
    )

    variances = broadcast_variances(config.variances, num_boxes, dtype=dtype, device=device)

    return boxes, variances
