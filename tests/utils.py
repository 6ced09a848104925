import itertools
from typing import List, Tuple

import torch

import fastprior as fp


def build_preset_args() -> Tuple:
    for preset in fp.list_presets():
        yield preset


def mixup_arguments(*args) -> List:
    """mixups given arguments
    [argument_1_1, argument_1_2], [argument_2_1] =>
    [(argument_1_1, argument_2_1), (argument_1_2, argument_2_1)]

    Returns:
        List: [(arg1, arg2), ...]
    """
    return list(itertools.product(*args))


def build_config(**kwargs) -> fp.PriorBoxConfig:
    params = dict(
        min_sizes=[30.0],
        max_sizes=[60.0],
        aspect_ratios=[2.0, 3.0],
        flip=True,
        clip=False,
    )
    params.update(kwargs)
    return fp.PriorBoxConfig(**params)


def generate_feature_map(fh: int, fw: int, channels: int = 8,
        dtype: torch.dtype = torch.float32) -> torch.Tensor:
    return torch.rand(1, channels, fh, fw, dtype=dtype)


def generate_image(height: int, width: int) -> torch.Tensor:
    return torch.rand(1, 3, height, width, dtype=torch.float32)


def box_sizes(boxes: torch.Tensor, img_height: int, img_width: int) -> torch.Tensor:
    """Returns pixel width and height of normalized boxes as (N x 2)"""
    boxes = boxes.reshape(-1, 4).double()
    widths = (boxes[:, 2] - boxes[:, 0]) * img_width
    heights = (boxes[:, 3] - boxes[:, 1]) * img_height
    return torch.stack([widths, heights], dim=1)
