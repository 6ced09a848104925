from typing import TYPE_CHECKING, List, Sequence, Tuple

from .aspect_ratio import expand_aspect_ratios
from .generator import num_priors_per_cell

if TYPE_CHECKING:
    from ..config import PriorBoxConfig

__all__ = ["infer_shape"]


def infer_shape(config: "PriorBoxConfig", input_dims: Sequence[int],
        image_dims: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Infers output shapes of `prior_box` using input dimensions

    Args:
        config (PriorBoxConfig): prior box configuration
        input_dims (Sequence[int]): feature map dimensions as N x C x H x W
        image_dims (Sequence[int]): image dimensions as N x C x H x W

    Returns:
        Tuple[List[int], List[int]]: shape of the boxes and shape of the variances
    """
    assert len(input_dims) == 4, "feature map must be 4D (N x C x H x W) but found {}D".format(
        len(input_dims)
    )
    assert len(image_dims) == 4, "image must be 4D (N x C x H x W) but found {}D".format(
        len(image_dims)
    )

    layer_height, layer_width = [int(dim) for dim in input_dims[2:]]
    img_height, img_width = [int(dim) for dim in image_dims[2:]]

    assert layer_height > 0 and layer_width > 0, "feature map dimensions must be positive but found {}x{}".format(
        layer_height, layer_width
    )
    assert img_height > 0 and img_width > 0, "image dimensions must be positive but found {}x{}".format(
        img_height, img_width
    )

    num_priors = num_priors_per_cell(
        config.min_sizes,
        config.max_sizes,
        expand_aspect_ratios(config.aspect_ratios, config.flip),
    )

    return (
        [layer_height, layer_width, num_priors, 4],
        [layer_height * layer_width * num_priors, 4],
    )
