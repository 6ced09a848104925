from typing import List

import torch

__all__ = ["broadcast_variances"]


def broadcast_variances(variances: List[float], num_boxes: int,
        dtype: torch.dtype = torch.float32, device: torch.device = None) -> torch.Tensor:
    """Replicates variances for every box

    Args:
        variances (List[float]): variances as xmin, ymin, xmax, ymax
        num_boxes (int): number of boxes
        dtype (torch.dtype, optional): dtype of the output. Defaults to torch.float32.
        device (torch.device, optional): device of the output. Defaults to None.

    Returns:
        torch.Tensor: variances with shape (num_boxes x 4)
    """
    # pylint: disable=not-callable
    variance = torch.tensor(variances, dtype=dtype, device=device).view(1, -1)
    return variance.repeat(num_boxes, 1)
