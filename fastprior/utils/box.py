import torch


def generate_grids(fh: int, fw: int, dtype: torch.dtype = torch.float32,
        device: torch.device = None) -> torch.Tensor:
    """generates grids using given feature map dimension

    Args:
        fh (int): height of the feature map
        fw (int): width of the feature map
        dtype (torch.dtype, optional): dtype of the grids. Defaults to torch.float32.
        device (torch.device, optional): device of the grids. Defaults to None.

    Returns:
        torch.Tensor: fh x fw x 2 as x1,y1
    """
    # y: fh x fw
    # x: fh x fw
    y, x = torch.meshgrid(
        torch.arange(fh, device=device), torch.arange(fw, device=device), indexing="ij"
    )

    # grids: fh x fw x 2
    return torch.stack([x, y], dim=2).to(dtype)


def cxcywh2xyxy(boxes: torch.Tensor) -> torch.Tensor:
    """Convert box coordiates, centerx centery width height to xmin ymin xmax ymax

    Args:
        boxes (torch.Tensor): torch.Tensor(N,4) as centerx centery width height

    Returns:
        torch.Tensor: torch.Tensor(N,4) as xmin ymin xmax ymax
    """

    wh_half = boxes[:, 2:] / 2

    x1y1 = boxes[:, :2] - wh_half
    x2y2 = boxes[:, :2] + wh_half

    return torch.cat([x1y1, x2y2], dim=1)


def xyxy2cxcywh(boxes: torch.Tensor) -> torch.Tensor:
    """Convert box coordiates, xmin ymin xmax ymax to centerx centery width height

    Args:
        boxes (torch.Tensor): torch.Tensor(N,4) as xmin ymin xmax ymax

    Returns:
        torch.Tensor: torch.Tensor(N,4) as centerx centery width height
    """
    wh = boxes[:, 2:] - boxes[:, :2]
    cxcy = (boxes[:, 2:] + boxes[:, :2]) / 2

    return torch.cat([cxcy, wh], dim=1)
