from typing import Tuple

import cv2
import numpy as np
import torch


def draw_priors(
    img: np.ndarray, boxes: torch.Tensor, color: Tuple[int, int, int] = (0, 255, 0)
) -> np.ndarray:
    """Draws normalized prior boxes on a copy of the image

    Args:
        img (np.ndarray): image with shape of H x W x C
        boxes (torch.Tensor): normalized boxes with shape of (... x 4) as xmin, ymin, xmax, ymax
        color (Tuple[int, int, int], optional): box color. Defaults to (0, 255, 0).

    Returns:
        np.ndarray: image with boxes drawn
    """
    img = img.copy()
    img_h, img_w = img.shape[:2]

    # pylint: disable=not-callable
    scale = torch.tensor([img_w, img_h, img_w, img_h], dtype=torch.float64)
    boxes = boxes.detach().cpu().reshape(-1, 4).double() * scale

    for x1, y1, x2, y2 in boxes.round().long().tolist():
        img = cv2.rectangle(img, (x1, y1), (x2, y2), color)

    return img
