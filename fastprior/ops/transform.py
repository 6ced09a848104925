from typing import Callable, List, Union

import torch

__all__ = [
    "ClipFunctor",
    "LoopTransform",
    "VectorizedTransform",
    "list_transforms",
    "get_transform",
    "clip_boxes",
]


class ClipFunctor:
    """Clamps values into [low, high], works on python numbers and tensors"""

    def __init__(self, low: float = 0.0, high: float = 1.0):
        self.low = low
        self.high = high

    def __call__(self, value: Union[float, torch.Tensor]) -> Union[float, torch.Tensor]:
        if isinstance(value, torch.Tensor):
            return torch.clamp(value, min=self.low, max=self.high)
        return min(max(value, self.low), self.high)


class LoopTransform:
    """Maps given function over the buffer one element at a time, in place"""

    def __call__(self, buffer: torch.Tensor, fn: Callable) -> torch.Tensor:
        flat = buffer.view(-1)
        for i in range(flat.numel()):
            flat[i] = fn(flat[i].item())
        return buffer


class VectorizedTransform:
    """Maps given function over the whole buffer with a single call, in place"""

    def __call__(self, buffer: torch.Tensor, fn: Callable) -> torch.Tensor:
        flat = buffer.view(-1)
        flat.copy_(fn(flat))
        return buffer


__TRANSFORMS__ = {
    "loop": LoopTransform(),
    "vectorized": VectorizedTransform(),
}


def list_transforms() -> List[str]:
    return sorted(__TRANSFORMS__.keys())


def get_transform(name: str) -> Callable:
    assert name in __TRANSFORMS__, "given transform {} is not found, available: {}".format(
        name, list_transforms()
    )
    return __TRANSFORMS__[name]


def clip_boxes(boxes: torch.Tensor, low: float = 0.0, high: float = 1.0,
        transform: str = "vectorized") -> torch.Tensor:
    """Clamps every coordinate of the boxes into [low, high], in place

    Args:
        boxes (torch.Tensor): contiguous box buffer with any shape
        low (float, optional): lower bound. Defaults to 0.0.
        high (float, optional): upper bound. Defaults to 1.0.
        transform (str, optional): name of the elementwise transform. Defaults to "vectorized".

    Returns:
        torch.Tensor: same buffer as `boxes`
    """
    return get_transform(transform)(boxes, ClipFunctor(low=low, high=high))
