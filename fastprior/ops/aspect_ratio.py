from typing import List

__all__ = ["expand_aspect_ratios"]

EPS = 1e-6


def expand_aspect_ratios(aspect_ratios: List[float], flip: bool) -> List[float]:
    """Expands given aspect ratios, output always starts with `1.0`.
    A ratio is skipped if it already exists in the expanded output,
    if flip is set reciprocal of each added ratio follows it.

    Args:
        aspect_ratios (List[float]): aspect ratios as width / height
        flip (bool): also add reciprocal of each ratio

    Returns:
        List[float]: expanded aspect ratios

    >>> expand_aspect_ratios([2.0, 3.0], True)
    [1.0, 2.0, 0.5, 3.0, 0.3333333333333333]
    """
    expanded = [1.0]
    for ar in map(float, aspect_ratios):
        # compared against the accumulated output, not the input list
        if any(abs(ar - existing) < EPS for existing in expanded):
            continue
        expanded.append(ar)
        if flip:
            expanded.append(1.0 / ar)
    return expanded
