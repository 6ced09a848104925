import math

import pytest
import torch

from fastprior.ops import (
    BoxLayout,
    expand_aspect_ratios,
    generate_prior_boxes,
    num_priors_per_cell,
    prior_sizes,
    resolve_steps,
)

from . import utils


def test_num_priors_per_cell():
    expanded = expand_aspect_ratios([2.0], False)
    assert expanded == [1.0, 2.0]
    assert num_priors_per_cell([30], [60], expanded) == 3


@pytest.mark.parametrize(
    "step_w, step_h, expected",
    [
        (0, 0, (300.0, 300.0)),
        (8, 0, (300.0, 300.0)),
        (0, 8, (300.0, 300.0)),
        (8, 16, (8.0, 16.0)),
    ],
)
def test_resolve_steps(step_w, step_h, expected):
    assert resolve_steps(step_w, step_h, 1, 1, 300, 300) == expected


def test_resolve_steps_real_valued():
    step_width, step_height = resolve_steps(0, 0, 3, 7, 10, 10)
    assert step_width == pytest.approx(10 / 7)
    assert step_height == pytest.approx(10 / 3)


def test_single_box_geometry():
    boxes = generate_prior_boxes([30], [], [1.0], 1, 1, 300, 300)

    assert boxes.shape == (1, 1, 1, 4), "expected shape (1, 1, 1, 4) but found {}".format(
        boxes.shape
    )
    # pylint: disable=not-callable
    expected = torch.tensor([0.45, 0.45, 0.55, 0.55])
    assert torch.allclose(boxes.reshape(-1), expected), "expected {} but found {}".format(
        expected, boxes.reshape(-1)
    )


def test_prior_order():
    a, b, r = 30.0, 60.0, 2.0
    boxes = generate_prior_boxes([a, b], [], [1.0, r], 1, 1, 300, 300, dtype=torch.float64)
    sizes = utils.box_sizes(boxes, 300, 300)

    # pylint: disable=not-callable
    expected = torch.tensor(
        [
            [a, a],
            [a * math.sqrt(r), a / math.sqrt(r)],
            [b, b],
            [b * math.sqrt(r), b / math.sqrt(r)],
        ],
        dtype=torch.float64,
    )
    assert torch.allclose(sizes, expected), "expected {} but found {}".format(expected, sizes)


def test_prior_order_with_max_sizes():
    sizes = prior_sizes([30.0, 60.0], [60.0, 90.0], [1.0, 2.0, 0.5])

    expected = [
        (30.0, 30.0),
        (math.sqrt(30 * 60), math.sqrt(30 * 60)),
        (30 * math.sqrt(2), 30 / math.sqrt(2)),
        (30 * math.sqrt(0.5), 30 / math.sqrt(0.5)),
        (60.0, 60.0),
        (math.sqrt(60 * 90), math.sqrt(60 * 90)),
        (60 * math.sqrt(2), 60 / math.sqrt(2)),
        (60 * math.sqrt(0.5), 60 / math.sqrt(0.5)),
    ]
    assert len(sizes) == len(expected)
    for size, expected_size in zip(sizes, expected):
        assert size == pytest.approx(expected_size)


def test_explicit_steps():
    boxes = generate_prior_boxes(
        [30], [], [1.0], 2, 2, 300, 300, step_w=100, step_h=100, dtype=torch.float64
    )

    # pylint: disable=not-callable
    first = torch.tensor([35, 35, 65, 65], dtype=torch.float64) / 300
    last = torch.tensor([135, 135, 165, 165], dtype=torch.float64) / 300

    assert torch.allclose(boxes[0, 0, 0], first)
    assert torch.allclose(boxes[1, 1, 0], last)


def test_centers_follow_rows_and_columns():
    # image 200 x 400 (h x w), feature map 2 x 4, steps derived as 100 x 100
    boxes = generate_prior_boxes([10], [], [1.0], 2, 4, 200, 400, dtype=torch.float64)

    centers_x = (boxes[..., 0] + boxes[..., 2]) / 2 * 400
    centers_y = (boxes[..., 1] + boxes[..., 3]) / 2 * 200

    for h in range(2):
        for w in range(4):
            assert centers_x[h, w, 0].item() == pytest.approx((w + 0.5) * 100)
            assert centers_y[h, w, 0].item() == pytest.approx((h + 0.5) * 100)


def test_boxes_are_not_clamped():
    boxes = generate_prior_boxes([300], [], [1.0], 2, 2, 300, 300)
    assert boxes.min().item() < 0
    assert boxes.max().item() > 1


def test_degenerate_sizes_propagate():
    boxes = generate_prior_boxes([-10], [], [1.0], 1, 1, 100, 100, dtype=torch.float64)
    xmin, _, xmax, _ = boxes.reshape(-1).tolist()
    assert xmin > xmax, "negative sizes must produce inverted boxes"


@pytest.mark.parametrize(
    "layer_height, layer_width, num_priors", utils.mixup_arguments([1, 3], [2, 5], [1, 4])
)
def test_layout_offset(layer_height: int, layer_width: int, num_priors: int):
    layout = BoxLayout(layer_height, layer_width, num_priors)

    assert layout.shape == (layer_height, layer_width, num_priors, 4)
    assert layout.numel == layer_height * layer_width * num_priors * 4
    assert layout.offset(0, 0) == 0
    assert layout.offset(layer_height - 1, layer_width - 1, num_priors - 1, 3) == layout.numel - 1


def test_layout_matches_buffer():
    expanded = expand_aspect_ratios([2.0, 3.0], True)
    boxes = generate_prior_boxes([30, 60], [45, 90], expanded, 3, 4, 300, 300)
    layout = BoxLayout(3, 4, num_priors_per_cell([30, 60], [45, 90], expanded))

    flat = boxes.reshape(-1)
    for h, w, p, c in [(0, 0, 0, 0), (1, 2, 5, 3), (2, 3, layout.num_priors - 1, 1)]:
        assert flat[layout.offset(h, w, p, c)].item() == boxes[h, w, p, c].item()


def test_generation_is_deterministic():
    args = ([30, 60], [45, 90], [1.0, 2.0, 0.5], 5, 7, 300, 300)
    assert torch.equal(generate_prior_boxes(*args), generate_prior_boxes(*args))


@pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
def test_generation_dtype(dtype: torch.dtype):
    boxes = generate_prior_boxes([30], [], [1.0], 2, 2, 300, 300, dtype=dtype)
    assert boxes.dtype == dtype
    assert boxes.is_contiguous()


@pytest.mark.parametrize(
    "offset, step", utils.mixup_arguments([0.0, 0.25], [50.0, 40.0])
)
def test_offset_moves_centers(offset: float, step: float):
    boxes = generate_prior_boxes(
        [10], [], [1.0], 2, 2, 100, 100, step_w=step, step_h=step, offset=offset,
        dtype=torch.float64,
    )

    for h in range(2):
        for w in range(2):
            cx = (w + offset) * step
            cy = (h + offset) * step
            # pylint: disable=not-callable
            expected = torch.tensor([cx - 5, cy - 5, cx + 5, cy + 5], dtype=torch.float64) / 100
            assert torch.allclose(boxes[h, w, 0], expected), "expected {} but found {}".format(
                expected, boxes[h, w, 0]
            )


def test_zero_offset_box():
    boxes = generate_prior_boxes([10], [], [1.0], 2, 2, 100, 100, offset=0.0)
    # pylint: disable=not-callable
    assert torch.allclose(boxes[1, 1, 0], torch.tensor([0.45, 0.45, 0.55, 0.55]))
