import logging
from typing import List, Tuple

import torch
import torch.nn as nn

from .config import PresetConfig, PriorBoxConfig
from .ops import infer_shape, prior_box, resolve_steps
from .utils.box import xyxy2cxcywh

logger = logging.getLogger("fastprior.module")

__BOX_FORMATS__ = ("xyxy", "cxcywh")


class PriorBox(nn.Module):
    """Generates prior boxes of a single feature map"""

    def __init__(self, config: PriorBoxConfig, transform: str = "vectorized"):
        super().__init__()
        self.config = config
        self.transform = transform

    @property
    def num_priors(self) -> int:
        return self.config.num_priors

    def generate(
        self,
        layer_height: int,
        layer_width: int,
        img_height: int,
        img_width: int,
        dtype: torch.dtype = torch.float32,
        device: torch.device = None,
    ) -> Tuple[torch.Tensor, torch.Tensor]:
        """Generates prior boxes using feature map and image dimensions

        Args:
            layer_height (int): feature map height
            layer_width (int): feature map width
            img_height (int): image height
            img_width (int): image width
            dtype (torch.dtype, optional): dtype of the outputs. Defaults to torch.float32.
            device (torch.device, optional): device of the outputs. Defaults to None.

        Returns:
            Tuple[torch.Tensor, torch.Tensor]:
                boxes with shape (fh x fw x num_priors x 4) as xmin, ymin, xmax, ymax
                variances with shape (fh * fw * num_priors x 4)
        """
        assert layer_height > 0 and layer_width > 0, "feature map dimensions must be positive but found {}x{}".format(
            layer_height, layer_width
        )
        assert img_height > 0 and img_width > 0, "image dimensions must be positive but found {}x{}".format(
            img_height, img_width
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "generating %d priors per cell for %dx%d feature map, %dx%d image with steps %s",
                self.num_priors,
                layer_height,
                layer_width,
                img_height,
                img_width,
                resolve_steps(
                    self.config.step_w,
                    self.config.step_h,
                    layer_height,
                    layer_width,
                    img_height,
                    img_width,
                ),
            )

        return prior_box(
            self.config,
            (layer_height, layer_width),
            (img_height, img_width),
            dtype=dtype,
            device=device,
            transform=self.transform,
        )

    def forward(self, feature_map: torch.Tensor,
            image: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
        """Generates prior boxes using spatial dimensions of the inputs,
        outputs follow dtype and device of the feature map

        Args:
            feature_map (torch.Tensor): feature map with shape of B x C x fh x fw
            image (torch.Tensor): image batch with shape of B x C x H x W

        Returns:
            Tuple[torch.Tensor, torch.Tensor]:
                boxes with shape (fh x fw x num_priors x 4) as xmin, ymin, xmax, ymax
                variances with shape (fh * fw * num_priors x 4)
        """
        (layer_height, layer_width, _, _), _ = infer_shape(
            self.config, feature_map.shape, image.shape
        )
        img_height, img_width = image.shape[2:]

        return self.generate(
            layer_height,
            layer_width,
            img_height,
            img_width,
            dtype=feature_map.dtype,
            device=feature_map.device,
        )


class MultiPriorBox(nn.Module):
    """Generates prior boxes of every feature map of a preset and concatenates them"""

    def __init__(self, preset: PresetConfig, box_format: str = "xyxy",
            transform: str = "vectorized"):
        super().__init__()
        assert box_format in __BOX_FORMATS__, "box format must be one of {} but found {}".format(
            __BOX_FORMATS__, box_format
        )
        self.preset = preset
        self.box_format = box_format
        self.layers = nn.ModuleList(
            [
                PriorBox(preset.layer_config(i), transform=transform)
                for i in range(len(preset.layers))
            ]
        )

    def _merge(self, outputs: List[Tuple[torch.Tensor, torch.Tensor]]) -> Tuple[torch.Tensor, torch.Tensor]:
        boxes = torch.cat([layer_boxes.reshape(-1, 4) for layer_boxes, _ in outputs], dim=0)
        variances = torch.cat([layer_variances for _, layer_variances in outputs], dim=0)

        if self.box_format == "cxcywh":
            boxes = xyxy2cxcywh(boxes)

        return boxes, variances

    def generate(self, dtype: torch.dtype = torch.float32,
            device: torch.device = None) -> Tuple[torch.Tensor, torch.Tensor]:
        """Generates prior boxes using feature map and image dimensions of the preset

        Args:
            dtype (torch.dtype, optional): dtype of the outputs. Defaults to torch.float32.
            device (torch.device, optional): device of the outputs. Defaults to None.

        Returns:
            Tuple[torch.Tensor, torch.Tensor]: boxes as (N x 4) and variances as (N x 4)
        """
        outputs = [
            layer.generate(
                layer_config.feature_height,
                layer_config.feature_width,
                self.preset.image_height,
                self.preset.image_width,
                dtype=dtype,
                device=device,
            )
            for layer, layer_config in zip(self.layers, self.preset.layers)
        ]
        return self._merge(outputs)

    def forward(self, feature_maps: List[torch.Tensor],
            image: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
        """Generates prior boxes of each feature map

        Args:
            feature_maps (List[torch.Tensor]): feature maps with shape of B x C x fh x fw, ordered as preset layers
            image (torch.Tensor): image batch with shape of B x C x H x W

        Returns:
            Tuple[torch.Tensor, torch.Tensor]: boxes as (N x 4) and variances as (N x 4)
        """
        assert len(feature_maps) == len(self.layers), "expected {} feature maps but found {}".format(
            len(self.layers), len(feature_maps)
        )
        outputs = [
            layer(feature_map, image)
            for layer, feature_map in zip(self.layers, feature_maps)
        ]
        return self._merge(outputs)
