import logging
from typing import List

from pydantic import BaseModel, field_validator, model_validator

from .ops.aspect_ratio import expand_aspect_ratios

logger = logging.getLogger("fastprior.config")


def _check_positive(values: List[float], field_name: str) -> List[float]:
    for value in values:
        if value <= 0:
            raise ValueError(
                "{} must only contain positive values but found {}".format(
                    field_name, value
                )
            )
    return values


class PriorBoxConfig(BaseModel):
    """Prior box configuration for a single feature map"""

    # box base scales in pixels
    min_sizes: List[float]
    # index aligned with `min_sizes` or empty
    max_sizes: List[float] = []
    # raw aspect ratios, before expansion
    aspect_ratios: List[float] = []
    # xmin, ymin, xmax, ymax variances
    variances: List[float] = [0.1, 0.1, 0.2, 0.2]

    flip: bool = False
    clip: bool = False

    # 0 means derive from image and feature map dimensions
    step_w: float = 0.0
    step_h: float = 0.0
    offset: float = 0.5

    @field_validator("min_sizes")
    @classmethod
    def check_min_sizes(cls, min_sizes: List[float]) -> List[float]:
        if len(min_sizes) == 0:
            raise ValueError("min_sizes must contain at least one value")
        return _check_positive(min_sizes, "min_sizes")

    @field_validator("max_sizes")
    @classmethod
    def check_max_sizes(cls, max_sizes: List[float]) -> List[float]:
        return _check_positive(max_sizes, "max_sizes")

    @field_validator("aspect_ratios")
    @classmethod
    def check_aspect_ratios(cls, aspect_ratios: List[float]) -> List[float]:
        return _check_positive(aspect_ratios, "aspect_ratios")

    @field_validator("variances")
    @classmethod
    def check_variances(cls, variances: List[float]) -> List[float]:
        if len(variances) != 4:
            raise ValueError(
                "variances must contain exactly 4 values but found {}".format(
                    len(variances)
                )
            )
        return variances

    @field_validator("step_w", "step_h")
    @classmethod
    def check_step(cls, step: float) -> float:
        if step < 0:
            raise ValueError("step can not be negative but found {}".format(step))
        return step

    @field_validator("offset")
    @classmethod
    def check_offset(cls, offset: float) -> float:
        if not 0 <= offset < 1:
            logger.warning(
                "offset %s is outside of [0, 1), prior centers will leave their cells",
                offset,
            )
        return offset

    @model_validator(mode="after")
    def check_size_alignment(self) -> "PriorBoxConfig":
        if len(self.max_sizes) > 0 and len(self.max_sizes) != len(self.min_sizes):
            raise ValueError(
                "max_sizes must be empty or have the same length as min_sizes ({}) but found {}".format(
                    len(self.min_sizes), len(self.max_sizes)
                )
            )
        return self

    @property
    def expanded_ratios(self) -> List[float]:
        return expand_aspect_ratios(self.aspect_ratios, self.flip)

    @property
    def num_priors(self) -> int:
        """Number of priors generated for each feature map cell"""
        return len(self.expanded_ratios) * len(self.min_sizes) + len(self.max_sizes)


class LayerConfig(BaseModel):
    """Feature map level settings of a preset"""

    feature_width: int
    feature_height: int

    min_sizes: List[float]
    max_sizes: List[float] = []
    aspect_ratios: List[float] = []

    step_w: float = 0.0
    step_h: float = 0.0


class PresetConfig(BaseModel):
    """Multi feature map prior configuration of a detector"""

    # name of the preset in the registry
    name: str

    image_width: int
    image_height: int

    # shared by every layer
    variances: List[float] = [0.1, 0.1, 0.2, 0.2]
    flip: bool = True
    clip: bool = False
    offset: float = 0.5

    layers: List[LayerConfig]

    def layer_config(self, idx: int) -> PriorBoxConfig:
        """Builds `PriorBoxConfig` of the given layer

        Args:
            idx (int): index of the layer

        Returns:
            PriorBoxConfig: prior box configuration of the layer
        """
        layer = self.layers[idx]
        return PriorBoxConfig(
            min_sizes=layer.min_sizes,
            max_sizes=layer.max_sizes,
            aspect_ratios=layer.aspect_ratios,
            variances=self.variances,
            flip=self.flip,
            clip=self.clip,
            step_w=layer.step_w,
            step_h=layer.step_h,
            offset=self.offset,
        )

    @property
    def num_priors(self) -> int:
        """Total number of priors over all layers"""
        return sum(
            layer.feature_height * layer.feature_width * self.layer_config(i).num_priors
            for i, layer in enumerate(self.layers)
        )
