import logging
from typing import List, Union

from ..config import PresetConfig
from ..module import MultiPriorBox
from ..utils.config import get_registry

logger = logging.getLogger("fastprior.api")


def list_presets() -> List[str]:
    """Returns available preset names

    Returns:
        List[str]: list of preset names

    >>> import fastprior as fp
    >>> fp.list_presets()
    ['ssd300', 'ssd512']
    """
    return sorted(get_registry().keys())


def get_preset(name: str) -> PresetConfig:
    """Returns configuration object of the given preset

    Args:
        name (str): preset name

    Returns:
        PresetConfig: preset details as `PresetConfig` object

    >>> import fastprior as fp
    >>> fp.get_preset("ssd300").num_priors
    8732
    """
    registry = get_registry()
    assert name in registry, "given preset: {} is not in the registry".format(name)
    return PresetConfig(name=name, **registry[name])


def build_prior_box(preset: Union[str, PresetConfig], box_format: str = "xyxy",
        transform: str = "vectorized") -> MultiPriorBox:
    """Builds multi feature map prior box module

    Args:
        preset (Union[str, PresetConfig]): preset name as string or `PresetConfig`
        box_format (str, optional): output box format, `xyxy` or `cxcywh`. Defaults to "xyxy".
        transform (str, optional): elementwise transform used for clipping. Defaults to "vectorized".

    Returns:
        MultiPriorBox: torch.nn.Module that generates priors of every layer
    """
    preset = get_preset(preset) if isinstance(preset, str) else preset
    logger.debug("building prior box module for preset %s", preset.name)
    return MultiPriorBox(preset, box_format=box_format, transform=transform)
