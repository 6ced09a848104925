import copy
import os
from functools import lru_cache
from typing import Dict

import yaml

__all__ = [
    "get_pkg_root_path",
    "get_registry_path",
    "get_registry",
]


def get_pkg_root_path() -> str:
    return os.path.dirname(os.path.dirname(os.path.realpath(__file__)))


def get_registry_path() -> str:
    return os.path.join(get_pkg_root_path(), "registry.yaml")


@lru_cache(maxsize=None)
def _load_registry(registry_path: str) -> Dict:
    with open(registry_path, "r") as foo:
        return yaml.load(foo, Loader=yaml.SafeLoader)


def get_registry() -> Dict:
    """Returns preset registry as `{preset name: preset fields}`, file is parsed once,
    every call returns an independent copy"""
    return copy.deepcopy(_load_registry(get_registry_path()))
