"""Load layered compose files and parse their service definitions."""

import copy
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

import yaml

from flow_compose.errors import ConfigurationError


@dataclass
class ServiceConfig:
    name: str
    image: str | None
    build: dict | str | None
    file_order: int
    definition: dict = field(default_factory=dict)

    @property
    def is_built(self) -> bool:
        return "build" in self.definition


def deep_merge(base: Mapping, override: Mapping) -> dict:
    """Return a new dict with override merged over base.

    Nested mappings merge recursively; any other override value replaces the
    base value. Neither argument is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _read_unit(path: str) -> dict:
    if not os.path.isfile(path):
        raise ConfigurationError(f"compose file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid compose file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"compose file {path} must contain a mapping")
    return data


def load_compose(units: list[str]) -> dict:
    """Read compose units and layer them in order (later units win)."""
    if isinstance(units, str):
        units = [units]
    compose_dict: dict = {}
    for unit in units:
        compose_dict = deep_merge(compose_dict, _read_unit(unit))
    return compose_dict


def app_services(compose_dict: dict) -> dict:
    """Return the service name → definition mapping of a compose dict."""
    return compose_dict.get("services") or {}


def parse_services(compose_dict: dict) -> list[ServiceConfig]:
    """Parse compose config dict into ServiceConfig list, in declaration order."""
    configs = []
    for idx, (name, svc) in enumerate(app_services(compose_dict).items()):
        svc = svc or {}
        configs.append(
            ServiceConfig(
                name=name,
                image=svc.get("image"),
                build=svc.get("build"),
                file_order=idx,
                definition=svc,
            )
        )
    return configs
