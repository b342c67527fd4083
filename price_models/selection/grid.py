"""Build lists of model configurations from grids and experiment files."""

from __future__ import annotations

import itertools
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from ..backends.models import ModelConfig
from .errors import ExperimentConfigError


def expand_grid(
    family: str,
    fixed: Mapping[str, Any] | None = None,
    **param_values: Sequence[Any],
) -> list[ModelConfig]:
    """
    Cross product of hyperparameter values for one model family.

    Order follows the keyword order, last keyword varying fastest.
    `fixed` parameters are added to every configuration.

    Example:
        >>> [c.label for c in expand_grid("forest", mtry=[1, 2])]
        ['forest(mtry=1)', 'forest(mtry=2)']
    """
    fixed = dict(fixed or {})
    if not param_values:
        return [ModelConfig(family, fixed)]

    names = list(param_values)
    configs = []
    for values in itertools.product(*(param_values[name] for name in names)):
        params = {**fixed, **dict(zip(names, values))}
        configs.append(ModelConfig(family, params))
    return configs


def configs_from_mapping(data: Mapping[str, Any]) -> list[ModelConfig]:
    """
    Build configurations from a parsed experiment mapping.

    Expected shape:
        configs:
          - family: linear
          - family: forest
            params: {trees: 200, seed: 1126}
            grid: {mtry: [1, 2, 3, 4, 5, 6]}
    """
    entries = data.get("configs")
    if not isinstance(entries, list):
        raise ExperimentConfigError("Experiment must have a 'configs' list")

    configs: list[ModelConfig] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or "family" not in entry:
            raise ExperimentConfigError(f"Config entry {i} has no 'family'")

        params = entry.get("params") or {}
        grid = entry.get("grid") or {}
        if not isinstance(params, Mapping) or not isinstance(grid, Mapping):
            raise ExperimentConfigError(
                f"Config entry {i}: 'params' and 'grid' must be mappings"
            )
        for name, values in grid.items():
            if not isinstance(values, list):
                raise ExperimentConfigError(
                    f"Config entry {i}: grid values for '{name}' must be a list"
                )

        configs.extend(expand_grid(str(entry["family"]), fixed=params, **grid))

    return configs


def load_experiment(path: Path) -> dict[str, Any]:
    """Load an experiment YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ExperimentConfigError(f"Experiment file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ExperimentConfigError(f"Invalid YAML in experiment file: {e}") from e

    if not isinstance(data, dict):
        raise ExperimentConfigError(f"Experiment file must be a mapping: {path}")
    return data


def default_configs(
    seed: int, trees: int = 500, max_mtry: int = 6
) -> list[ModelConfig]:
    """Linear model plus a forest tuned over mtry 1..max_mtry."""
    return [ModelConfig("linear")] + expand_grid(
        "forest", fixed={"trees": trees, "seed": seed}, mtry=range(1, max_mtry + 1)
    )
