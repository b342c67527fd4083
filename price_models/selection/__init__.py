"""
Selection module for choosing a model configuration by cross-validation.

This module provides:
- Configuration grids (expand_grid, experiment files)
- Cross-validated selection, sequential or concurrent (select_best, ModelSelector)
- Holdout evaluation of the selected configuration (finalize)
- The full split -> select -> finalize workflow (run_workflow)

Usage:
    from price_models.selection import expand_grid, run_workflow
    from price_models.backends import ModelConfig

    configs = [ModelConfig("linear")] + expand_grid("forest", mtry=range(1, 7))
    result = run_workflow(dataset, configs, proportion=0.75, v=5, seed=1126)
    print(result.selection.best_config.label, result.final.rmse)
"""

from .errors import (
    DuplicateConfigError,
    EmptyConfigSetError,
    ExperimentConfigError,
    SelectionError,
)
from .finalize import finalize
from .grid import configs_from_mapping, default_configs, expand_grid, load_experiment
from .models import (
    ConfigSummary,
    FinalEvaluation,
    SelectionResult,
    SelectorConfig,
    WorkflowResult,
)
from .selector import ModelSelector, check_configs, pick_best, select_best, summarize
from .workflow import run_workflow

__all__ = [
    # Operations
    "select_best",
    "finalize",
    "run_workflow",
    "summarize",
    "pick_best",
    "check_configs",
    # Selector
    "ModelSelector",
    "SelectorConfig",
    # Grids
    "expand_grid",
    "configs_from_mapping",
    "default_configs",
    "load_experiment",
    # Models
    "ConfigSummary",
    "SelectionResult",
    "FinalEvaluation",
    "WorkflowResult",
    # Errors
    "SelectionError",
    "EmptyConfigSetError",
    "DuplicateConfigError",
    "ExperimentConfigError",
]
