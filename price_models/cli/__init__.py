"""Command-line interface for the model selection workflow."""

from .cli import main, parse_args
from .config import add_args, check_config, config_to_dict, get_config, setup_logging

__all__ = [
    "main",
    "parse_args",
    "add_args",
    "get_config",
    "check_config",
    "config_to_dict",
    "setup_logging",
]
