"""mdspec package root."""

from mdspec.exceptions import ConfigError
from mdspec.runner.hooks import DEFAULT_HOOKS, RunnerHooks

__all__ = ["__version__", "ConfigError", "DEFAULT_HOOKS", "RunnerHooks"]

__version__ = "0.1.0"
