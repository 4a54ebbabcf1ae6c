"""Utility functions for mimsreport."""

from .env import env_bool, env_int
from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "env_bool",
    "env_int",
    "get_logger",
]
