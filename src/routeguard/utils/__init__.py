"""Utility functions."""

from routeguard.utils.config import RouteguardConfig, load_config
from routeguard.utils.logging import setup_logging

__all__ = ["RouteguardConfig", "load_config", "setup_logging"]
