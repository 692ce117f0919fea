"""Configuration module for probe runs."""

from .config_loader import ConfigLoader, DEFAULT_CONFIG_DIR
from .probe_config import ProbeConfig

__all__ = ["ConfigLoader", "DEFAULT_CONFIG_DIR", "ProbeConfig"]
