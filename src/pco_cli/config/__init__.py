"""
Configuration package for pco-cli.

This package contains settings, .env loading and the hierarchical
settings-file loader.
"""

from .settings import PlanningCenterSettings, get_settings, load_settings

__all__ = ["PlanningCenterSettings", "get_settings", "load_settings"]
