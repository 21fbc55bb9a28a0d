"""
Configuration subsystem for forgecord.

Static, environment-driven configuration. See ``config.py`` for the full list
of recognised environment variables.
"""

from forgecord.core.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]
