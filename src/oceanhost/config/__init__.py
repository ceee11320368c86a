"""
OceanHost configuration.

Settings are read from OCEANHOST_* environment variables and an optional
.env file in the working directory.
"""

from oceanhost.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
