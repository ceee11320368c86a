"""
CLI commands for OceanHost.
"""

from oceanhost.cli.publish import publish_command
from oceanhost.cli.regions import regions_command

__all__ = [
    "publish_command",
    "regions_command",
]
