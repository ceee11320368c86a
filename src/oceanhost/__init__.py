"""
OceanHost: publish distributed application models to DigitalOcean App Platform.
"""

__version__ = "0.1.0"
