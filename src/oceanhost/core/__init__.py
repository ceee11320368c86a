"""Core modules for OceanHost - naming, regions and errors."""

from oceanhost.core.errors import (
    ConfigurationError,
    ExitCode,
    OceanHostError,
    PublishCancelledError,
    PublishError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)
from oceanhost.core.naming import sanitize_name
from oceanhost.core.regions import (
    DEFAULT_REGION,
    KNOWN_REGIONS,
    DigitalOceanRegions,
    Region,
    RegistryTier,
    get_known_regions,
    normalize_region,
    validate_region,
)

__all__ = [
    # Errors
    "ExitCode",
    "OceanHostError",
    "ConfigurationError",
    "PublishError",
    "ValidationError",
    "PublishCancelledError",
    "main_with_error_handling",
    "format_error_message",
    # Naming
    "sanitize_name",
    # Regions
    "Region",
    "RegistryTier",
    "DigitalOceanRegions",
    "DEFAULT_REGION",
    "KNOWN_REGIONS",
    "normalize_region",
    "validate_region",
    "get_known_regions",
]
