"""
Regions command.
"""

from __future__ import annotations

from oceanhost.cli.ux import console, error, print_table, success
from oceanhost.core.errors import ExitCode
from oceanhost.core.regions import get_known_regions, normalize_region, validate_region


def regions_command(validate: str | None = None) -> int:
    """
    List known datacenter slugs, or validate one.

    Args:
        validate: Datacenter slug to check

    Returns:
        Exit code (0 = known slug or listing, 12 = unknown slug)
    """
    if validate is not None:
        if validate_region(validate):
            success(f"{validate} is a known region (App Platform: {normalize_region(validate)})")
            return ExitCode.SUCCESS
        error(f"Unknown region: {validate}")
        console.print(f"   [muted]Known regions: {', '.join(get_known_regions())}[/muted]")
        return ExitCode.VALIDATION_ERROR

    rows = [[slug, normalize_region(slug).value] for slug in get_known_regions()]
    print_table("DigitalOcean regions", ["Datacenter", "App Platform region"], rows)
    return ExitCode.SUCCESS
