"""
Centralized region definitions for OceanHost.

Two distinct notions of "region" exist on DigitalOcean:

- App Platform regions: coarse buckets (nyc, ams, sfo, ...) used in the
  app spec. ``normalize_region`` maps any slug onto one of them.
- Datacenter slugs: concrete locations (nyc3, ams2, ...) used by other
  products such as the container registry. ``validate_region`` checks
  a slug against the known set.
"""

from __future__ import annotations

from enum import StrEnum


class Region(StrEnum):
    """App Platform regions."""

    NYC = "nyc"
    AMS = "ams"
    SFO = "sfo"
    SGP = "sgp"
    LON = "lon"
    FRA = "fra"
    TOR = "tor"
    BLR = "blr"
    SYD = "syd"


DEFAULT_REGION = Region.NYC

# Datacenter prefix -> App Platform region
_REGION_PREFIXES: dict[str, Region] = {
    "nyc": Region.NYC,
    "ams": Region.AMS,
    "sfo": Region.SFO,
    "sgp": Region.SGP,
    "lon": Region.LON,
    "fra": Region.FRA,
    "tor": Region.TOR,
    "blr": Region.BLR,
    "syd": Region.SYD,
}


class DigitalOceanRegions:
    """Well-known DigitalOcean datacenter slugs."""

    ATL1 = "atl1"
    NYC1 = "nyc1"
    NYC2 = "nyc2"
    NYC3 = "nyc3"
    SFO1 = "sfo1"
    SFO2 = "sfo2"
    SFO3 = "sfo3"
    AMS2 = "ams2"
    AMS3 = "ams3"
    SGP1 = "sgp1"
    LON1 = "lon1"
    FRA1 = "fra1"
    TOR1 = "tor1"
    BLR1 = "blr1"
    SYD1 = "syd1"


KNOWN_REGIONS: tuple[str, ...] = (
    DigitalOceanRegions.NYC1,
    DigitalOceanRegions.NYC2,
    DigitalOceanRegions.NYC3,
    DigitalOceanRegions.SFO1,
    DigitalOceanRegions.SFO2,
    DigitalOceanRegions.SFO3,
    DigitalOceanRegions.AMS2,
    DigitalOceanRegions.AMS3,
    DigitalOceanRegions.SGP1,
    DigitalOceanRegions.LON1,
    DigitalOceanRegions.FRA1,
    DigitalOceanRegions.TOR1,
    DigitalOceanRegions.BLR1,
    DigitalOceanRegions.SYD1,
    DigitalOceanRegions.ATL1,
)

_KNOWN_REGION_SET: frozenset[str] = frozenset(KNOWN_REGIONS)


class RegistryTier(StrEnum):
    """Container registry subscription tiers."""

    STARTER = "starter"
    BASIC = "basic"
    PROFESSIONAL = "professional"


def normalize_region(region: str | None) -> Region:
    """Map a region or datacenter slug to an App Platform region.

    Matching is by case-insensitive prefix, so ``NYC3`` and ``nyc``
    both map to ``Region.NYC``.

    Args:
        region: Region slug in any case, may be empty

    Returns:
        The matching Region, or DEFAULT_REGION for unknown input
    """
    if not region:
        return DEFAULT_REGION

    region_lower = region.strip().lower()
    for prefix, value in _REGION_PREFIXES.items():
        if region_lower.startswith(prefix):
            return value
    return DEFAULT_REGION


def validate_region(region: str) -> bool:
    """Check whether a datacenter slug is a known DigitalOcean region.

    Args:
        region: Datacenter slug, e.g. ``nyc3``

    Returns:
        True if the slug is known (case-insensitive exact match)
    """
    return region.lower() in _KNOWN_REGION_SET


def get_known_regions() -> list[str]:
    """Get the list of known datacenter slugs."""
    return list(KNOWN_REGIONS)
