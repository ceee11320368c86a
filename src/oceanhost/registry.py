"""
DigitalOcean Container Registry (DOCR) resource.

Example:
    docr = add_container_registry(builder, "docr", "acme-registry")
    with_registry_region(docr, DigitalOceanRegions.NYC3)
    with_tier(docr, RegistryTier.BASIC)
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from oceanhost.core.errors import ValidationError
from oceanhost.core.regions import RegistryTier, get_known_regions, validate_region
from oceanhost.hosting.annotations import ParameterReferenceAnnotation
from oceanhost.hosting.builder import DistributedApplicationBuilder, ResourceBuilder
from oceanhost.hosting.resources import ContainerRegistryResource, ParameterResource

logger = structlog.get_logger()

DOCR_ENDPOINT = "registry.digitalocean.com"
DEFAULT_TOKEN_PARAMETER_NAME = "digitalOceanToken"


class DigitalOceanContainerRegistryResource(ContainerRegistryResource):
    """A DOCR registry. The registry name doubles as the repository namespace."""

    def __init__(self, name: str, registry_name: str) -> None:
        super().__init__(name, endpoint=DOCR_ENDPOINT, repository=registry_name)
        self.registry_name = registry_name
        self.tier: RegistryTier = RegistryTier.STARTER
        self.is_existing = False


@dataclass
class DigitalOceanApiTokenAnnotation:
    """API token parameter used to authenticate against DigitalOcean."""

    token_parameter: ParameterResource


@dataclass
class DigitalOceanRegionAnnotation:
    """Datacenter the registry lives in."""

    region: str


RegistryBuilder = ResourceBuilder[DigitalOceanContainerRegistryResource]


def add_container_registry(
    builder: DistributedApplicationBuilder, name: str, registry_name: str
) -> RegistryBuilder:
    """
    Add a DOCR registry to the application model.

    A secret ``digitalOceanToken`` parameter is attached as the API token;
    it is created on first use and shared by later registries.
    """
    registry = builder.add_resource(DigitalOceanContainerRegistryResource(name, registry_name))

    token = builder.get_resource(DEFAULT_TOKEN_PARAMETER_NAME)
    if token is None:
        token = builder.add_parameter(DEFAULT_TOKEN_PARAMETER_NAME, secret=True).resource
    elif not isinstance(token, ParameterResource):
        raise ValidationError(
            f"Resource '{DEFAULT_TOKEN_PARAMETER_NAME}' exists but is not a parameter",
            details={"resource": token.name},
        )

    logger.debug("container_registry_added", resource=name, registry=registry_name)
    return with_token(registry, token)


def run_as_existing(registry: RegistryBuilder) -> RegistryBuilder:
    """Use a registry that already exists instead of provisioning one."""
    registry.resource.is_existing = True
    return registry


def with_registry_region(registry: RegistryBuilder, region: str) -> RegistryBuilder:
    """Set the registry datacenter. Raises ValidationError for unknown slugs."""
    if not validate_region(region):
        raise ValidationError(
            f"Unknown DigitalOcean region '{region}'",
            details={"resource": registry.resource.name, "known": ", ".join(get_known_regions())},
        )
    return registry.with_annotation(DigitalOceanRegionAnnotation(region.lower()), replace=True)


def with_tier(registry: RegistryBuilder, tier: str | RegistryTier) -> RegistryBuilder:
    try:
        registry.resource.tier = RegistryTier(str(tier).lower())
    except ValueError as e:
        raise ValidationError(
            f"Unknown registry tier '{tier}'",
            details={"known": ", ".join(t.value for t in RegistryTier)},
        ) from e
    return registry


def with_token(
    registry: RegistryBuilder, token: ParameterResource | ResourceBuilder[ParameterResource]
) -> RegistryBuilder:
    """Use a different parameter as the API token."""
    parameter = token.resource if isinstance(token, ResourceBuilder) else token
    registry.with_annotation(DigitalOceanApiTokenAnnotation(parameter), replace=True)
    return registry.with_annotation(
        ParameterReferenceAnnotation(parameter_name=parameter.name), replace=True
    )


def get_token_parameter(resource: ContainerRegistryResource) -> ParameterResource | None:
    annotation = resource.get_annotation(DigitalOceanApiTokenAnnotation)
    return annotation.token_parameter if annotation else None


def get_registry_region(resource: ContainerRegistryResource) -> str | None:
    annotation = resource.get_annotation(DigitalOceanRegionAnnotation)
    return annotation.region if annotation else None


def registry_name_of(resource: ContainerRegistryResource) -> str | None:
    """Registry name images are pushed under."""
    if isinstance(resource, DigitalOceanContainerRegistryResource):
        return resource.registry_name
    return resource.repository
