"""
Application model: resources, annotations, builder and lifecycle events.
"""

from oceanhost.hosting.annotations import (
    EndpointAnnotation,
    HealthCheckAnnotation,
    ManagedServiceCategory,
    ParameterReferenceAnnotation,
)
from oceanhost.hosting.builder import (
    DistributedApplication,
    DistributedApplicationBuilder,
    ResourceBuilder,
)
from oceanhost.hosting.eventing import AfterPublishEvent, ApplicationModel, EventBus
from oceanhost.hosting.resources import (
    ContainerRegistryResource,
    ContainerResource,
    ExecutableResource,
    GarnetResource,
    ParameterResource,
    PostgresDatabaseResource,
    PostgresServerResource,
    ProjectResource,
    RedisResource,
    Resource,
    ValkeyResource,
)

__all__ = [
    # Annotations
    "EndpointAnnotation",
    "HealthCheckAnnotation",
    "ManagedServiceCategory",
    "ParameterReferenceAnnotation",
    # Builder
    "DistributedApplication",
    "DistributedApplicationBuilder",
    "ResourceBuilder",
    # Eventing
    "AfterPublishEvent",
    "ApplicationModel",
    "EventBus",
    # Resources
    "Resource",
    "ProjectResource",
    "ContainerResource",
    "ExecutableResource",
    "ParameterResource",
    "PostgresServerResource",
    "PostgresDatabaseResource",
    "RedisResource",
    "ValkeyResource",
    "GarnetResource",
    "ContainerRegistryResource",
]
