"""
Core annotations attached to resources in the application model.

Annotations are small typed records. A resource carries them in
declaration order and consumers query them by type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ManagedServiceCategory(StrEnum):
    """Declared category for managed data services."""

    RELATIONAL = "relational"
    KEY_VALUE = "key-value"


@dataclass
class EndpointAnnotation:
    """A network endpoint exposed by a resource.

    Attributes:
        name: Endpoint name, unique per resource
        scheme: URI scheme (http, https, tcp, grpc, ...)
        target_port: Port the process listens on inside the container
        port: Port exposed by the host, if different
        is_external: Whether the endpoint is reachable from outside the app
    """

    name: str
    scheme: str = "http"
    target_port: int | None = None
    port: int | None = None
    is_external: bool = False

    @property
    def effective_port(self) -> int | None:
        """Target port, falling back to the exposed port."""
        return self.target_port if self.target_port is not None else self.port


@dataclass
class HealthCheckAnnotation:
    """HTTP health check declared for a resource."""

    path: str
    endpoint_name: str | None = None


@dataclass
class ParameterReferenceAnnotation:
    """Links a resource to a parameter it consumes (e.g. an API token)."""

    parameter_name: str
