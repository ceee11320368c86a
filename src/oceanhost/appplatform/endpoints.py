"""
Endpoint inference for App Platform components.

Decides whether a resource is an HTTP service and which ports and health
check path it exposes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from oceanhost.hosting.annotations import EndpointAnnotation, HealthCheckAnnotation
from oceanhost.hosting.resources import ProjectResource, Resource

HTTP_SCHEMES = frozenset({"http", "https"})


@dataclass
class EndpointInfo:
    """What a resource exposes over the network."""

    is_http_service: bool
    http_port: int | None = None
    internal_ports: list[int] = field(default_factory=list)
    health_check_path: str | None = None


def is_http_endpoint(endpoint: EndpointAnnotation) -> bool:
    return endpoint.scheme.lower() in HTTP_SCHEMES


def infer_endpoints(resource: Resource) -> EndpointInfo:
    """
    Classify a resource and extract its ports.

    The primary HTTP port is the first http/https endpoint in declaration
    order; every other endpoint with a port becomes an internal port, in
    order, duplicates kept. Projects with no endpoints at all are assumed
    to be HTTP services.

    Example:
        endpoints [grpc:9090, http:8080] -> http_port=8080, internal_ports=[9090]
    """
    endpoints = resource.annotations_of_type(EndpointAnnotation)

    if endpoints:
        is_http = any(is_http_endpoint(e) for e in endpoints)
    else:
        is_http = isinstance(resource, ProjectResource)

    primary = next((e for e in endpoints if is_http_endpoint(e)), None)
    http_port = primary.effective_port if primary is not None else None

    internal_ports = [
        e.effective_port
        for e in endpoints
        if e is not primary and e.effective_port is not None
    ]

    health_check = resource.get_annotation(HealthCheckAnnotation)

    return EndpointInfo(
        is_http_service=is_http,
        http_port=http_port,
        internal_ports=internal_ports,
        health_check_path=health_check.path if health_check else None,
    )
