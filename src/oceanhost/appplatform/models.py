"""
Data models for the App Platform app spec.

Field names match the App Platform schema (lower snake case) and field
order is the order keys are written in. Optional fields left as None are
omitted from the serialized document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from oceanhost.core.regions import Region

# Smallest shared-CPU tier
DEFAULT_INSTANCE_SIZE_SLUG = "apps-s-1vcpu-0.5gb"
DEFAULT_INSTANCE_COUNT = 1
DEFAULT_HTTP_PORT = 8080


class RegistryType(StrEnum):
    """Container registries App Platform can pull from."""

    DOCR = "DOCR"
    DOCKER_HUB = "DOCKER_HUB"
    GHCR = "GHCR"


class DatabaseEngine(StrEnum):
    """Managed database engines."""

    PG = "PG"
    MYSQL = "MYSQL"
    REDIS = "REDIS"
    MONGODB = "MONGODB"


@dataclass
class HealthCheck:
    """HTTP health check for a service."""

    http_path: str
    initial_delay_seconds: int | None = None
    period_seconds: int | None = None
    timeout_seconds: int | None = None
    success_threshold: int | None = None
    failure_threshold: int | None = None


@dataclass
class GitHubSource:
    """Build from a GitHub repository."""

    repo: str
    branch: str = "main"
    deploy_on_push: bool = True


@dataclass
class ImageSource:
    """Deploy a pre-built container image.

    Exactly one of ``tag`` or ``digest`` is expected to be set.
    """

    registry_type: RegistryType
    repository: str
    registry: str | None = None
    tag: str | None = "latest"
    digest: str | None = None


@dataclass
class EnvVar:
    """Environment variable for a component."""

    key: str
    value: str | None = None
    scope: str | None = None
    type: str | None = None


@dataclass
class ServiceSpec:
    """An HTTP-reachable component."""

    name: str
    environment_slug: str | None = None
    source_dir: str | None = None
    http_port: int | None = None
    internal_ports: list[int] | None = None
    instance_count: int = DEFAULT_INSTANCE_COUNT
    instance_size_slug: str = DEFAULT_INSTANCE_SIZE_SLUG
    health_check: HealthCheck | None = None
    github: GitHubSource | None = None
    image: ImageSource | None = None
    build_command: str | None = None
    run_command: str | None = None
    envs: list[EnvVar] | None = None


@dataclass
class WorkerSpec:
    """A background component with no HTTP surface."""

    name: str
    environment_slug: str | None = None
    source_dir: str | None = None
    instance_count: int = DEFAULT_INSTANCE_COUNT
    instance_size_slug: str = DEFAULT_INSTANCE_SIZE_SLUG
    github: GitHubSource | None = None
    image: ImageSource | None = None
    build_command: str | None = None
    run_command: str | None = None
    envs: list[EnvVar] | None = None


@dataclass
class StaticSiteSpec:
    """A static site built from source."""

    name: str
    environment_slug: str | None = None
    source_dir: str | None = None
    github: GitHubSource | None = None
    build_command: str | None = None
    output_dir: str | None = None
    index_document: str | None = None
    error_document: str | None = None
    catchall_document: str | None = None
    envs: list[EnvVar] | None = None


@dataclass
class FunctionsSpec:
    """A serverless functions component."""

    name: str
    source_dir: str | None = None
    github: GitHubSource | None = None
    envs: list[EnvVar] | None = None


@dataclass
class DatabaseSpec:
    """A managed (dev) database."""

    name: str
    engine: DatabaseEngine
    production: bool = False
    version: str | None = None
    db_name: str | None = None


@dataclass
class AppSpec:
    """Root of the App Platform app spec."""

    name: str
    region: Region
    services: list[ServiceSpec] | None = None
    workers: list[WorkerSpec] | None = None
    static_sites: list[StaticSiteSpec] | None = None
    functions: list[FunctionsSpec] | None = None
    databases: list[DatabaseSpec] | None = None
    envs: list[EnvVar] | None = None


# Component specs that may receive a deployment source
ComponentSpec = ServiceSpec | WorkerSpec | StaticSiteSpec | FunctionsSpec


@dataclass
class ComponentDefaults:
    """Instance defaults applied to services and workers."""

    instance_size_slug: str = DEFAULT_INSTANCE_SIZE_SLUG
    instance_count: int = DEFAULT_INSTANCE_COUNT
