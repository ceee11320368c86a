"""
Builder API for declaring the application model.

Example:
    builder = DistributedApplicationBuilder()
    cache = builder.add_redis("cache")
    api = (
        builder.add_project("api", "./src/api")
        .with_http_endpoint(target_port=8000)
        .with_http_health_check("/health")
    )
    app = builder.build()
    app.publish(output_path="out")
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Generic, TypeVar

from oceanhost.core.errors import ConfigurationError
from oceanhost.hosting.annotations import EndpointAnnotation, HealthCheckAnnotation
from oceanhost.hosting.eventing import AfterPublishEvent, ApplicationModel, EventBus
from oceanhost.hosting.resources import (
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

T = TypeVar("T", bound=Resource)


class ResourceBuilder(Generic[T]):
    """Fluent wrapper around a resource that has been added to the model."""

    def __init__(self, app_builder: DistributedApplicationBuilder, resource: T) -> None:
        self.app_builder = app_builder
        self.resource = resource

    def with_annotation(self, annotation: Any, replace: bool = False) -> ResourceBuilder[T]:
        self.resource.add_annotation(annotation, replace=replace)
        return self

    def with_endpoint(
        self,
        name: str | None = None,
        scheme: str = "tcp",
        target_port: int | None = None,
        port: int | None = None,
        is_external: bool = False,
    ) -> ResourceBuilder[T]:
        """Declare an endpoint. The name defaults to the scheme."""
        endpoint_name = name or scheme
        existing = {e.name for e in self.resource.annotations_of_type(EndpointAnnotation)}
        if endpoint_name in existing:
            raise ConfigurationError(
                f"Endpoint '{endpoint_name}' already exists on '{self.resource.name}'",
                details={"resource": self.resource.name, "endpoint": endpoint_name},
            )
        return self.with_annotation(
            EndpointAnnotation(
                name=endpoint_name,
                scheme=scheme,
                target_port=target_port,
                port=port,
                is_external=is_external,
            )
        )

    def with_http_endpoint(
        self, target_port: int | None = None, port: int | None = None, name: str | None = None
    ) -> ResourceBuilder[T]:
        return self.with_endpoint(name=name or "http", scheme="http", target_port=target_port, port=port)

    def with_https_endpoint(
        self, target_port: int | None = None, port: int | None = None, name: str | None = None
    ) -> ResourceBuilder[T]:
        return self.with_endpoint(name=name or "https", scheme="https", target_port=target_port, port=port)

    def with_external_http_endpoints(self) -> ResourceBuilder[T]:
        """Mark every http/https endpoint as externally reachable."""
        for endpoint in self.resource.annotations_of_type(EndpointAnnotation):
            if endpoint.scheme in ("http", "https"):
                endpoint.is_external = True
        return self

    def with_http_health_check(
        self, path: str = "/health", endpoint_name: str | None = None
    ) -> ResourceBuilder[T]:
        return self.with_annotation(
            HealthCheckAnnotation(path=path, endpoint_name=endpoint_name), replace=True
        )


class DistributedApplication:
    """A built application model, ready to publish."""

    def __init__(self, model: ApplicationModel, eventing: EventBus, app_directory: Path) -> None:
        self.model = model
        self.eventing = eventing
        self.app_directory = app_directory

    def publish(
        self,
        output_path: str | Path | None = None,
        cancel_event: threading.Event | None = None,
    ) -> list[Any]:
        """Fire the after-publish event and return the handler results."""
        event = AfterPublishEvent(
            model=self.model,
            app_directory=self.app_directory,
            output_path=Path(output_path) if output_path is not None else None,
            cancel_event=cancel_event,
        )
        return self.eventing.publish(event)


class DistributedApplicationBuilder:
    """Collects resources and lifecycle subscriptions for an app host."""

    def __init__(self, app_directory: str | Path | None = None) -> None:
        self.app_directory = Path(app_directory) if app_directory else Path.cwd()
        self.resources: list[Resource] = []
        self.eventing = EventBus()

    def add_resource(self, resource: T) -> ResourceBuilder[T]:
        """Add a resource. Names are unique, case-insensitively."""
        if self.get_resource(resource.name) is not None:
            raise ConfigurationError(
                f"Cannot add resource '{resource.name}': name already in use",
                details={"resource": resource.name},
            )
        self.resources.append(resource)
        return ResourceBuilder(self, resource)

    def get_resource(self, name: str) -> Resource | None:
        name_lower = name.lower()
        for resource in self.resources:
            if resource.name.lower() == name_lower:
                return resource
        return None

    def resources_of_type(self, resource_type: type[T]) -> list[T]:
        return [r for r in self.resources if isinstance(r, resource_type)]

    def _resolve_path(self, path: str | Path) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.app_directory / path
        return path

    def add_project(
        self, name: str, project_path: str | Path, runtime: str = "python"
    ) -> ResourceBuilder[ProjectResource]:
        return self.add_resource(
            ProjectResource(name, self._resolve_path(project_path), runtime=runtime)
        )

    def add_container(
        self, name: str, image: str, tag: str | None = None
    ) -> ResourceBuilder[ContainerResource]:
        return self.add_resource(ContainerResource(name, image, tag=tag))

    def add_executable(
        self,
        name: str,
        command: str,
        working_directory: str | Path,
        args: list[str] | None = None,
    ) -> ResourceBuilder[ExecutableResource]:
        return self.add_resource(
            ExecutableResource(name, command, self._resolve_path(working_directory), args=args)
        )

    def add_parameter(
        self, name: str, secret: bool = False, value: str | None = None
    ) -> ResourceBuilder[ParameterResource]:
        return self.add_resource(ParameterResource(name, secret=secret, value=value))

    def add_postgres(self, name: str) -> ResourceBuilder[PostgresServerResource]:
        return self.add_resource(PostgresServerResource(name))

    def add_postgres_database(
        self,
        server: ResourceBuilder[PostgresServerResource],
        name: str,
        database_name: str | None = None,
    ) -> ResourceBuilder[PostgresDatabaseResource]:
        return self.add_resource(PostgresDatabaseResource(name, server.resource, database_name))

    def add_redis(self, name: str) -> ResourceBuilder[RedisResource]:
        return self.add_resource(RedisResource(name))

    def add_valkey(self, name: str) -> ResourceBuilder[ValkeyResource]:
        return self.add_resource(ValkeyResource(name))

    def add_garnet(self, name: str) -> ResourceBuilder[GarnetResource]:
        return self.add_resource(GarnetResource(name))

    def build(self) -> DistributedApplication:
        return DistributedApplication(
            model=ApplicationModel(resources=list(self.resources)),
            eventing=self.eventing,
            app_directory=self.app_directory,
        )
