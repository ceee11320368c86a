"""
App spec generator.

Walks the published resources, classifies each one and builds the App
Platform component specs for it.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

import structlog

from oceanhost.appplatform.annotations import (
    AppFunctionsAnnotation,
    AppServiceAnnotation,
    AppStaticSiteAnnotation,
    AppWorkerAnnotation,
    ComponentAnnotation,
    SizingAnnotation,
)
from oceanhost.appplatform.endpoints import infer_endpoints
from oceanhost.appplatform.models import (
    DEFAULT_HTTP_PORT,
    AppSpec,
    ComponentDefaults,
    DatabaseEngine,
    DatabaseSpec,
    FunctionsSpec,
    HealthCheck,
    ServiceSpec,
    StaticSiteSpec,
    WorkerSpec,
)
from oceanhost.appplatform.sources import ResolvedSource, resolve_deployment_source
from oceanhost.core.naming import sanitize_name
from oceanhost.core.regions import normalize_region
from oceanhost.git import GitRepoInfo
from oceanhost.hosting.annotations import ManagedServiceCategory
from oceanhost.hosting.resources import (
    ContainerResource,
    PostgresDatabaseResource,
    ProjectResource,
    Resource,
)

logger = structlog.get_logger()

S = TypeVar("S")

# Stop-gap for resources that don't declare a category: exact class names
# only, so e.g. a "MyRedisClientWrapper" is never mistaken for a cache.
_RELATIONAL_TYPE_NAMES = frozenset(
    {"PostgresServerResource", "PostgresDatabaseResource", "PostgresResource"}
)
_KEY_VALUE_TYPE_NAMES = frozenset({"RedisResource", "ValkeyResource", "GarnetResource"})


def managed_category(resource: Resource) -> ManagedServiceCategory | None:
    """Declared managed-service category of a resource, if any."""
    if resource.category is not None:
        return resource.category

    type_name = type(resource).__name__
    if type_name in _RELATIONAL_TYPE_NAMES:
        return ManagedServiceCategory.RELATIONAL
    if type_name in _KEY_VALUE_TYPE_NAMES:
        return ManagedServiceCategory.KEY_VALUE
    return None


def _apply_source(spec: object, source: ResolvedSource) -> None:
    if source.github is not None:
        spec.github = source.github  # type: ignore[attr-defined]
    if source.image is not None:
        spec.image = source.image  # type: ignore[attr-defined]
    if source.environment_slug is not None:
        spec.environment_slug = source.environment_slug  # type: ignore[attr-defined]
    if source.source_dir is not None:
        spec.source_dir = source.source_dir  # type: ignore[attr-defined]


def _apply_sizing(spec: ServiceSpec | WorkerSpec, resource: Resource) -> None:
    sizing = resource.get_annotation(SizingAnnotation)
    if sizing is None:
        return
    if sizing.instance_size_slug is not None:
        spec.instance_size_slug = sizing.instance_size_slug
    if sizing.instance_count is not None:
        spec.instance_count = sizing.instance_count


def _configure_last(spec: S, resource: Resource) -> S:
    """Run the resource's configure callback, if it matches the app spec component kind."""
    for annotation in resource.annotations_of_type(ComponentAnnotation):
        if annotation.configure is None:
            continue
        if isinstance(spec, annotation.spec_type):
            annotation.apply(spec)
        else:
            logger.warning(
                "configure_callback_kind_mismatch",
                resource=resource.name,
                callback_kind=annotation.spec_type.__name__,
                spec_kind=type(spec).__name__,
            )
    return spec


def build_service_spec(
    resource: Resource,
    registry_name: str | None,
    git_info: GitRepoInfo | None,
    defaults: ComponentDefaults,
) -> ServiceSpec:
    endpoints = infer_endpoints(resource)

    http_port = endpoints.http_port
    if http_port is None and isinstance(resource, ProjectResource):
        http_port = DEFAULT_HTTP_PORT

    spec = ServiceSpec(
        name=sanitize_name(resource.name),
        http_port=http_port,
        internal_ports=endpoints.internal_ports or None,
        instance_count=defaults.instance_count,
        instance_size_slug=defaults.instance_size_slug,
    )
    if endpoints.health_check_path:
        spec.health_check = HealthCheck(http_path=endpoints.health_check_path)

    _apply_source(spec, resolve_deployment_source(resource, registry_name, git_info))
    _apply_sizing(spec, resource)
    return _configure_last(spec, resource)


def build_worker_spec(
    resource: Resource,
    registry_name: str | None,
    git_info: GitRepoInfo | None,
    defaults: ComponentDefaults,
) -> WorkerSpec:
    spec = WorkerSpec(
        name=sanitize_name(resource.name),
        instance_count=defaults.instance_count,
        instance_size_slug=defaults.instance_size_slug,
    )

    _apply_source(spec, resolve_deployment_source(resource, registry_name, git_info))
    _apply_sizing(spec, resource)
    return _configure_last(spec, resource)


def build_static_site_spec(resource: Resource, git_info: GitRepoInfo | None) -> StaticSiteSpec:
    spec = StaticSiteSpec(name=sanitize_name(resource.name))
    _apply_source(spec, resolve_deployment_source(resource, git_info=git_info, allow_image=False))
    return _configure_last(spec, resource)


def build_functions_spec(resource: Resource, git_info: GitRepoInfo | None) -> FunctionsSpec:
    spec = FunctionsSpec(name=sanitize_name(resource.name))
    source = resolve_deployment_source(resource, git_info=git_info, allow_image=False)
    # Functions have no buildpack
    source.environment_slug = None
    _apply_source(spec, source)
    return _configure_last(spec, resource)


def build_database_spec(
    resource: Resource, engine: DatabaseEngine, db_name: str | None = None
) -> DatabaseSpec:
    return DatabaseSpec(
        name=sanitize_name(resource.name), engine=engine, production=False, db_name=db_name
    )


def _server_db_names(resources: list[Resource]) -> dict[int, str]:
    """
    Map each published Postgres server to the database name it hosts.

    A database child whose server is published too folds into the server's
    component; the first child per server names the dev database.
    """
    present = {id(r) for r in resources}
    db_names: dict[int, str] = {}
    for resource in resources:
        if isinstance(resource, PostgresDatabaseResource) and id(resource.server) in present:
            db_names.setdefault(id(resource.server), resource.database_name)
    return db_names


def generate_app_spec(
    app_name: str,
    region: str,
    resources: Iterable[Resource],
    registry_name: str | None = None,
    git_info: GitRepoInfo | None = None,
    defaults: ComponentDefaults | None = None,
) -> AppSpec:
    """
    Generate an App Platform app spec from application resources.

    Classification, first match wins:
        static-site marker             -> static_sites
        functions marker               -> functions
        project/container, worker mark -> workers
        project/container, svc marker  -> services
        project/container, HTTP        -> services
        project/container, not HTTP    -> workers
        relational category            -> databases (PG)
        key-value category             -> databases (REDIS)
        other resource, service marker -> services
        other resource, worker marker  -> workers
        anything else                  -> excluded

    Args:
        app_name: App name, sanitized before use
        region: Region or datacenter slug, normalized before use
        resources: Resources to publish, in declaration order
        registry_name: DOCR registry name for image-annotated resources
        git_info: Detected repository for source-based deployment
        defaults: Instance size/count defaults for services and workers

    Returns:
        AppSpec with empty component lists set to None
    """
    defaults = defaults or ComponentDefaults()

    services: list[ServiceSpec] = []
    workers: list[WorkerSpec] = []
    static_sites: list[StaticSiteSpec] = []
    functions: list[FunctionsSpec] = []
    databases: list[DatabaseSpec] = []

    resources = list(resources)
    server_db_names = _server_db_names(resources)

    for resource in resources:
        if (
            isinstance(resource, PostgresDatabaseResource)
            and id(resource.server) in server_db_names
        ):
            logger.debug(
                "resource_folded", resource=resource.name, server=resource.server.name
            )
            continue

        category = managed_category(resource)

        if resource.has_annotation(AppStaticSiteAnnotation):
            static_sites.append(build_static_site_spec(resource, git_info))
        elif resource.has_annotation(AppFunctionsAnnotation):
            functions.append(build_functions_spec(resource, git_info))
        elif isinstance(resource, (ProjectResource, ContainerResource)):
            # Explicit markers beat endpoint inference
            if resource.has_annotation(AppWorkerAnnotation):
                workers.append(build_worker_spec(resource, registry_name, git_info, defaults))
            elif resource.has_annotation(AppServiceAnnotation):
                services.append(build_service_spec(resource, registry_name, git_info, defaults))
            elif infer_endpoints(resource).is_http_service:
                services.append(build_service_spec(resource, registry_name, git_info, defaults))
            else:
                workers.append(build_worker_spec(resource, registry_name, git_info, defaults))
        elif category is ManagedServiceCategory.RELATIONAL:
            databases.append(
                build_database_spec(
                    resource, DatabaseEngine.PG, db_name=server_db_names.get(id(resource))
                )
            )
        elif category is ManagedServiceCategory.KEY_VALUE:
            databases.append(build_database_spec(resource, DatabaseEngine.REDIS))
        elif resource.has_annotation(AppServiceAnnotation):
            services.append(build_service_spec(resource, registry_name, git_info, defaults))
        elif resource.has_annotation(AppWorkerAnnotation):
            workers.append(build_worker_spec(resource, registry_name, git_info, defaults))
        else:
            logger.debug("resource_excluded", resource=resource.name, type=type(resource).__name__)
            continue

        logger.debug("resource_classified", resource=resource.name)

    spec = AppSpec(
        name=sanitize_name(app_name),
        region=normalize_region(region),
        services=services or None,
        workers=workers or None,
        static_sites=static_sites or None,
        functions=functions or None,
        databases=databases or None,
    )

    logger.info(
        "app_spec_generated",
        app=spec.name,
        region=spec.region.value,
        services=len(services),
        workers=len(workers),
        static_sites=len(static_sites),
        functions=len(functions),
        databases=len(databases),
    )
    return spec
