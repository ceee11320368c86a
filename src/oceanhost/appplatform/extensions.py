"""
Builder functions that opt resources into App Platform publishing.

Example:
    builder = DistributedApplicationBuilder()
    with_app_platform_deploy_support(builder, "shop", region="nyc")

    builder.add_redis("cache")
    api = builder.add_project("api", "./api").with_http_health_check("/health")
    publish_as_app_service(api, configure=lambda s: setattr(s, "instance_count", 2))
"""

from __future__ import annotations

from typing import Callable, TypeVar

import structlog

from oceanhost.appplatform.annotations import (
    AppFunctionsAnnotation,
    AppNameAnnotation,
    AppServiceAnnotation,
    AppSpecConfigurationAnnotation,
    AppSpecPublishAnnotation,
    AppStaticSiteAnnotation,
    AppWorkerAnnotation,
    ContainerImageAnnotation,
    ContainerRegistryAnnotation,
    GitHubSourceAnnotation,
    GitHubSourceConfig,
    RegionAnnotation,
    SizingAnnotation,
)
from oceanhost.appplatform.models import (
    AppSpec,
    FunctionsSpec,
    ServiceSpec,
    StaticSiteSpec,
    WorkerSpec,
)
from oceanhost.appplatform.publisher import AppPlatformPublisherResource, generate_app_spec_files
from oceanhost.hosting.builder import DistributedApplicationBuilder, ResourceBuilder
from oceanhost.hosting.eventing import AfterPublishEvent
from oceanhost.hosting.resources import ContainerRegistryResource, Resource

logger = structlog.get_logger()

PUBLISHER_RESOURCE_NAME = "app-platform"

T = TypeVar("T", bound=Resource)
PublisherBuilder = ResourceBuilder[AppPlatformPublisherResource]


def with_app_platform_deploy_support(
    builder: DistributedApplicationBuilder,
    app_name: str | None = None,
    region: str | None = None,
) -> PublisherBuilder:
    """
    Enable App Platform publishing for the application.

    Safe to call more than once: later calls reuse the publisher resource
    already in the model and never subscribe the publish hook twice.
    """
    existing = builder.resources_of_type(AppPlatformPublisherResource)
    if existing:
        publisher = ResourceBuilder(builder, existing[0])
        logger.debug("app_platform_support_reused", resource=existing[0].name)
    else:
        publisher = builder.add_resource(AppPlatformPublisherResource(PUBLISHER_RESOURCE_NAME))
        builder.eventing.subscribe(AfterPublishEvent, generate_app_spec_files)
        logger.debug("app_platform_support_added", resource=PUBLISHER_RESOURCE_NAME)

    if app_name:
        with_app_name(publisher, app_name)
    if region:
        with_region(publisher, region)
    return publisher


def _mark_published(resource_builder: ResourceBuilder[T]) -> None:
    resource_builder.with_annotation(AppSpecPublishAnnotation(), replace=True)


def publish_as_app_service(
    resource_builder: ResourceBuilder[T],
    configure: Callable[[ServiceSpec], None] | None = None,
    instance_size_slug: str | None = None,
    instance_count: int | None = None,
) -> ResourceBuilder[T]:
    """Publish as a service. ``configure`` runs last on the finished ServiceSpec."""
    _mark_published(resource_builder)
    resource_builder.with_annotation(AppServiceAnnotation(configure=configure), replace=True)
    if instance_size_slug is not None or instance_count is not None:
        resource_builder.with_annotation(
            SizingAnnotation(instance_size_slug=instance_size_slug, instance_count=instance_count),
            replace=True,
        )
    return resource_builder


def publish_as_app_worker(
    resource_builder: ResourceBuilder[T],
    configure: Callable[[WorkerSpec], None] | None = None,
    instance_size_slug: str | None = None,
    instance_count: int | None = None,
) -> ResourceBuilder[T]:
    """Publish as a worker. ``configure`` runs last on the finished WorkerSpec."""
    _mark_published(resource_builder)
    resource_builder.with_annotation(AppWorkerAnnotation(configure=configure), replace=True)
    if instance_size_slug is not None or instance_count is not None:
        resource_builder.with_annotation(
            SizingAnnotation(instance_size_slug=instance_size_slug, instance_count=instance_count),
            replace=True,
        )
    return resource_builder


def publish_as_static_site(
    resource_builder: ResourceBuilder[T],
    configure: Callable[[StaticSiteSpec], None] | None = None,
) -> ResourceBuilder[T]:
    _mark_published(resource_builder)
    return resource_builder.with_annotation(
        AppStaticSiteAnnotation(configure=configure), replace=True
    )


def publish_as_functions(
    resource_builder: ResourceBuilder[T],
    configure: Callable[[FunctionsSpec], None] | None = None,
) -> ResourceBuilder[T]:
    _mark_published(resource_builder)
    return resource_builder.with_annotation(
        AppFunctionsAnnotation(configure=configure), replace=True
    )


def publish_as_container_image(
    resource_builder: ResourceBuilder[T],
    registry: str | None = None,
    image: str | None = None,
    tag: str = "latest",
) -> ResourceBuilder[T]:
    """
    Deploy from an image pushed to DOCR instead of from source.

    Args:
        registry: DOCR registry name; defaults to the app's container registry
        image: Image name; defaults to the sanitized resource name
        tag: Image tag
    """
    _mark_published(resource_builder)
    return resource_builder.with_annotation(
        ContainerImageAnnotation(registry=registry, image=image, tag=tag), replace=True
    )


def with_github_source(
    resource_builder: ResourceBuilder[T],
    repository: str,
    branch: str = "main",
    deploy_on_push: bool = True,
    source_dir: str | None = None,
) -> ResourceBuilder[T]:
    """Deploy the resource from a GitHub repository ("owner/repo")."""
    config = GitHubSourceConfig(
        repository=repository,
        branch=branch,
        deploy_on_push=deploy_on_push,
        source_dir=source_dir,
    )
    return resource_builder.with_annotation(GitHubSourceAnnotation(config), replace=True)


def with_region(resource_builder: ResourceBuilder[T], region: str) -> ResourceBuilder[T]:
    return resource_builder.with_annotation(RegionAnnotation(region), replace=True)


def with_app_name(resource_builder: ResourceBuilder[T], app_name: str) -> ResourceBuilder[T]:
    return resource_builder.with_annotation(AppNameAnnotation(app_name), replace=True)


def with_container_registry(
    resource_builder: ResourceBuilder[T],
    registry: ResourceBuilder[ContainerRegistryResource] | ContainerRegistryResource,
) -> ResourceBuilder[T]:
    """Link the registry images are pushed to."""
    registry_resource = registry.resource if isinstance(registry, ResourceBuilder) else registry
    return resource_builder.with_annotation(
        ContainerRegistryAnnotation(registry_resource), replace=True
    )


def configure_app_spec(
    publisher: PublisherBuilder, configure: Callable[[AppSpec], None]
) -> PublisherBuilder:
    """Register a callback run on the whole AppSpec before it is written."""
    return publisher.with_annotation(AppSpecConfigurationAnnotation(configure), replace=True)
