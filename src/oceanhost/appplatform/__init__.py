"""
DigitalOcean App Platform publishing.

Turns the application model into an App Platform app spec and a doctl
deploy script.
"""

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
from oceanhost.appplatform.endpoints import EndpointInfo, infer_endpoints
from oceanhost.appplatform.extensions import (
    configure_app_spec,
    publish_as_app_service,
    publish_as_app_worker,
    publish_as_container_image,
    publish_as_functions,
    publish_as_static_site,
    with_app_name,
    with_app_platform_deploy_support,
    with_container_registry,
    with_github_source,
    with_region,
)
from oceanhost.appplatform.generator import generate_app_spec
from oceanhost.appplatform.images import ImageReference, parse_image_reference
from oceanhost.appplatform.models import (
    AppSpec,
    DatabaseEngine,
    DatabaseSpec,
    EnvVar,
    FunctionsSpec,
    GitHubSource,
    HealthCheck,
    ImageSource,
    RegistryType,
    ServiceSpec,
    StaticSiteSpec,
    WorkerSpec,
)
from oceanhost.appplatform.publisher import (
    AppPlatformPublisherResource,
    PublishResult,
    generate_app_spec_files,
)
from oceanhost.appplatform.serializer import to_dict, to_yaml
from oceanhost.appplatform.sources import ResolvedSource, resolve_deployment_source

__all__ = [
    # Models
    "AppSpec",
    "ServiceSpec",
    "WorkerSpec",
    "StaticSiteSpec",
    "FunctionsSpec",
    "DatabaseSpec",
    "DatabaseEngine",
    "HealthCheck",
    "GitHubSource",
    "ImageSource",
    "RegistryType",
    "EnvVar",
    # Annotations
    "AppSpecPublishAnnotation",
    "AppServiceAnnotation",
    "AppWorkerAnnotation",
    "AppStaticSiteAnnotation",
    "AppFunctionsAnnotation",
    "GitHubSourceAnnotation",
    "GitHubSourceConfig",
    "ContainerImageAnnotation",
    "ContainerRegistryAnnotation",
    "SizingAnnotation",
    "AppNameAnnotation",
    "RegionAnnotation",
    "AppSpecConfigurationAnnotation",
    # Generation
    "generate_app_spec",
    "infer_endpoints",
    "EndpointInfo",
    "parse_image_reference",
    "ImageReference",
    "resolve_deployment_source",
    "ResolvedSource",
    "to_dict",
    "to_yaml",
    # Publishing
    "AppPlatformPublisherResource",
    "PublishResult",
    "generate_app_spec_files",
    "with_app_platform_deploy_support",
    "publish_as_app_service",
    "publish_as_app_worker",
    "publish_as_static_site",
    "publish_as_functions",
    "publish_as_container_image",
    "with_github_source",
    "with_region",
    "with_app_name",
    "with_container_registry",
    "configure_app_spec",
]
