"""
App Platform annotations.

These are attached by the functions in ``oceanhost.appplatform.extensions``
and read by the generator and publisher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Generic, TypeVar

from oceanhost.appplatform.models import (
    AppSpec,
    FunctionsSpec,
    ServiceSpec,
    StaticSiteSpec,
    WorkerSpec,
)
from oceanhost.hosting.resources import ContainerRegistryResource

S = TypeVar("S")


@dataclass
class AppSpecPublishAnnotation:
    """Marks a resource for inclusion in the app spec."""


@dataclass
class ComponentAnnotation(Generic[S]):
    """Base for the per-kind markers carrying a configure callback.

    The callback receives the fully populated component spec and may
    change any field; it runs after every default has been applied.
    """

    configure: Callable[[S], None] | None = None

    spec_type: ClassVar[type] = object

    def apply(self, spec: S) -> None:
        if self.configure is not None:
            self.configure(spec)


@dataclass
class AppServiceAnnotation(ComponentAnnotation[ServiceSpec]):
    """Publish the resource as an App Platform service."""

    spec_type: ClassVar[type] = ServiceSpec


@dataclass
class AppWorkerAnnotation(ComponentAnnotation[WorkerSpec]):
    """Publish the resource as an App Platform worker."""

    spec_type: ClassVar[type] = WorkerSpec


@dataclass
class AppStaticSiteAnnotation(ComponentAnnotation[StaticSiteSpec]):
    """Publish the resource as an App Platform static site."""

    spec_type: ClassVar[type] = StaticSiteSpec


@dataclass
class AppFunctionsAnnotation(ComponentAnnotation[FunctionsSpec]):
    """Publish the resource as App Platform functions."""

    spec_type: ClassVar[type] = FunctionsSpec


@dataclass
class GitHubSourceConfig:
    """GitHub source-based deployment settings for one resource."""

    repository: str
    branch: str = "main"
    deploy_on_push: bool = True
    source_dir: str | None = None


@dataclass
class GitHubSourceAnnotation:
    config: GitHubSourceConfig


@dataclass
class ContainerImageAnnotation:
    """Deploy the resource from an image pushed to DOCR.

    Attributes:
        registry: DOCR registry name; falls back to the attached registry
        image: Image name inside the registry; defaults to the resource name
        tag: Image tag
    """

    registry: str | None = None
    image: str | None = None
    tag: str = "latest"


@dataclass
class SizingAnnotation:
    """Explicit instance size/count for a service or worker."""

    instance_size_slug: str | None = None
    instance_count: int | None = None


@dataclass
class AppNameAnnotation:
    app_name: str


@dataclass
class RegionAnnotation:
    region: str


@dataclass
class ContainerRegistryAnnotation:
    """Links the publisher to the registry images are pushed to."""

    registry: ContainerRegistryResource


@dataclass
class AppSpecConfigurationAnnotation:
    """App-level callback run on the assembled spec before serialization."""

    configure: Callable[[AppSpec], None]
