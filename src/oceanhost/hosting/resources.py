"""
Resource types of the application model.

Resources are named nodes with an ordered list of annotations. The
App Platform generator only reads them; it never mutates a resource.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

from oceanhost.hosting.annotations import ManagedServiceCategory

A = TypeVar("A")


class Resource:
    """A generic named resource."""

    # Managed data services declare their category; everything else is None
    category: ManagedServiceCategory | None = None

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("Resource name is required")
        self.name = name
        self.annotations: list[Any] = []

    @property
    def source_directory(self) -> Path | None:
        """On-disk source directory, for resources built from source."""
        return None

    def add_annotation(self, annotation: Any, replace: bool = False) -> None:
        """Attach an annotation.

        With ``replace=True`` existing annotations of the same type are
        removed first.
        """
        if replace:
            self.annotations = [a for a in self.annotations if type(a) is not type(annotation)]
        self.annotations.append(annotation)

    def annotations_of_type(self, annotation_type: type[A]) -> list[A]:
        """All annotations of the given type, in declaration order."""
        return [a for a in self.annotations if isinstance(a, annotation_type)]

    def get_annotation(self, annotation_type: type[A]) -> A | None:
        """First annotation of the given type, if any."""
        for annotation in self.annotations:
            if isinstance(annotation, annotation_type):
                return annotation
        return None

    def has_annotation(self, annotation_type: type) -> bool:
        return self.get_annotation(annotation_type) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ProjectResource(Resource):
    """A project built from source code (the managed-project kind).

    Attributes:
        project_path: Directory containing the project sources
        runtime: Declared runtime, used to pick the App Platform buildpack
    """

    def __init__(self, name: str, project_path: str | Path, runtime: str = "python") -> None:
        super().__init__(name)
        self.project_path = Path(project_path)
        self.runtime = runtime

    @property
    def source_directory(self) -> Path | None:
        return self.project_path


class ContainerResource(Resource):
    """A resource that runs a pre-built container image."""

    def __init__(self, name: str, image: str, tag: str | None = None) -> None:
        super().__init__(name)
        if not image:
            raise ValueError("Container image is required")
        self.image = image
        self.tag = tag

    @property
    def image_reference(self) -> str:
        """Image reference as written, with the tag appended when set."""
        if self.tag:
            return f"{self.image}:{self.tag}"
        return self.image


class ExecutableResource(Resource):
    """A process started from a command in a working directory."""

    def __init__(
        self,
        name: str,
        command: str,
        working_directory: str | Path,
        args: list[str] | None = None,
    ) -> None:
        super().__init__(name)
        self.command = command
        self.working_directory = Path(working_directory)
        self.args = list(args or [])

    @property
    def source_directory(self) -> Path | None:
        return self.working_directory


class ParameterResource(Resource):
    """An externally supplied value, optionally secret."""

    def __init__(self, name: str, secret: bool = False, value: str | None = None) -> None:
        super().__init__(name)
        self.secret = secret
        self.value = value


class PostgresServerResource(Resource):
    category = ManagedServiceCategory.RELATIONAL


class PostgresDatabaseResource(Resource):
    category = ManagedServiceCategory.RELATIONAL

    def __init__(self, name: str, server: PostgresServerResource, database_name: str | None = None):
        super().__init__(name)
        self.server = server
        self.database_name = database_name or name


class RedisResource(Resource):
    category = ManagedServiceCategory.KEY_VALUE


class ValkeyResource(Resource):
    category = ManagedServiceCategory.KEY_VALUE


class GarnetResource(Resource):
    category = ManagedServiceCategory.KEY_VALUE


class ContainerRegistryResource(Resource):
    """A container registry that images are pushed to.

    Attributes:
        endpoint: Registry host, e.g. ``registry.digitalocean.com``
        repository: Repository namespace inside the registry
    """

    def __init__(self, name: str, endpoint: str, repository: str | None) -> None:
        super().__init__(name)
        self.endpoint = endpoint
        self.repository = repository
