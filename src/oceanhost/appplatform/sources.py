"""
Deployment source resolution.

Decides whether a component deploys from a container image, from a GitHub
repository, or is left without a source. Precedence, first match wins:

1. Explicit container image annotation (push to DOCR)
2. Explicit GitHub source annotation
3. Detected git repository, for resources built from a source directory
4. The container's own image reference (container resources only)
5. Nothing

Explicit per-resource configuration always beats inferred defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from oceanhost.appplatform.annotations import ContainerImageAnnotation, GitHubSourceAnnotation
from oceanhost.appplatform.images import parse_image_reference
from oceanhost.appplatform.models import GitHubSource, ImageSource, RegistryType
from oceanhost.core.naming import sanitize_name
from oceanhost.git import GitRepoInfo
from oceanhost.hosting.resources import ContainerResource, ProjectResource, Resource

logger = structlog.get_logger()

# Project runtime -> App Platform buildpack (environment slug)
BUILDPACK_SLUGS: dict[str, str] = {
    "python": "python",
    "node": "node-js",
    "nodejs": "node-js",
    "node-js": "node-js",
    "javascript": "node-js",
    "typescript": "node-js",
    "dotnet": "dotnet",
    "csharp": "dotnet",
    "go": "go",
    "golang": "go",
    "ruby": "ruby",
    "php": "php",
    "java": "java",
    "static": "html",
    "html": "html",
}


@dataclass
class ResolvedSource:
    """Result of source resolution. At most one of github/image is set."""

    github: GitHubSource | None = None
    image: ImageSource | None = None
    environment_slug: str | None = None
    source_dir: str | None = None
    strategy: str = "none"


def buildpack_for(resource: Resource) -> str | None:
    """Environment slug for a project's declared runtime."""
    if not isinstance(resource, ProjectResource):
        return None
    slug = BUILDPACK_SLUGS.get(resource.runtime.lower())
    if slug is None:
        logger.debug("unknown_project_runtime", resource=resource.name, runtime=resource.runtime)
    return slug


def relative_source_dir(source_directory: Path, repo_root: Path) -> str | None:
    """
    Source directory relative to the repository root, with "/" separators.

    Returns None for the root itself or a directory outside the repository.
    """
    try:
        relative = os.path.relpath(Path(source_directory).resolve(), Path(repo_root).resolve())
    except ValueError:
        # Different drives on Windows
        return None

    relative = relative.replace(os.sep, "/")
    if relative == "." or relative == ".." or relative.startswith("../"):
        return None
    return relative


def _image_from_annotation(
    resource: Resource, annotation: ContainerImageAnnotation, registry_name: str | None
) -> ImageSource:
    registry = annotation.registry or registry_name
    image = annotation.image or sanitize_name(resource.name)
    repository = f"{registry}/{image}" if registry else image
    return ImageSource(
        registry_type=RegistryType.DOCR,
        repository=repository,
        tag=annotation.tag or "latest",
    )


def resolve_deployment_source(
    resource: Resource,
    registry_name: str | None = None,
    git_info: GitRepoInfo | None = None,
    allow_image: bool = True,
) -> ResolvedSource:
    """
    Resolve the deployment source for a resource.

    Args:
        resource: Resource being published
        registry_name: Fallback DOCR registry for image annotations
        git_info: Detected repository context, if any
        allow_image: False for component kinds that can't run images

    Returns:
        ResolvedSource describing the chosen strategy
    """
    image_annotation = resource.get_annotation(ContainerImageAnnotation)
    if allow_image and image_annotation is not None:
        return ResolvedSource(
            image=_image_from_annotation(resource, image_annotation, registry_name),
            strategy="image_annotation",
        )

    github_annotation = resource.get_annotation(GitHubSourceAnnotation)
    if github_annotation is not None:
        config = github_annotation.config
        return ResolvedSource(
            github=GitHubSource(
                repo=config.repository,
                branch=config.branch,
                deploy_on_push=config.deploy_on_push,
            ),
            environment_slug=buildpack_for(resource),
            source_dir=config.source_dir,
            strategy="github_annotation",
        )

    source_directory = resource.source_directory
    if git_info is not None and git_info.repository and source_directory is not None:
        source_dir = relative_source_dir(source_directory, git_info.repo_root_path)
        if source_dir is None and Path(source_directory).resolve() != Path(
            git_info.repo_root_path
        ).resolve():
            logger.warning(
                "source_outside_repository",
                resource=resource.name,
                source_directory=str(source_directory),
                repo_root=str(git_info.repo_root_path),
            )
        return ResolvedSource(
            github=GitHubSource(
                repo=git_info.repository,
                branch=git_info.branch,
                deploy_on_push=True,
            ),
            environment_slug=buildpack_for(resource),
            source_dir=source_dir,
            strategy="git_repository",
        )

    if allow_image and isinstance(resource, ContainerResource):
        reference = parse_image_reference(resource.image_reference)
        return ResolvedSource(image=reference.to_image_source(), strategy="container_image")

    return ResolvedSource()
