"""
App Platform publisher.

Hooks into the after-publish event, builds the app spec for the published
resources and writes two files to the output directory:

    app-spec.yaml           App Platform app spec
    deploy-appplatform.sh   doctl script that creates or updates the app
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import structlog

from oceanhost.appplatform.annotations import (
    AppNameAnnotation,
    AppSpecConfigurationAnnotation,
    AppSpecPublishAnnotation,
    ContainerRegistryAnnotation,
    RegionAnnotation,
)
from oceanhost.appplatform.generator import generate_app_spec, managed_category
from oceanhost.appplatform.models import AppSpec, ComponentDefaults
from oceanhost.appplatform.serializer import to_yaml
from oceanhost.config.settings import Settings, get_settings
from oceanhost.core.errors import PublishCancelledError, PublishError
from oceanhost.core.naming import sanitize_name
from oceanhost.git import detect_git_info
from oceanhost.hosting.eventing import AfterPublishEvent, ApplicationModel
from oceanhost.hosting.resources import ContainerRegistryResource, Resource
from oceanhost.logging import bind_context
from oceanhost.registry import registry_name_of

logger = structlog.get_logger()

DEFAULT_OUTPUT_DIR = "oceanhost-output"
SCRIPT_MODE = 0o755

DEPLOY_SCRIPT_TEMPLATE = """\
#!/bin/bash
# Deploy to DigitalOcean App Platform
# Requires: doctl CLI (https://docs.digitalocean.com/reference/doctl/how-to/install/)

set -e

SCRIPT_DIR="$(cd "$(dirname "${{BASH_SOURCE[0]}}")" && pwd)"
cd "$SCRIPT_DIR"

APP_NAME="{app_name}"
SPEC_FILE="{spec_file}"

echo "Deploying '$APP_NAME' to DigitalOcean App Platform..."

# Check if app exists
if doctl apps list --format Name --no-header 2>/dev/null | grep -qx "$APP_NAME"; then
    echo "Updating existing app '$APP_NAME'..."
    APP_ID=$(doctl apps list --format ID,Name --no-header | awk -v name="$APP_NAME" '$2 == name {{print $1}}' | head -1)
    doctl apps update "$APP_ID" --spec "$SPEC_FILE"
else
    echo "Creating new app '$APP_NAME'..."
    doctl apps create --spec "$SPEC_FILE"
fi

echo ""
echo "Deployment initiated. Check status at https://cloud.digitalocean.com/apps"
"""


class AppPlatformPublisherResource(Resource):
    """Carries app-level publish settings (app name, region, registry, callback)."""


@dataclass
class PublishResult:
    """Result of app spec publishing."""

    app_name: str
    region: str
    spec_file: Path | None = None
    script_file: Path | None = None
    resource_count: int = 0

    @property
    def written(self) -> bool:
        return self.spec_file is not None


def render_deploy_script(app_name: str, spec_file: str = "app-spec.yaml") -> str:
    """Render the doctl deploy script for a sanitized app name."""
    return DEPLOY_SCRIPT_TEMPLATE.format(app_name=app_name, spec_file=spec_file)


def eligible_resources(resources: Iterable[Resource]) -> list[Resource]:
    """Resources explicitly published, plus managed data services."""
    return [
        r
        for r in resources
        if r.has_annotation(AppSpecPublishAnnotation) or managed_category(r) is not None
    ]


def _find_publisher(model: ApplicationModel) -> AppPlatformPublisherResource | None:
    publishers = model.resources_of_type(AppPlatformPublisherResource)
    return publishers[0] if publishers else None


def _first_annotation(
    model: ApplicationModel, publisher: Resource | None, annotation_type: type
) -> object | None:
    """Annotation from the publisher first, then from any other resource."""
    if publisher is not None:
        annotation = publisher.get_annotation(annotation_type)
        if annotation is not None:
            return annotation
    for resource in model.resources:
        annotation = resource.get_annotation(annotation_type)
        if annotation is not None:
            return annotation
    return None


def resolve_app_name(
    model: ApplicationModel, publisher: Resource | None, default: str
) -> str:
    annotation = _first_annotation(model, publisher, AppNameAnnotation)
    return annotation.app_name if annotation else default  # type: ignore[attr-defined]


def resolve_region(model: ApplicationModel, publisher: Resource | None, default: str) -> str:
    annotation = _first_annotation(model, publisher, RegionAnnotation)
    return annotation.region if annotation else default  # type: ignore[attr-defined]


def resolve_registry_name(model: ApplicationModel, publisher: Resource | None) -> str | None:
    """Registry name from an explicit registry link, else from a registry resource."""
    annotation = _first_annotation(model, publisher, ContainerRegistryAnnotation)
    if annotation is not None:
        return registry_name_of(annotation.registry)  # type: ignore[attr-defined]

    for registry in model.resources_of_type(ContainerRegistryResource):
        name = registry_name_of(registry)
        if name:
            return name
    return None


def resolve_output_dir(event: AfterPublishEvent, settings: Settings) -> Path:
    if event.output_path is not None:
        return Path(event.output_path)
    if settings.output_dir:
        return Path(settings.output_dir)
    return Path.cwd() / DEFAULT_OUTPUT_DIR


def build_app_spec(event: AfterPublishEvent, settings: Settings) -> AppSpec | None:
    """Build the app spec for an event, or None when nothing is published."""
    model = event.model
    resources = eligible_resources(model.resources)
    if not resources:
        logger.info("app_spec_skipped", reason="no_published_resources")
        return None

    publisher = _find_publisher(model)
    app_name = resolve_app_name(model, publisher, settings.app_name)
    region = resolve_region(model, publisher, settings.region)
    registry_name = resolve_registry_name(model, publisher)

    git_info = detect_git_info(
        event.app_directory,
        git_executable=settings.git_executable,
        timeout=settings.git_timeout_seconds,
    )

    spec = generate_app_spec(
        app_name,
        region,
        resources,
        registry_name=registry_name,
        git_info=git_info,
        defaults=ComponentDefaults(
            instance_size_slug=settings.instance_size_slug,
            instance_count=settings.instance_count,
        ),
    )

    if publisher is not None:
        for annotation in publisher.annotations_of_type(AppSpecConfigurationAnnotation):
            annotation.configure(spec)
        # Callbacks may rename the app; the spec and deploy script share one name
        spec.name = sanitize_name(spec.name)

    return spec


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise PublishError(
            f"Failed to write {path.name}: {e}",
            details={"path": str(path)},
        ) from e


def generate_app_spec_files(
    event: AfterPublishEvent, settings: Settings | None = None
) -> PublishResult:
    """
    Generate app-spec.yaml and the deploy script for an after-publish event.

    Args:
        event: The after-publish event carrying the application model
        settings: Settings override (defaults to get_settings())

    Returns:
        PublishResult; ``written`` is False when no resource is published

    Raises:
        PublishCancelledError: If the event was cancelled before writing
        PublishError: If either file cannot be written
    """
    settings = settings or get_settings()

    spec = build_app_spec(event, settings)
    if spec is None:
        return PublishResult(app_name=sanitize_name(settings.app_name), region=settings.region)

    # Everything is rendered before the first write
    spec_yaml = to_yaml(spec)
    script = render_deploy_script(spec.name, settings.spec_file_name)
    resource_count = sum(
        len(components or [])
        for components in (
            spec.services,
            spec.workers,
            spec.static_sites,
            spec.functions,
            spec.databases,
        )
    )

    log = bind_context(app=spec.name, region=spec.region.value)

    if event.cancelled:
        log.warning("app_spec_publish_cancelled")
        raise PublishCancelledError("Publish cancelled before writing output files")

    output_dir = resolve_output_dir(event, settings)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PublishError(
            f"Failed to create output directory: {e}",
            details={"path": str(output_dir)},
        ) from e

    spec_file = output_dir / settings.spec_file_name
    script_file = output_dir / settings.script_file_name

    _write_file(spec_file, spec_yaml)
    _write_file(script_file, script)

    if os.name != "nt":
        try:
            script_file.chmod(SCRIPT_MODE)
        except OSError as e:
            raise PublishError(
                f"Failed to mark {script_file.name} executable: {e}",
                details={"path": str(script_file)},
            ) from e

    log.info(
        "app_spec_published",
        spec_file=str(spec_file),
        script_file=str(script_file),
        components=resource_count,
    )

    return PublishResult(
        app_name=spec.name,
        region=spec.region.value,
        spec_file=spec_file,
        script_file=script_file,
        resource_count=resource_count,
    )
