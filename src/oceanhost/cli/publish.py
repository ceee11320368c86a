"""
Publish command.

Loads an app host module, builds the application model and fires the
after-publish event.

An app host module either defines ``build(builder)`` or exposes a
module-level ``builder``:

    # apphost.py
    def build(builder):
        with_app_platform_deploy_support(builder, "shop")
        api = builder.add_project("api", "./api")
        publish_as_app_service(api)
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from oceanhost.appplatform.publisher import PublishResult
from oceanhost.cli.ux import console, error, header, info, success, warning
from oceanhost.core.errors import (
    ConfigurationError,
    OceanHostError,
    format_error_message,
    main_with_error_handling,
)
from oceanhost.hosting.builder import DistributedApplicationBuilder


def load_apphost(apphost_file: str | Path) -> ModuleType:
    """Import an app host file as a module."""
    path = Path(apphost_file).resolve()
    if not path.is_file():
        raise ConfigurationError(
            f"App host file not found: {apphost_file}", details={"path": str(path)}
        )

    spec = importlib.util.spec_from_file_location(f"oceanhost_apphost_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(
            f"Cannot load app host file: {apphost_file}", details={"path": str(path)}
        )

    module = importlib.util.module_from_spec(spec)
    # Let the app host import siblings
    sys.path.insert(0, str(path.parent))
    try:
        spec.loader.exec_module(module)
    finally:
        sys.path.remove(str(path.parent))
    return module


def builder_from_module(module: ModuleType, app_directory: Path) -> DistributedApplicationBuilder:
    build = getattr(module, "build", None)
    if callable(build):
        builder = DistributedApplicationBuilder(app_directory=app_directory)
        build(builder)
        return builder

    builder = getattr(module, "builder", None)
    if isinstance(builder, DistributedApplicationBuilder):
        return builder

    raise ConfigurationError(
        "App host must define build(builder) or a module-level 'builder'",
        details={"module": module.__name__},
    )


@main_with_error_handling()
def publish_command(apphost_file: str, output_dir: str | None = None) -> int:
    """
    Publish the app host to App Platform files.

    Args:
        apphost_file: Path to the app host Python file
        output_dir: Output directory (default: settings or ./oceanhost-output)

    Returns:
        Exit code (0 = success)
    """
    header("Publish to App Platform")
    console.print()

    try:
        module = load_apphost(apphost_file)
        builder = builder_from_module(module, Path(apphost_file).resolve().parent)
        published = builder.build().publish(output_path=output_dir)
    except OceanHostError as e:
        error(format_error_message(e))
        console.print()
        raise

    results = [r for r in published if isinstance(r, PublishResult)]

    if not results:
        warning("App Platform support is not enabled for this app host")
        console.print("   [muted]Call with_app_platform_deploy_support(builder) in the app host[/muted]")
        console.print()
        return 0

    for result in results:
        if not result.written:
            info("No resources are published to App Platform, nothing written")
            continue

        success(f"Generated app spec for {result.app_name}")
        console.print(f"   [muted]Region:[/muted] {result.region}")
        console.print(f"   [muted]Components:[/muted] {result.resource_count}")
        console.print(f"   [muted]App spec:[/muted] {result.spec_file}")
        console.print(f"   [muted]Deploy script:[/muted] {result.script_file}")
    console.print()
    return 0
