"""Tests for the application model builder and event bus."""

import threading
from unittest.mock import MagicMock

import pytest

from oceanhost.core.errors import ConfigurationError
from oceanhost.hosting.annotations import EndpointAnnotation, HealthCheckAnnotation
from oceanhost.hosting.eventing import AfterPublishEvent, ApplicationModel, EventBus
from oceanhost.hosting.resources import (
    ContainerResource,
    PostgresDatabaseResource,
    ProjectResource,
    Resource,
)


class TestDistributedApplicationBuilder:
    """Tests for DistributedApplicationBuilder."""

    def test_relative_project_path_resolves_against_app_directory(self, builder, tmp_path):
        api = builder.add_project("api", "src/api")

        assert api.resource.project_path == tmp_path / "src" / "api"
        assert api.resource.source_directory == tmp_path / "src" / "api"

    def test_duplicate_names_rejected(self, builder):
        """Test names are unique regardless of case."""
        builder.add_container("api", "nginx")

        with pytest.raises(ConfigurationError):
            builder.add_project("API", "api")

    def test_get_resource_is_case_insensitive(self, builder):
        cache = builder.add_redis("Cache")

        assert builder.get_resource("cache") is cache.resource
        assert builder.get_resource("missing") is None

    def test_postgres_database(self, builder):
        pg = builder.add_postgres("pg")
        db = builder.add_postgres_database(pg, "orders")

        assert isinstance(db.resource, PostgresDatabaseResource)
        assert db.resource.server is pg.resource
        assert db.resource.database_name == "orders"

    def test_executable_source_directory(self, builder, tmp_path):
        worker = builder.add_executable("jobs", "python", "jobs", args=["-m", "jobs"])

        assert worker.resource.source_directory == tmp_path / "jobs"
        assert worker.resource.args == ["-m", "jobs"]

    def test_build_snapshots_resources(self, builder):
        builder.add_container("api", "nginx")

        app = builder.build()
        builder.add_container("late", "nginx")

        assert [r.name for r in app.model.resources] == ["api"]


class TestResourceBuilder:
    def test_duplicate_endpoint_name_rejected(self, builder):
        api = builder.add_container("api", "nginx").with_http_endpoint(target_port=80)

        with pytest.raises(ConfigurationError):
            api.with_http_endpoint(target_port=81)

    def test_external_http_endpoints(self, builder):
        api = (
            builder.add_container("api", "nginx")
            .with_http_endpoint(target_port=80)
            .with_endpoint(name="grpc", scheme="grpc", target_port=9090)
            .with_external_http_endpoints()
        )

        external = {e.name: e.is_external for e in api.resource.annotations_of_type(EndpointAnnotation)}
        assert external == {"http": True, "grpc": False}

    def test_health_check_replaced(self, builder):
        api = builder.add_project("api", "api").with_http_health_check("/a").with_http_health_check("/b")

        checks = api.resource.annotations_of_type(HealthCheckAnnotation)
        assert [c.path for c in checks] == ["/b"]


class TestResources:
    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Resource("")

    def test_container_image_reference(self):
        assert ContainerResource("web", "nginx", tag="1.25").image_reference == "nginx:1.25"
        assert ContainerResource("web", "nginx").image_reference == "nginx"

    def test_generic_resource_has_no_source_directory(self, tmp_path):
        assert Resource("thing").source_directory is None
        assert ProjectResource("api", tmp_path).source_directory == tmp_path


class TestEventBus:
    """Tests for EventBus."""

    def test_handlers_called_in_order(self, tmp_path):
        bus = EventBus()
        calls = []
        bus.subscribe(AfterPublishEvent, lambda e: calls.append("first") or 1)
        bus.subscribe(AfterPublishEvent, lambda e: calls.append("second") or 2)

        results = bus.publish(AfterPublishEvent(model=ApplicationModel(), app_directory=tmp_path))

        assert calls == ["first", "second"]
        assert results == [1, 2]

    def test_other_event_types_ignored(self, tmp_path):
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe(str, handler)

        bus.publish(AfterPublishEvent(model=ApplicationModel(), app_directory=tmp_path))

        handler.assert_not_called()

    def test_handler_errors_propagate(self, tmp_path):
        bus = EventBus()
        bus.subscribe(AfterPublishEvent, MagicMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            bus.publish(AfterPublishEvent(model=ApplicationModel(), app_directory=tmp_path))

    def test_cancelled_property(self, tmp_path):
        cancel = threading.Event()
        event = AfterPublishEvent(model=ApplicationModel(), app_directory=tmp_path, cancel_event=cancel)

        assert event.cancelled is False
        cancel.set()
        assert event.cancelled is True
