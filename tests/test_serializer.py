"""Tests for app spec YAML serialization."""

import yaml

from oceanhost.appplatform.models import (
    AppSpec,
    DatabaseEngine,
    DatabaseSpec,
    GitHubSource,
    HealthCheck,
    ImageSource,
    RegistryType,
    ServiceSpec,
    WorkerSpec,
)
from oceanhost.appplatform.serializer import to_dict, to_yaml
from oceanhost.core.regions import Region

ONE_SERVICE_YAML = """\
name: test-app
region: nyc
services:
- name: myservice
  http_port: 8080
  instance_count: 1
  instance_size_slug: apps-s-1vcpu-0.5gb
  health_check:
    http_path: /health
  image:
    registry_type: DOCKER_HUB
    repository: nginx
    tag: latest
"""


class TestToYaml:
    """Tests for to_yaml."""

    def test_empty_spec_is_two_lines(self):
        """Test absent lists produce only name and region."""
        spec = AppSpec(name="test-app", region=Region.NYC)

        output = to_yaml(spec)

        assert output == "name: test-app\nregion: nyc\n"
        assert len(output.splitlines()) == 2

    def test_empty_lists_are_omitted(self):
        spec = AppSpec(name="test-app", region=Region.NYC, services=[], workers=[], databases=[])

        assert to_yaml(spec) == "name: test-app\nregion: nyc\n"

    def test_one_service(self):
        """Test the documented single-service layout."""
        spec = AppSpec(
            name="test-app",
            region=Region.NYC,
            services=[
                ServiceSpec(
                    name="myservice",
                    http_port=8080,
                    health_check=HealthCheck(http_path="/health"),
                    image=ImageSource(
                        registry_type=RegistryType.DOCKER_HUB, repository="nginx", tag="latest"
                    ),
                )
            ],
        )

        assert to_yaml(spec) == ONE_SERVICE_YAML

    def test_top_level_key_order(self):
        spec = AppSpec(
            name="app",
            region=Region.FRA,
            databases=[DatabaseSpec(name="db", engine=DatabaseEngine.PG)],
            workers=[WorkerSpec(name="jobs")],
            services=[ServiceSpec(name="api")],
        )

        assert list(to_dict(spec)) == ["name", "region", "services", "workers", "databases"]

    def test_false_values_are_kept(self):
        """Test booleans are not treated as empty."""
        spec = AppSpec(
            name="app",
            region=Region.NYC,
            databases=[DatabaseSpec(name="db", engine=DatabaseEngine.REDIS)],
            workers=[
                WorkerSpec(
                    name="jobs",
                    github=GitHubSource(repo="o/r", branch="main", deploy_on_push=False),
                )
            ],
        )

        data = to_dict(spec)

        assert data["databases"] == [{"name": "db", "engine": "REDIS", "production": False}]
        assert data["workers"][0]["github"] == {
            "repo": "o/r",
            "branch": "main",
            "deploy_on_push": False,
        }

    def test_nested_nulls_are_dropped(self):
        """Test a health check with only a path carries no timing keys."""
        spec = AppSpec(
            name="app",
            region=Region.NYC,
            services=[ServiceSpec(name="api", health_check=HealthCheck(http_path="/"))],
        )

        service = to_dict(spec)["services"][0]

        assert service["health_check"] == {"http_path": "/"}
        assert "image" not in service
        assert "github" not in service
        assert "internal_ports" not in service

    def test_digest_image(self):
        spec = AppSpec(
            name="app",
            region=Region.NYC,
            workers=[
                WorkerSpec(
                    name="jobs",
                    image=ImageSource(
                        registry_type=RegistryType.DOCKER_HUB,
                        repository="redis",
                        tag=None,
                        digest="sha256:abc",
                    ),
                )
            ],
        )

        image = to_dict(spec)["workers"][0]["image"]

        assert image == {
            "registry_type": "DOCKER_HUB",
            "repository": "redis",
            "digest": "sha256:abc",
        }

    def test_output_is_valid_yaml(self):
        spec = AppSpec(
            name="app",
            region=Region.SGP,
            services=[ServiceSpec(name="api", http_port=80, internal_ports=[9090, 9090])],
        )

        data = yaml.safe_load(to_yaml(spec))

        assert data["region"] == "sgp"
        assert data["services"][0]["internal_ports"] == [9090, 9090]

    def test_deterministic(self):
        spec = AppSpec(name="app", region=Region.NYC, services=[ServiceSpec(name="api")])

        assert to_yaml(spec) == to_yaml(spec)
