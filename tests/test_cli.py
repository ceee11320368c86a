"""Tests for the oceanhost CLI commands."""

from unittest.mock import patch

import pytest
import yaml

from oceanhost.cli.main import build_parser, main
from oceanhost.cli.publish import publish_command
from oceanhost.cli.regions import regions_command
from oceanhost.core.errors import ExitCode

APPHOST_WITH_BUILD = """
from oceanhost.appplatform import publish_as_app_service, with_app_platform_deploy_support


def build(builder):
    with_app_platform_deploy_support(builder, "cli-shop", region="fra1")
    builder.add_redis("cache")
    api = builder.add_project("api", "api").with_http_health_check("/health")
    publish_as_app_service(api, configure=lambda s: setattr(s, "instance_count", 2))
"""

APPHOST_WITH_BUILDER = """
from oceanhost.appplatform import publish_as_app_service, with_app_platform_deploy_support
from oceanhost.hosting import DistributedApplicationBuilder

builder = DistributedApplicationBuilder()
with_app_platform_deploy_support(builder, "module-shop")
publish_as_app_service(builder.add_container("web", "nginx").with_http_endpoint(target_port=80))
"""


@pytest.fixture(autouse=True)
def no_git():
    with patch("oceanhost.appplatform.publisher.detect_git_info", return_value=None):
        yield


class TestPublishCommand:
    """Tests for publish_command."""

    def test_publish_with_build_function(self, tmp_path):
        """Test an app host defining build(builder) is published."""
        apphost = tmp_path / "apphost.py"
        apphost.write_text(APPHOST_WITH_BUILD)
        output_dir = tmp_path / "out"

        result = publish_command(str(apphost), output_dir=str(output_dir))

        assert result == 0
        data = yaml.safe_load((output_dir / "app-spec.yaml").read_text())
        assert data["name"] == "cli-shop"
        assert data["region"] == "fra"
        assert data["services"][0]["instance_count"] == 2
        assert data["services"][0]["health_check"] == {"http_path": "/health"}
        assert data["databases"][0]["engine"] == "REDIS"
        assert (output_dir / "deploy-appplatform.sh").exists()

    def test_publish_with_module_builder(self, tmp_path):
        apphost = tmp_path / "apphost_module.py"
        apphost.write_text(APPHOST_WITH_BUILDER)
        output_dir = tmp_path / "out"

        result = publish_command(str(apphost), output_dir=str(output_dir))

        assert result == 0
        data = yaml.safe_load((output_dir / "app-spec.yaml").read_text())
        assert data["name"] == "module-shop"
        assert data["services"][0]["image"]["repository"] == "nginx"

    def test_missing_apphost(self, tmp_path):
        """Test a missing file maps to the configuration exit code."""
        result = publish_command(str(tmp_path / "missing.py"))

        assert result == ExitCode.CONFIG_ERROR

    def test_apphost_without_builder(self, tmp_path):
        apphost = tmp_path / "empty_host.py"
        apphost.write_text("VALUE = 1\n")

        assert publish_command(str(apphost)) == ExitCode.CONFIG_ERROR

    def test_support_not_enabled(self, tmp_path):
        """Test publishing without the publisher writes nothing and succeeds."""
        apphost = tmp_path / "plain_host.py"
        apphost.write_text("def build(builder):\n    builder.add_redis('cache')\n")
        output_dir = tmp_path / "out"

        assert publish_command(str(apphost), output_dir=str(output_dir)) == 0
        assert not output_dir.exists()


class TestRegionsCommand:
    def test_list(self):
        assert regions_command() == ExitCode.SUCCESS

    def test_validate_known(self):
        assert regions_command(validate="nyc3") == ExitCode.SUCCESS

    def test_validate_unknown(self):
        assert regions_command(validate="mars1") == ExitCode.VALIDATION_ERROR


class TestParser:
    def test_publish_arguments(self):
        args = build_parser().parse_args(["publish", "apphost.py", "--output-dir", "out"])

        assert args.command == "publish"
        assert args.apphost_file == "apphost.py"
        assert args.output_dir == "out"

    def test_regions_arguments(self):
        args = build_parser().parse_args(["regions", "--validate", "nyc3"])

        assert args.validate == "nyc3"

    @patch("oceanhost.cli.main.configure_logging")
    def test_main_exits_with_command_code(self, mock_logging):
        with pytest.raises(SystemExit) as exc_info:
            main(["regions", "--validate", "mars1"])

        assert exc_info.value.code == ExitCode.VALIDATION_ERROR
        mock_logging.assert_called_once_with("INFO", log_format="console")

    @patch("oceanhost.cli.main.configure_logging")
    def test_main_without_command(self, mock_logging):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1

    @patch("oceanhost.cli.main.configure_logging")
    def test_log_format_flag(self, mock_logging):
        with pytest.raises(SystemExit):
            main(["--log-format", "json", "--log-level", "debug", "regions"])

        mock_logging.assert_called_once_with("DEBUG", log_format="json")
