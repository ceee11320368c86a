"""Tests for the error taxonomy and exit code handling."""

from oceanhost.core.errors import (
    ConfigurationError,
    ExitCode,
    OceanHostError,
    PublishCancelledError,
    PublishError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)


class TestExitCodes:
    def test_error_exit_codes(self):
        assert ConfigurationError("x").exit_code == ExitCode.CONFIG_ERROR == 10
        assert PublishError("x").exit_code == ExitCode.PUBLISH_ERROR == 11
        assert ValidationError("x").exit_code == ExitCode.VALIDATION_ERROR == 12
        assert PublishCancelledError("x").exit_code == ExitCode.CANCELLED == 130
        assert OceanHostError("x").exit_code == ExitCode.UNKNOWN_ERROR

    def test_details_default_to_empty(self):
        assert PublishError("x").details == {}


class TestMainWithErrorHandling:
    """Tests for the main_with_error_handling decorator."""

    def test_success_passthrough(self):
        @main_with_error_handling()
        def command() -> int:
            return 0

        assert command() == 0

    def test_oceanhost_error_maps_to_exit_code(self):
        @main_with_error_handling()
        def command() -> int:
            raise PublishError("disk full", details={"path": "/tmp/x"})

        assert command() == ExitCode.PUBLISH_ERROR

    def test_keyboard_interrupt(self):
        @main_with_error_handling()
        def command() -> int:
            raise KeyboardInterrupt

        assert command() == ExitCode.CANCELLED

    def test_unexpected_error(self):
        @main_with_error_handling(log_errors=False)
        def command() -> int:
            raise RuntimeError("boom")

        assert command() == ExitCode.UNKNOWN_ERROR

    def test_preserves_function_name(self):
        @main_with_error_handling()
        def publish_something() -> int:
            return 0

        assert publish_something.__name__ == "publish_something"


class TestFormatErrorMessage:
    def test_without_details(self):
        assert format_error_message(ValidationError("bad region")) == "bad region"

    def test_with_details(self):
        error = ValidationError("bad region", details={"region": "mars1"})

        assert format_error_message(error) == "bad region (region=mars1)"
