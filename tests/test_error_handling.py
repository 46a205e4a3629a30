"""Tests for error handling system."""

from unittest.mock import patch

import pytest

from securestring.config import ConfigValidationError
from securestring.utils.errors import (
    ConfigurationError,
    DigestUnavailableError,
    ErrorHandler,
    SecureStringError,
    SecurityError,
    create_error_suggestions,
    format_validation_errors,
)


class TestSecureStringError:
    """Test custom error classes."""

    def test_securestring_error_basic(self):
        """Test basic SecureStringError functionality."""
        error = SecureStringError("Test error message")

        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.details is None
        assert error.suggestions == []

    def test_securestring_error_with_details(self):
        """Test SecureStringError with details and suggestions."""
        suggestions = ["Try this", "Or try that"]
        error = SecureStringError("Test error", details="Detailed explanation", suggestions=suggestions)

        assert error.message == "Test error"
        assert error.details == "Detailed explanation"
        assert error.suggestions == suggestions

    def test_specific_error_types(self):
        """Test specific error type inheritance."""
        assert isinstance(ConfigurationError("Config error"), SecureStringError)
        assert isinstance(DigestUnavailableError("Digest error"), SecureStringError)
        assert isinstance(SecurityError("Security error"), SecureStringError)

    def test_config_validation_error(self):
        """ConfigValidationError carries the individual errors."""
        error = ConfigValidationError(["first", "second"])

        assert isinstance(error, ConfigurationError)
        assert error.errors == ["first", "second"]
        assert "first; second" in error.message
        assert error.suggestions


class TestErrorHandler:
    """Test error handler functionality."""

    def setup_method(self):
        """Setup test environment."""
        self.handler = ErrorHandler(verbose=False)
        self.verbose_handler = ErrorHandler(verbose=True)

    def test_handle_securestring_error(self):
        """Test handling SecureString-specific errors."""
        error = SecureStringError(
            "Test error message",
            details="Error details",
            suggestions=["Suggestion 1", "Suggestion 2"],
        )

        with patch("click.echo") as mock_echo:
            self.handler.handle_error(error, "Test context")

            assert mock_echo.call_count >= 4

            error_calls = [call for call in mock_echo.call_args_list if "✗" in str(call)]
            assert len(error_calls) > 0

    def test_handle_generic_error_file_not_found(self):
        """Test handling FileNotFoundError."""
        error = FileNotFoundError("securestring.yml not found")

        with patch("click.echo") as mock_echo:
            self.handler.handle_error(error)

            assert mock_echo.called
            assert "File not found" in str(mock_echo.call_args_list[0])

    def test_handle_generic_error_permission_denied(self):
        """Test handling PermissionError."""
        with patch("click.echo") as mock_echo:
            self.handler.handle_error(PermissionError("securestring.yml"))

            assert "Permission denied" in str(mock_echo.call_args_list[0])

    def test_handle_generic_error_other(self):
        """Test handling an arbitrary exception."""
        with patch("click.echo") as mock_echo:
            self.handler.handle_error(RuntimeError("boom"))

            assert "RuntimeError: boom" in str(mock_echo.call_args_list[0])

    def test_handle_error_with_verbose(self):
        """Test error handling with verbose output."""
        with patch("click.echo"):
            with patch("traceback.print_exc") as mock_traceback:
                self.verbose_handler.handle_error(SecureStringError("Test error"))

                mock_traceback.assert_called_once()

    def test_exit_with_error(self):
        """Test exit_with_error functionality."""
        with patch("click.echo"):
            with pytest.raises(SystemExit) as exc_info:
                self.handler.exit_with_error(SecureStringError("Fatal error"), exit_code=3)

        assert exc_info.value.code == 3


class TestErrorHelpers:
    """Test suggestion and formatting helpers."""

    def test_create_error_suggestions(self):
        suggestions = create_error_suggestions("encoding_unknown", encoding="klingon-8")

        assert any("klingon-8" in suggestion for suggestion in suggestions)
        assert create_error_suggestions("digest_unavailable", algorithm="md4")
        assert create_error_suggestions("unknown_error_type") == []

    def test_format_validation_errors(self):
        assert format_validation_errors([]) == "No validation errors"
        assert format_validation_errors(["bad"]) == "Validation error: bad"

        formatted = format_validation_errors(["bad", "worse"])
        assert formatted.startswith("Validation errors:")
        assert "1. bad" in formatted
        assert "2. worse" in formatted
