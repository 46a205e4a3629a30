"""Error handling utilities for SecureString."""

import sys
import traceback
from typing import Optional

import click


class SecureStringError(Exception):
    """Base exception for SecureString errors."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        suggestions: Optional[list] = None,
    ):
        self.message = message
        self.details = details
        self.suggestions = suggestions or []
        super().__init__(message)


class ConfigurationError(SecureStringError):
    """Raised when an encoding or configuration value cannot be resolved."""

    pass


class DigestUnavailableError(SecureStringError):
    """Raised when the requested digest algorithm is not available."""

    pass


class SecurityError(SecureStringError):
    """Raised when an operation would expose secret material."""

    pass


class ErrorHandler:
    """Handles and formats errors for user-friendly display."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def handle_error(self, error: Exception, context: Optional[str] = None) -> None:
        """
        Handle and display error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Optional context about when/where error occurred
        """
        if isinstance(error, SecureStringError):
            self._handle_securestring_error(error, context)
        else:
            self._handle_generic_error(error, context)

    def _handle_securestring_error(self, error: SecureStringError, context: Optional[str]) -> None:
        """Handle SecureString-specific errors."""
        click.echo(f"✗ {error.message}", err=True)

        if context:
            click.echo(f"Context: {context}", err=True)

        if error.details:
            click.echo(f"Details: {error.details}", err=True)

        if error.suggestions:
            click.echo("\nSuggestions:", err=True)
            for suggestion in error.suggestions:
                click.echo(f"  • {suggestion}", err=True)

        if self.verbose:
            click.echo("\nFull traceback:", err=True)
            traceback.print_exc()

    def _handle_generic_error(self, error: Exception, context: Optional[str]) -> None:
        """Handle generic Python exceptions."""
        error_type = type(error).__name__

        if isinstance(error, FileNotFoundError):
            message = f"File not found: {error}"
            suggestions = [
                "Check that the file path is correct",
                "Ensure the file exists and is readable",
            ]
        elif isinstance(error, PermissionError):
            message = f"Permission denied: {error}"
            suggestions = ["Check file/directory permissions"]
        else:
            message = f"{error_type}: {error}"
            suggestions = []

        click.echo(f"✗ {message}", err=True)

        if context:
            click.echo(f"Context: {context}", err=True)

        if suggestions:
            click.echo("\nSuggestions:", err=True)
            for suggestion in suggestions:
                click.echo(f"  • {suggestion}", err=True)

        if self.verbose:
            click.echo("\nFull traceback:", err=True)
            traceback.print_exc()

    def exit_with_error(self, error: Exception, context: Optional[str] = None, exit_code: int = 1) -> None:
        """Handle error and exit with specified code."""
        self.handle_error(error, context)
        sys.exit(exit_code)


def create_error_suggestions(error_type: str, **kwargs) -> list:
    """
    Create contextual error suggestions based on error type and context.

    Args:
        error_type: Type of error
        **kwargs: Additional context information (``encoding``, ``algorithm``)

    Returns:
        list: List of suggestion strings
    """
    suggestions = {
        "encoding_unknown": [
            f"Check the spelling of the encoding name '{kwargs.get('encoding', '')}'",
            "Use a codec known to Python, e.g. 'utf-8', 'utf-16' or 'latin-1'",
        ],
        "text_unencodable": [
            "Use an encoding that can represent every character of the text",
            "UTF-8 can encode any text",
        ],
        "digest_unavailable": [
            f"The digest algorithm '{kwargs.get('algorithm', '')}' is not supported here",
            "Use 'sha512', the default algorithm",
            "Check the installed cryptography/OpenSSL build",
        ],
        "configuration_invalid": [
            "Check YAML syntax in configuration file",
            "Verify all keys live under the 'securestring' section",
            "Validate configuration values are correct",
        ],
    }

    return suggestions.get(error_type, [])


def format_validation_errors(errors: list) -> str:
    """
    Format validation errors for display.

    Args:
        errors: List of validation error messages

    Returns:
        str: Formatted error message
    """
    if not errors:
        return "No validation errors"

    if len(errors) == 1:
        return f"Validation error: {errors[0]}"

    formatted = "Validation errors:\n"
    for i, error in enumerate(errors, 1):
        formatted += f"  {i}. {error}\n"

    return formatted.strip()
