"""
Custom exception hierarchy for clover-fab.

Provides consistent error handling with context, suggestions, and the name
of the operation that failed. All exceptions include:
- Context information (file paths, design name, etc.)
- Suggestions for how to fix the issue
- The originating operation (e.g. "jlcpcb:generateGerberPackage")

Example::

    from clover_fab.exceptions import GenerationError, ValidationError

    raise GenerationError(
        "Cannot write layer file",
        operation="export:write",
        context={"file": "board-F_Cu.gbr"},
        suggestions=["Check that the output directory is writable"],
    )

    # Validation with multiple errors
    errors = ["quantity must be >= 1", "width must be > 0"]
    raise ValidationError(errors, operation="quote:estimate")
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class CloverFabError(Exception):
    """
    Base exception for all clover-fab errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (file, design, etc.)
        suggestions: List of actionable suggestions for fixing the error
        operation: Name of the operation that raised or wrapped the error
    """

    error_code = "CLOVER_FAB_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        operation: Optional[str] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        self.suggestions = list(suggestions or [])
        if operation and "operation" not in self.context:
            self.context["operation"] = operation
        super().__init__(self._format_message())

    @property
    def operation(self) -> Optional[str]:
        """Operation name recorded in the context, if any."""
        return self.context.get("operation")

    def with_operation(self, operation: str) -> CloverFabError:
        """Record the operation name unless one is already set."""
        if "operation" not in self.context:
            self.context["operation"] = operation
            self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "context": {k: str(v) for k, v in self.context.items() if k != "operation"},
            "suggestions": self.suggestions,
        }

    def __rich_console__(self, console, options):
        """Render the error as a Rich panel (used by the CLI)."""
        from rich.panel import Panel
        from rich.text import Text

        body = Text(self.message, style="bold")
        for key, value in self.context.items():
            body.append(f"\n  {key}: ", style="dim")
            body.append(str(value))
        for suggestion in self.suggestions:
            body.append("\n  - ", style="cyan")
            body.append(suggestion)

        yield Panel(body, title=f"[red]{type(self).__name__}[/red]", expand=False)


class ValidationError(CloverFabError):
    """
    Board specs or design failed validation with one or more errors.

    Collects all validation errors instead of failing on the first one,
    providing a complete list of issues to fix.

    Example::

        errors = [
            "quantity must be an integer >= 1 (got 0)",
            "width must be a positive number of millimetres (got -5)",
        ]
        raise ValidationError(errors, context={"design": "Blinky"})

    Attributes:
        errors: List of individual validation error messages
    """

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        operation: Optional[str] = None,
    ):
        self.errors = list(errors)
        message = f"Validation failed with {len(self.errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(self.errors))
        super().__init__(message, context, suggestions, operation)


class GenerationError(CloverFabError):
    """
    Generating fabrication output failed.

    Raised when a layer file cannot be written or a buffer cannot be
    compressed.

    Example::

        raise GenerationError(
            "Failed to write layer file",
            operation="export:write",
            context={"file": "/tmp/out/board-F_Cu.gbr", "reason": "disk full"},
        )
    """

    error_code = "GENERATION_ERROR"


class ArchiveError(CloverFabError):
    """
    Packaging generated files into a ZIP archive failed.

    Raised for entries the writer cannot represent (duplicate or nested
    names, sizes beyond the 32-bit ZIP limits) and for publish failures.

    Example::

        raise ArchiveError(
            "Duplicate archive entry",
            operation="archive:build",
            context={"name": "board.drl"},
        )
    """

    error_code = "ARCHIVE_ERROR"


class ConfigurationError(CloverFabError):
    """
    Configuration or pricing-table error.

    Example::

        raise ConfigurationError(
            "Unknown shipping tier",
            context={"shipping": "overnight", "available": ["economy", "standard", "express"]},
            suggestions=["Use one of the available shipping tiers"],
        )
    """

    error_code = "CONFIGURATION_ERROR"


def wrap_error(exc: BaseException, operation: str) -> CloverFabError:
    """
    Wrap an arbitrary exception with the originating operation name.

    clover-fab errors are returned as-is (tagged with ``operation`` if they
    do not carry one yet); anything else becomes a GenerationError whose
    ``__cause__`` is the original exception.

    Args:
        exc: The exception to wrap
        operation: Name of the operation that failed

    Returns:
        A CloverFabError carrying the operation name
    """
    if isinstance(exc, CloverFabError):
        return exc.with_operation(operation)

    wrapped = GenerationError(
        f"{type(exc).__name__}: {exc}",
        operation=operation,
    )
    wrapped.__cause__ = exc
    return wrapped


__all__ = [
    "CloverFabError",
    "ValidationError",
    "GenerationError",
    "ArchiveError",
    "ConfigurationError",
    "wrap_error",
]
