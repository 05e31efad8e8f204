"""Tests for the exception hierarchy."""

from rich.console import Console

from clover_fab.exceptions import (
    ArchiveError,
    CloverFabError,
    ConfigurationError,
    GenerationError,
    ValidationError,
    wrap_error,
)


class TestCloverFabError:
    """Test the base exception."""

    def test_message_only(self):
        error = CloverFabError("Something failed")
        assert str(error) == "Something failed"
        assert error.operation is None

    def test_context_and_suggestions(self):
        error = GenerationError(
            "Cannot write layer file",
            context={"file": "board-F_Cu.gbr"},
            suggestions=["Check permissions"],
        )
        text = str(error)
        assert "Context:" in text
        assert "file: board-F_Cu.gbr" in text
        assert "Suggestions:" in text
        assert "- Check permissions" in text

    def test_operation_in_context(self):
        error = ArchiveError("Duplicate archive entry", operation="archive:build")
        assert error.operation == "archive:build"
        assert "operation: archive:build" in str(error)

    def test_with_operation_keeps_existing(self):
        error = ArchiveError("x", operation="first")
        assert error.with_operation("second").operation == "first"

    def test_with_operation_sets_missing(self):
        error = GenerationError("x")
        error.with_operation("pcb:generate-gerber")
        assert error.operation == "pcb:generate-gerber"
        assert "pcb:generate-gerber" in str(error)

    def test_error_codes(self):
        assert ValidationError(["x"]).error_code == "VALIDATION_ERROR"
        assert GenerationError("x").error_code == "GENERATION_ERROR"
        assert ArchiveError("x").error_code == "ARCHIVE_ERROR"
        assert ConfigurationError("x").error_code == "CONFIGURATION_ERROR"

    def test_to_dict(self):
        data = ArchiveError(
            "Duplicate archive entry", context={"name": "a.drl"}, operation="archive:build"
        ).to_dict()
        assert data == {
            "error_type": "ARCHIVE_ERROR",
            "message": "Duplicate archive entry",
            "operation": "archive:build",
            "context": {"name": "a.drl"},
            "suggestions": [],
        }

    def test_rich_rendering(self):
        console = Console(record=True, width=100)
        console.print(GenerationError("Disk full", context={"file": "x.gbr"}))
        output = console.export_text()
        assert "GenerationError" in output
        assert "Disk full" in output


class TestValidationError:
    """Test the multi-error validation exception."""

    def test_lists_errors(self):
        error = ValidationError(["quantity must be at least 1 (got 0)", "width must be > 0"])
        assert error.errors == ["quantity must be at least 1 (got 0)", "width must be > 0"]
        assert "Validation failed with 2 error(s)" in error.message
        assert "  1. quantity must be at least 1 (got 0)" in error.message
        assert "  2. width must be > 0" in error.message


class TestWrapError:
    """Test wrap_error()."""

    def test_domain_error_unchanged(self):
        original = ArchiveError("x")
        wrapped = wrap_error(original, "pcb:generate-gerber")
        assert wrapped is original
        assert wrapped.operation == "pcb:generate-gerber"

    def test_foreign_error_becomes_generation_error(self):
        cause = OSError("No space left on device")
        wrapped = wrap_error(cause, "pcb:generate-gerber")

        assert isinstance(wrapped, GenerationError)
        assert wrapped.__cause__ is cause
        assert wrapped.message == "OSError: No space left on device"
        assert wrapped.operation == "pcb:generate-gerber"
