"""
Structured operation results for the service facade.

Maps the CloverFabError hierarchy to serializable values that a UI or
request layer can hand to its caller without catching exceptions.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from clover_fab.exceptions import CloverFabError

# Error type constants
ERROR_VALIDATION_ERROR = "VALIDATION_ERROR"
ERROR_GENERATION_ERROR = "GENERATION_ERROR"
ERROR_ARCHIVE_ERROR = "ARCHIVE_ERROR"
ERROR_CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
ERROR_INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(BaseModel):
    """Structured error returned by a failed service operation.

    Attributes:
        error_type: Machine-readable error type (e.g., "VALIDATION_ERROR")
        message: Human-readable error description
        operation: Operation that failed (e.g., "pcb:get-quote")
        suggestions: Actionable suggestions for fixing the error
        errors: Individual validation problems, if any
        context: Additional context (file path, design name, etc.)

    Example::

        error = ServiceError(
            error_type="ARCHIVE_ERROR",
            message="Duplicate archive entry",
            operation="jlcpcb:generateGerberPackage",
            context={"name": "board.drl"},
        )
    """

    error_type: str
    message: str
    operation: Optional[str] = None
    suggestions: list[str] = []
    errors: list[str] = []
    context: dict[str, Any] = {}

    @classmethod
    def from_exception(cls, exc: BaseException, operation: Optional[str] = None) -> ServiceError:
        """Create a ServiceError from an exception.

        clover-fab errors keep their code, context and suggestions; any
        other exception is reported as INTERNAL_ERROR.
        """
        if isinstance(exc, CloverFabError):
            if operation:
                exc.with_operation(operation)
            data = exc.to_dict()
            return cls(
                error_type=data["error_type"],
                message=exc.message,
                operation=data["operation"],
                suggestions=data["suggestions"],
                errors=list(getattr(exc, "errors", [])),
                context=data["context"],
            )

        return cls(
            error_type=ERROR_INTERNAL_ERROR,
            message=f"{type(exc).__name__}: {exc}",
            operation=operation,
            suggestions=["Check the error message for details"],
        )


class OperationResult(BaseModel):
    """Outcome of a service operation: data on success, error on failure."""

    success: bool
    data: Any = None
    error: Optional[ServiceError] = None

    @classmethod
    def ok(cls, data: Any = None) -> OperationResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: BaseException, operation: Optional[str] = None) -> OperationResult:
        return cls(success=False, error=ServiceError.from_exception(exc, operation))

    def unwrap(self) -> Any:
        """Return the data, or raise RuntimeError describing the error."""
        if not self.success:
            assert self.error is not None
            raise RuntimeError(f"{self.error.error_type}: {self.error.message}")
        return self.data
