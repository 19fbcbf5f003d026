"""
Exceptions raised by the generator pipeline.

Everything deriving from GoToSwaggerError aborts the run. Recoverable
conditions (ambiguous aliases, missing packages, odd constant groups,
malformed validation operands) are logged instead.
"""

from __future__ import annotations


class GoToSwaggerError(Exception):
    """Base class for fatal generator errors."""

    pass


class ConfigurationError(GoToSwaggerError):
    """Raised when the generator configuration is unusable."""

    pass


class SourceParseError(GoToSwaggerError):
    """Raised when a Go source file cannot be parsed into declarations."""

    pass


class UnitSelectionError(GoToSwaggerError):
    """Raised when a package directory has no usable declaration group.

    Test packages (``*_test``) never qualify; ``main`` only qualifies when
    nothing else is available.
    """

    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"Did not find a usable package in package path: {import_path}")


class UnresolvedTypeError(GoToSwaggerError):
    """Raised when a referenced type cannot be located anywhere in the unit graph."""

    def __init__(self, type_ref: str, field_name: str = "", referring_path: str = ""):
        self.type_ref = type_ref
        self.field_name = field_name
        self.referring_path = referring_path
        message = f"Failed to find definition for type: {type_ref}"
        if field_name:
            message += f" (referenced by field {field_name}"
            if referring_path:
                message += f" in {referring_path}"
            message += ")"
        elif referring_path:
            message += f" (referenced from {referring_path})"
        super().__init__(message)


class DocumentWriteError(GoToSwaggerError):
    """Raised when the generated document fails validation before being written."""

    pass
