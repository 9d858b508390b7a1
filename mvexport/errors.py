"""
Error types for mvexport.

Every error below is fatal to the export call that raised it. The only
non-fatal condition, incomplete metadata coverage, is reported as a
CoverageWarning.
"""

from typing import Optional, Sequence


class MvExportError(Exception):
    """Base class for all mvexport errors."""


class UnsupportedAnalysisType(MvExportError, TypeError):
    """No extraction strategy is registered for the analysis object."""

    def __init__(self, type_names: Sequence[str]):
        self.type_names = list(type_names)
        super().__init__(
            f"No method available for the class {', '.join(self.type_names)}"
        )


class MalformedAnalysisResult(MvExportError, ValueError):
    """An analysis result lacks an expected field, or the field is ill-shaped."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"analysis result is missing the '{field}' field")


class MissingColumn(MvExportError, KeyError):
    """Entity metadata lacks a required column."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"'metadata' is missing a '{column}' column")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class MalformedMetadata(MvExportError, ValueError):
    """Entity metadata cannot be turned into a table."""


class IOFailure(MvExportError, OSError):
    """The export table could not be written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class CoverageWarning(UserWarning):
    """Some analysed entities are not documented in the metadata."""
