"""
Errors raised by the spot price analysis pipeline.
"""

from typing import List, Optional


class SpotAnalysisError(ValueError):
    """Base class for every error the pipeline raises on bad input."""


class SchemaError(SpotAnalysisError):
    """A required input column is absent."""

    def __init__(self, missing: List[str], available: Optional[List[str]] = None):
        self.missing = list(missing)
        self.available = list(available or [])
        message = f"Missing required columns: {self.missing}"
        if self.available:
            message += f" (available: {self.available})"
        super().__init__(message)


class ComputationError(SpotAnalysisError):
    """Non-numeric data was found where numeric data is expected."""

    def __init__(self, column: str, message: str):
        self.column = column
        super().__init__(f"Column '{column}': {message}")


class ConfigError(SpotAnalysisError):
    """The run configuration could not be loaded."""


class DataSourceError(SpotAnalysisError):
    """No input data could be found."""
