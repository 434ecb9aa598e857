"""
Bootstrap error taxonomy.

Every failure while resolving the runtime identity is fatal for the process,
but the library only raises; the process entry point decides to exit
(see ``gkelog.bootstrap.bootstrap_or_exit``).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BootstrapError(Exception):
    """Root of all bootstrap failures."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class MetadataError(BootstrapError):
    """The metadata server could not answer a lookup."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, code="METADATA_UNAVAILABLE", details={"path": path})
        self.path = path


class MissingEnvironmentError(BootstrapError):
    """A required downward-API variable is unset or empty."""

    def __init__(self, variable: str) -> None:
        message = f"{variable} not set. Please define it in the yaml file using downward API"
        super().__init__(message, code="MISSING_ENVIRONMENT", details={"variable": variable})
        self.variable = variable


class PatternMismatchError(BootstrapError):
    """An instance or pod name does not have the expected shape."""

    def __init__(self, message: str, *, value: str, pattern: str) -> None:
        super().__init__(
            message,
            code="PATTERN_MISMATCH",
            details={"value": value, "pattern": pattern},
        )


class ClientConstructionError(BootstrapError):
    """The Cloud Logging client could not be created."""

    def __init__(self, project_id: str, cause: Exception) -> None:
        super().__init__(
            f"new client create error: {cause}",
            code="CLIENT_CONSTRUCTION_FAILED",
            details={"project_id": project_id},
        )
