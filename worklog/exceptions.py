"""Exceptions raised by the worklog pipeline.

Every fatal condition of a run derives from :class:`WorklogError`; the CLI
catches that base class and turns it into a non-zero exit status. Empty
columns and empty summaries are warnings and never raise.
"""

from __future__ import annotations

from typing import Any


class WorklogError(Exception):
    """Base exception for all worklog errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(WorklogError):
    """Raised for missing required arguments or a missing credential."""


class BoardReadError(WorklogError):
    """Raised when the board file cannot be read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, {"path": path} if path else None)
        self.path = path


class BoardNotFoundError(BoardReadError):
    """Raised when the board file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Board file '{path}' does not exist", path)


class SectionNotFoundError(WorklogError):
    """Raised when no level-2 heading matches the requested column."""

    def __init__(self, column: str) -> None:
        super().__init__(f"column '{column}' not found", {"column": column})
        self.column = column


class GenerationError(WorklogError):
    """Raised by a text generator when the remote call fails."""


class NoChoicesError(GenerationError):
    """Raised when the remote service answers without any generated text."""


class RemoteCallError(WorklogError):
    """Raised when summarizing a category fails; aborts the whole run."""

    def __init__(self, category: str, cause: BaseException | str) -> None:
        super().__init__(
            f"error calling the summarization service for category '{category}': {cause}",
            {"category": category},
        )
        self.category = category
        self.cause = cause


class EmptyRemoteResponseError(RemoteCallError):
    """Raised when the remote service returns no choices for a category."""

    def __init__(self, category: str) -> None:
        super().__init__(category, "no response returned")
        self.message = f"no response from the summarization service for category '{category}'"


class OutputWriteError(WorklogError):
    """Raised when the output folder or a result file cannot be written."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, {"path": path} if path else None)
        self.path = path
