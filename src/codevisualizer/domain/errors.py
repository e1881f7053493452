from __future__ import annotations

"""
Domain Exceptions.

Only fetch-level failures leave the core; everything raised inside the
classifier or the layout engine is absorbed where it happens.
"""

from typing import Optional


class CodeVisualizerError(Exception):
    """Base class for all application errors."""


class RepositoryFetchError(CodeVisualizerError):
    """
    Repository metadata or tree could not be retrieved.

    Attributes:
        status_code: HTTP status of the failed response, None for transport
                     or payload failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidRepoUrlError(CodeVisualizerError, ValueError):
    """User input does not identify a GitHub repository."""
