"""
Error taxonomy for workspace synchronization.

The API client raises these; engines catch them at the operation boundary and
turn them into result values.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    REMOTE = "remote"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_RESULT = "empty_result"


class GitSyncError(Exception):
    """Base class for all synchronization failures."""

    kind: ErrorKind = ErrorKind.REMOTE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(GitSyncError):
    """Owner, repository name, branch or token is missing from the session."""

    kind = ErrorKind.CONFIGURATION


class RemoteAPIError(GitSyncError):
    """Non-2xx response (or transport failure) from the GitHub API."""

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url


class NotFoundError(RemoteAPIError):
    """404 on a ref, commit, tree, blob or file."""

    kind = ErrorKind.NOT_FOUND


class MalformedResponseError(GitSyncError):
    """A 2xx payload did not match the expected schema."""

    kind = ErrorKind.MALFORMED_RESPONSE


class EmptyResultError(GitSyncError):
    """An operation had no files to work with."""

    kind = ErrorKind.EMPTY_RESULT
