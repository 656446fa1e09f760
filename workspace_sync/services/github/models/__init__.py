"""
GitHub Models Module

Response schemas and result dataclasses for GitHub sync operations.
"""

from workspace_sync.services.github.models.types import (
    BaseResolution,
    BuildLogsResult,
    BuildStatusResult,
    BuildStatusSummary,
    CommitDetails,
    CommitHistoryResult,
    DeleteResult,
    GitOperationResult,
    PublishResult,
    RepositoryCheckResult,
    RepositoryCreateResult,
    RepositoryInfo,
    RevertResult,
    SyncResult,
)

__all__ = [
    "BaseResolution",
    "BuildLogsResult",
    "BuildStatusResult",
    "BuildStatusSummary",
    "CommitDetails",
    "CommitHistoryResult",
    "DeleteResult",
    "GitOperationResult",
    "PublishResult",
    "RepositoryCheckResult",
    "RepositoryCreateResult",
    "RepositoryInfo",
    "RevertResult",
    "SyncResult",
]
