"""
Shared types and results for GitHub sync operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from workspace_sync.services.github.errors import ErrorKind, GitSyncError


@dataclass
class GitOperationResult:
    """Outcome of an engine operation.

    ``error`` is set on failure, and also on the non-failing "nothing found"
    outcome of a sync, so ``kind`` tells the cases apart.
    """

    success: bool
    message: str
    error: Optional[GitSyncError] = None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None


@dataclass
class RepositoryInfo:
    name: str
    owner: str
    full_name: str
    url: Optional[str]
    default_branch: str
    private: bool
    description: Optional[str] = None
    api_url: Optional[str] = None
    owner_type: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    pushed_at: Optional[str] = None
    size: Optional[int] = None
    stargazers_count: Optional[int] = None
    watchers_count: Optional[int] = None
    forks_count: Optional[int] = None
    open_issues_count: Optional[int] = None


@dataclass
class BaseResolution:
    """Where a publish starts from.

    ``branch_exists`` False means the base was taken from the default branch
    and the target branch will be created.
    """

    branch_exists: bool
    base_commit_sha: str
    base_tree_sha: str
    base_branch: str


@dataclass
class CommitDetails:
    sha: str
    message: str
    author: Optional[Dict[str, Any]]
    date: Optional[str]


@dataclass
class BuildStatusSummary:
    repository: str
    ref: str
    state: str
    status_count: int
    check_runs_count: int
    failed_statuses: int
    failed_check_runs: int
    pending_check_runs: int


@dataclass
class PublishResult(GitOperationResult):
    files_published: Optional[int] = None
    owner: Optional[str] = None
    repository_name: Optional[str] = None
    branch: Optional[str] = None
    commit_sha: Optional[str] = None
    tree_sha: Optional[str] = None
    branch_created: bool = False
    paths_removed: List[str] = field(default_factory=list)


@dataclass
class SyncResult(GitOperationResult):
    file_count: int = 0


@dataclass
class RevertResult(GitOperationResult):
    commit_details: Optional[CommitDetails] = None
    file_count: int = 0


@dataclass
class DeleteResult(GitOperationResult):
    path: Optional[str] = None
    removed_locally: bool = False


@dataclass
class BuildStatusResult(GitOperationResult):
    summary: Optional[BuildStatusSummary] = None
    build_status: Optional[Dict[str, Any]] = None


@dataclass
class CommitHistoryResult(GitOperationResult):
    branch: Optional[str] = None
    commits: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class BuildLogsResult(GitOperationResult):
    check_run_id: Optional[int] = None
    logs: Optional[str] = None


@dataclass
class RepositoryCheckResult(GitOperationResult):
    exists: bool = False
    repository: Optional[RepositoryInfo] = None


@dataclass
class RepositoryCreateResult(GitOperationResult):
    repository: Optional[RepositoryInfo] = None
