"""
Explicit session context passed into every sync engine call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from workspace_sync.config.config import get_github_token
from workspace_sync.models.workspace import Workspace


@dataclass
class RepositoryRef:
    """Target repository; the repository name is the workspace name."""

    owner: Optional[str] = None
    repository_name: Optional[str] = None
    branch: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository_name}"


@dataclass
class BuildStatusSnapshot:
    repository: str
    ref: str
    status: Dict[str, Any]
    timestamp: str


@dataclass
class CommitHistorySnapshot:
    repository: str
    branch: str
    commits: List[Dict[str, Any]]
    timestamp: str


@dataclass
class BuildLogsSnapshot:
    repository: str
    ref: str
    check_run_id: str
    logs: str
    timestamp: str


@dataclass
class SessionContext:
    """Everything an engine needs about the calling session.

    The host serializes operations per session, so engines mutate
    ``workspace`` and the snapshot fields without locking.
    """

    workspace: Workspace
    repository: RepositoryRef
    token: Optional[str] = field(default_factory=get_github_token)
    build_status: Optional[BuildStatusSnapshot] = None
    commit_history: Optional[CommitHistorySnapshot] = None
    build_logs: Optional[BuildLogsSnapshot] = None
