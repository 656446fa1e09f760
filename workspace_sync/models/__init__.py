from workspace_sync.models.session import (
    BuildLogsSnapshot,
    BuildStatusSnapshot,
    CommitHistorySnapshot,
    RepositoryRef,
    SessionContext,
)
from workspace_sync.models.workspace import FileRecord, Workspace

__all__ = [
    "BuildLogsSnapshot",
    "BuildStatusSnapshot",
    "CommitHistorySnapshot",
    "FileRecord",
    "RepositoryRef",
    "SessionContext",
    "Workspace",
]
