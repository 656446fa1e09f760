"""
Test fixtures for workspace and session tests.

Provides reusable sessions bound to the fake repository.
"""

from typing import Dict, Optional

from workspace_sync.models.session import RepositoryRef, SessionContext
from workspace_sync.models.workspace import FileRecord, Workspace


def create_test_workspace(files: Optional[Dict[str, str]] = None) -> Workspace:
    """
    Create a Workspace from a ``{path: content}`` mapping.

    Example:
        >>> ws = create_test_workspace({"a.txt": "hello"})
        >>> assert "a.txt" in ws
    """
    records = {
        path: FileRecord(
            content=content,
            created="2023-06-01T12:00:00+00:00",
            modified="2023-06-02T12:00:00+00:00",
        )
        for path, content in (files or {}).items()
    }
    return Workspace(records)


def create_test_context(
    files: Optional[Dict[str, str]] = None,
    owner: Optional[str] = "octo-org",
    repository_name: Optional[str] = "demo-site",
    branch: Optional[str] = "main",
    token: Optional[str] = "test-token",
) -> SessionContext:
    """
    Create a SessionContext pointing at the default fake repository.

    Args:
        files: Workspace contents as ``{path: content}``
        owner: Repository owner
        repository_name: Repository (workspace) name
        branch: Target branch
        token: Personal access token
    """
    return SessionContext(
        workspace=create_test_workspace(files),
        repository=RepositoryRef(owner=owner, repository_name=repository_name, branch=branch),
        token=token,
    )


def contents_of(context: SessionContext) -> Dict[str, str]:
    """Workspace contents without timestamps."""
    return {path: record.content for path, record in context.workspace.get_files().items()}
