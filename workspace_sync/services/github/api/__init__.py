"""
GitHub API Module

Handles all GitHub REST API interactions including:
- Repository metadata and creation
- Git Data objects (refs, commits, trees, blobs)
- Repository contents
- Commit statuses, check runs and history
"""

from workspace_sync.services.github.api.client import GitHubAPIClient
from workspace_sync.services.github.api.contents import ContentsOperations
from workspace_sync.services.github.api.git_data import GitDataOperations
from workspace_sync.services.github.api.repositories import RepositoryOperations
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.api.statuses import StatusOperations

__all__ = [
    "GitHubAPIClient",
    "GitRepositoryClient",
    "ContentsOperations",
    "GitDataOperations",
    "RepositoryOperations",
    "StatusOperations",
]
