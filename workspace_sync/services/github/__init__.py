"""
GitHub Service Package

Synchronizes a workspace with a GitHub repository through the REST API.

Main Components:
- GitHubSyncService: Main facade for all sync operations
- API Client: GitHub REST API interactions
- Engines: publish, sync, revert, delete, status, repository
"""

from workspace_sync.services.github.github_service import GitHubSyncService

__all__ = ["GitHubSyncService"]
