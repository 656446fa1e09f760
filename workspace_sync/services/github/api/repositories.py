"""
GitHub repository operations.
"""

import logging
from typing import Any, Dict, Optional

from workspace_sync.services.github.api.client import GitHubAPIClient
from workspace_sync.services.github.models.schemas import RepositoryPayload
from workspace_sync.services.github.models.types import RepositoryInfo

logger = logging.getLogger(__name__)


def to_repository_info(payload: RepositoryPayload, owner: str) -> RepositoryInfo:
    return RepositoryInfo(
        name=payload.name,
        owner=payload.owner.login if payload.owner else owner,
        full_name=payload.full_name,
        url=payload.html_url,
        default_branch=payload.default_branch,
        private=payload.private,
        description=payload.description,
        api_url=payload.url,
        owner_type=payload.owner.type if payload.owner else None,
        created_at=payload.created_at,
        updated_at=payload.updated_at,
        pushed_at=payload.pushed_at,
        size=payload.size,
        stargazers_count=payload.stargazers_count,
        watchers_count=payload.watchers_count,
        forks_count=payload.forks_count,
        open_issues_count=payload.open_issues_count,
    )


class RepositoryOperations:
    """Handles GitHub repository operations."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_repository(self, owner: str, repository_name: str) -> RepositoryInfo:
        """Get repository information.

        Args:
            owner: Repository owner
            repository_name: Repository name

        Returns:
            RepositoryInfo with repository details

        Raises:
            NotFoundError: If the repository does not exist or is not visible
        """
        response = await self.client.get(f"repos/{owner}/{repository_name}")
        payload = self.client.parse(RepositoryPayload, response, "repository")
        return to_repository_info(payload, owner)

    async def create_repository(
        self,
        owner: str,
        name: str,
        description: str = "",
        private: bool = False,
        auto_init: bool = True,
    ) -> RepositoryInfo:
        """Create a new repository in the ``owner`` organization.

        Args:
            owner: Organization that will own the repository
            name: Repository name
            description: Repository description
            private: Whether repository is private
            auto_init: Initialize with README so the default branch exists

        Returns:
            RepositoryInfo for created repository
        """
        data: Dict[str, Any] = {
            "name": name,
            "description": description,
            "private": private,
            "auto_init": auto_init,
        }

        response = await self.client.post(f"orgs/{owner}/repos", data=data)
        payload = self.client.parse(RepositoryPayload, response, "created repository")

        logger.info(f"Created repository {payload.full_name}")
        return to_repository_info(payload, owner)
