"""
Commit status, check-run and commit history operations.
"""

import logging
from typing import List
from urllib.parse import quote

from pydantic import TypeAdapter

from workspace_sync.services.github.api.client import ACCEPT_RAW, GitHubAPIClient
from workspace_sync.services.github.models.schemas import (
    CheckRunsPayload,
    CombinedStatusPayload,
    CommitListItem,
)

logger = logging.getLogger(__name__)

_COMMIT_LIST_ADAPTER = TypeAdapter(List[CommitListItem])


class StatusOperations:
    """Read-only build status and history lookups."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_combined_status(
        self, owner: str, repository_name: str, ref: str
    ) -> CombinedStatusPayload:
        """Get the combined commit status of a ref.

        Args:
            owner: Repository owner
            repository_name: Repository name
            ref: Branch name or commit SHA

        Returns:
            Overall state plus the individual commit statuses
        """
        response = await self.client.get(
            f"repos/{owner}/{repository_name}/commits/{quote(ref, safe='/')}/status"
        )
        return self.client.parse(CombinedStatusPayload, response, "combined status")

    async def get_check_runs(
        self, owner: str, repository_name: str, ref: str
    ) -> CheckRunsPayload:
        """List the check runs of a ref.

        Args:
            owner: Repository owner
            repository_name: Repository name
            ref: Branch name or commit SHA

        Returns:
            Check runs with their status and conclusion
        """
        response = await self.client.get(
            f"repos/{owner}/{repository_name}/commits/{quote(ref, safe='/')}/check-runs"
        )
        return self.client.parse(CheckRunsPayload, response, "check runs")

    async def list_commits(
        self,
        owner: str,
        repository_name: str,
        branch: str,
        per_page: int = 10,
        page: int = 1,
    ) -> List[CommitListItem]:
        """List one page of commits reachable from ``branch``, newest first.

        Args:
            owner: Repository owner
            repository_name: Repository name
            branch: Branch name or commit SHA to start from
            per_page: Page size
            page: 1-based page number

        Returns:
            Commit list items
        """
        response = await self.client.get(
            f"repos/{owner}/{repository_name}/commits",
            params={"sha": branch, "per_page": per_page, "page": page},
        )
        return self.client.parse(_COMMIT_LIST_ADAPTER, response, "commit list")

    async def get_check_run_logs(
        self, owner: str, repository_name: str, check_run_id: int
    ) -> str:
        """Download check-run logs; redirects to the log storage are followed."""
        return await self.client.request_text(
            "GET",
            f"repos/{owner}/{repository_name}/check-runs/{check_run_id}/logs",
            accept=ACCEPT_RAW,
        )
