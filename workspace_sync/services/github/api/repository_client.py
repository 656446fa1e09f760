"""
GitRepositoryClient: the single entry point engines use for remote calls.
"""

from typing import Optional

import httpx

from workspace_sync.services.github.api.client import GitHubAPIClient
from workspace_sync.services.github.api.contents import ContentsOperations
from workspace_sync.services.github.api.git_data import GitDataOperations
from workspace_sync.services.github.api.repositories import RepositoryOperations
from workspace_sync.services.github.api.statuses import StatusOperations


class GitRepositoryClient:
    """Groups the REST operations behind one authenticated API client.

    Stateless apart from configuration: every call opens its own HTTP session.
    """

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_client = GitHubAPIClient(
            token=token,
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            transport=transport,
        )

        self.repositories = RepositoryOperations(client=self.api_client)
        self.git = GitDataOperations(client=self.api_client)
        self.contents = ContentsOperations(client=self.api_client)
        self.statuses = StatusOperations(client=self.api_client)
