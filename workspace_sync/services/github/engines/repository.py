"""
Check for and create the repository backing a workspace.
"""

import logging

from workspace_sync.models.session import SessionContext
from workspace_sync.services.github.engines.base import BaseEngine, check_session
from workspace_sync.services.github.errors import GitSyncError, NotFoundError
from workspace_sync.services.github.models.types import (
    RepositoryCheckResult,
    RepositoryCreateResult,
)

logger = logging.getLogger(__name__)


class RepositoryEngine(BaseEngine):
    """Repository existence check and creation, named after the workspace."""

    async def check_repository(self, context: SessionContext) -> RepositoryCheckResult:
        try:
            owner, repo, _ = check_session(context, require_branch=False)
        except GitSyncError as e:
            return RepositoryCheckResult(success=False, message=e.message, error=e)

        client = self._client(context)
        try:
            info = await client.repositories.get_repository(owner, repo)
        except NotFoundError as e:
            return RepositoryCheckResult(
                success=True,
                message=f"Repository {owner}/{repo} does not exist or you don't have access to it.",
                error=e,
                exists=False,
            )
        except GitSyncError as e:
            return RepositoryCheckResult(
                success=False,
                message=f"Error checking repository: {e.message}",
                error=e,
                exists=False,
            )

        return RepositoryCheckResult(
            success=True,
            message=f"Repository {info.full_name} exists",
            exists=True,
            repository=info,
        )

    async def create_repository(
        self,
        context: SessionContext,
        description: str = "",
        private: bool = False,
        auto_init: bool = True,
    ) -> RepositoryCreateResult:
        """Create ``owner/<workspace name>``.

        ``auto_init`` defaults to True so the default branch exists and the
        first publish has a commit to build on.
        """
        try:
            owner, repo, _ = check_session(context, require_branch=False)
        except GitSyncError as e:
            return RepositoryCreateResult(success=False, message=e.message, error=e)

        client = self._client(context)
        try:
            info = await client.repositories.create_repository(
                owner, repo, description=description, private=private, auto_init=auto_init
            )
        except GitSyncError as e:
            logger.error(f"Creating {owner}/{repo} failed: {e}")
            return RepositoryCreateResult(
                success=False,
                message=f"Failed to create repository: {e.message}",
                error=e,
            )

        return RepositoryCreateResult(
            success=True,
            message=f"Successfully created repository {info.full_name}",
            repository=info,
        )
