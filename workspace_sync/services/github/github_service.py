"""
GitHub Sync Service - Unified facade for workspace/repository synchronization.

This service provides a single entry point for:
- Publishing the workspace as a commit
- Syncing or reverting the workspace from the repository
- Deleting single files
- Build status, commit history and build logs
- Repository existence checks and creation
"""

from typing import Optional

from workspace_sync.models.session import SessionContext
from workspace_sync.services.github.engines.base import ClientFactory
from workspace_sync.services.github.engines.delete import DeleteFileOp
from workspace_sync.services.github.engines.publish import PublishEngine
from workspace_sync.services.github.engines.repository import RepositoryEngine
from workspace_sync.services.github.engines.revert import RevertEngine
from workspace_sync.services.github.engines.status import StatusEngine
from workspace_sync.services.github.engines.sync import SyncEngine
from workspace_sync.services.github.models.types import (
    BuildLogsResult,
    BuildStatusResult,
    CommitHistoryResult,
    DeleteResult,
    PublishResult,
    RepositoryCheckResult,
    RepositoryCreateResult,
    RevertResult,
    SyncResult,
)


class GitHubSyncService:
    """
    Unified service providing all workspace synchronization functionality.

    Every call takes the session explicitly; the service itself holds no
    per-session state.
    """

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        """Initialize the service.

        Args:
            client_factory: Builds a GitRepositoryClient from a token
                (defaults to GitRepositoryClient itself)
        """
        self.publisher = PublishEngine(client_factory)
        self.syncer = SyncEngine(client_factory)
        self.reverter = RevertEngine(client_factory)
        self.deleter = DeleteFileOp(client_factory)
        self.status = StatusEngine(client_factory)
        self.repositories = RepositoryEngine(client_factory)

    async def publish(
        self, context: SessionContext, commit_message: str, prune_missing: bool = False
    ) -> PublishResult:
        return await self.publisher.publish(context, commit_message, prune_missing=prune_missing)

    async def sync(self, context: SessionContext, path: str = "") -> SyncResult:
        return await self.syncer.sync(context, path)

    async def revert_to_commit(self, context: SessionContext, sha: str) -> RevertResult:
        return await self.reverter.revert_to_commit(context, sha)

    async def delete_file(
        self, context: SessionContext, path: str, commit_message: str
    ) -> DeleteResult:
        return await self.deleter.delete(context, path, commit_message)

    async def get_build_status(
        self, context: SessionContext, ref: str, update_state: bool = False
    ) -> BuildStatusResult:
        return await self.status.get_build_status(context, ref, update_state=update_state)

    async def get_commit_history(
        self,
        context: SessionContext,
        branch: Optional[str] = None,
        per_page: int = 10,
        page: int = 1,
        include_status: bool = True,
        update_state: bool = True,
    ) -> CommitHistoryResult:
        return await self.status.get_commit_history(
            context,
            branch=branch,
            per_page=per_page,
            page=page,
            include_status=include_status,
            update_state=update_state,
        )

    async def get_build_logs(
        self,
        context: SessionContext,
        ref: str,
        check_run_id: Optional[int] = None,
        update_state: bool = False,
    ) -> BuildLogsResult:
        return await self.status.get_build_logs(
            context, ref, check_run_id=check_run_id, update_state=update_state
        )

    async def check_repository(self, context: SessionContext) -> RepositoryCheckResult:
        return await self.repositories.check_repository(context)

    async def create_repository(
        self,
        context: SessionContext,
        description: str = "",
        private: bool = False,
        auto_init: bool = True,
    ) -> RepositoryCreateResult:
        return await self.repositories.create_repository(
            context, description=description, private=private, auto_init=auto_init
        )
