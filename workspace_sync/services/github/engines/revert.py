"""
Rebuild the workspace from the full tree of a commit.
"""

import logging
from typing import Dict, Optional, Tuple

from workspace_sync.models.session import SessionContext
from workspace_sync.models.workspace import FileRecord
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.engines.base import (
    BaseEngine,
    bounded_gather,
    check_session,
)
from workspace_sync.services.github.errors import EmptyResultError, GitSyncError
from workspace_sync.services.github.models.schemas import GitTreeItem
from workspace_sync.services.github.models.types import CommitDetails, RevertResult

logger = logging.getLogger(__name__)

COMMIT_ERROR = "Failed to get commit: {error}"
TREE_ERROR = "Failed to get tree: {error}"
NO_FILES_ERROR = "No files found in commit {sha}."
SUCCESS_MESSAGE_TEMPLATE = "Successfully reverted to commit {sha} with {count} files."


class RevertEngine(BaseEngine):
    """Resolves a commit to its recursive tree and replaces the workspace with it."""

    async def revert_to_commit(self, context: SessionContext, sha: str) -> RevertResult:
        """Replace the workspace with the files of commit ``sha``.

        Local files that are not in the commit are dropped.
        """
        try:
            owner, repo, _ = check_session(context, require_branch=False)
        except GitSyncError as e:
            return RevertResult(success=False, message=e.message, error=e)

        client = self._client(context)

        try:
            commit = await client.git.get_commit(owner, repo, sha)
        except GitSyncError as e:
            return RevertResult(success=False, message=COMMIT_ERROR.format(error=e.message), error=e)

        try:
            tree = await client.git.get_tree(owner, repo, commit.tree.sha, recursive=True)
        except GitSyncError as e:
            return RevertResult(success=False, message=TREE_ERROR.format(error=e.message), error=e)

        pairs = await bounded_gather(
            tree.blobs(), lambda item: self._read_blob(client, owner, repo, item)
        )
        files: Dict[str, FileRecord] = {path: record for path, record in pairs if record}

        if not files:
            message = NO_FILES_ERROR.format(sha=sha)
            return RevertResult(success=False, message=message, error=EmptyResultError(message))

        context.workspace.replace_files(files)
        logger.info(f"Reverted workspace to {owner}/{repo}@{commit.sha} ({len(files)} files)")

        author = commit.author.model_dump() if commit.author else None
        return RevertResult(
            success=True,
            message=SUCCESS_MESSAGE_TEMPLATE.format(sha=sha, count=len(files)),
            commit_details=CommitDetails(
                sha=commit.sha,
                message=commit.message,
                author=author,
                date=commit.author.date if commit.author else None,
            ),
            file_count=len(files),
        )

    async def _read_blob(
        self,
        client: GitRepositoryClient,
        owner: str,
        repo: str,
        item: GitTreeItem,
    ) -> Tuple[str, Optional[FileRecord]]:
        # Unreadable blobs are skipped rather than failing the revert
        try:
            blob = await client.git.get_blob(owner, repo, item.sha)
            return item.path, FileRecord.fresh(blob.decoded_text())
        except (GitSyncError, ValueError) as e:
            logger.warning(f"Skipping {item.path} ({item.sha}): {e}")
            return item.path, None
