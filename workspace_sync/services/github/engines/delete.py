"""
Delete one file remotely (single-file commit through the Contents API) and locally.
"""

import logging

from workspace_sync.models.session import SessionContext
from workspace_sync.services.github.engines.base import BaseEngine, check_session
from workspace_sync.services.github.errors import GitSyncError, RemoteAPIError
from workspace_sync.services.github.models.types import DeleteResult

logger = logging.getLogger(__name__)

FILE_NOT_FOUND_ERROR = "File not found or cannot be accessed: {path}. Status: {status}"
DELETE_FAILED_ERROR = "Failed to delete file: {error}"
SUCCESS_MESSAGE_TEMPLATE = (
    "Successfully deleted file {path} from GitHub repository {owner}/{repo} on branch {branch}."
)


class DeleteFileOp(BaseEngine):
    """Removes one path from the session branch and from the workspace."""

    async def delete(
        self, context: SessionContext, path: str, commit_message: str
    ) -> DeleteResult:
        try:
            owner, repo, branch = check_session(context)
        except GitSyncError as e:
            return DeleteResult(success=False, message=e.message, error=e, path=path)

        client = self._client(context)

        try:
            current = await client.contents.get_file(owner, repo, path, ref=branch)
        except GitSyncError as e:
            status = e.status_code if isinstance(e, RemoteAPIError) else None
            return DeleteResult(
                success=False,
                message=FILE_NOT_FOUND_ERROR.format(path=path, status=status),
                error=e,
                path=path,
            )

        try:
            await client.contents.delete_file(
                owner, repo, path, sha=current.sha, message=commit_message, branch=branch
            )
        except GitSyncError as e:
            logger.error(f"Deleting {path} from {owner}/{repo}@{branch} failed: {e}")
            return DeleteResult(
                success=False,
                message=DELETE_FAILED_ERROR.format(error=e.message),
                error=e,
                path=path,
            )

        removed_locally = context.workspace.delete_file(path)
        return DeleteResult(
            success=True,
            message=SUCCESS_MESSAGE_TEMPLATE.format(
                path=path, owner=owner, repo=repo, branch=branch
            ),
            path=path,
            removed_locally=removed_locally,
        )
