"""
Replace the workspace with the files found under a remote path.
"""

import logging
from typing import Dict, Optional

from workspace_sync.config import config
from workspace_sync.models.session import SessionContext
from workspace_sync.models.workspace import FileRecord
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.engines.base import BaseEngine, check_session
from workspace_sync.services.github.errors import EmptyResultError, GitSyncError
from workspace_sync.services.github.models.schemas import ContentItem
from workspace_sync.services.github.models.types import SyncResult

logger = logging.getLogger(__name__)

NO_FILES_MESSAGE = "No files found in {owner}/{repo}/{branch}{suffix}."
SYNC_FAILED_ERROR = "Failed to fetch repository contents: {error}"
SUCCESS_MESSAGE_TEMPLATE = (
    "Successfully synced {count} files from GitHub repository {owner}/{repo} on branch {branch}."
)


class SyncEngine(BaseEngine):
    """Walks the Contents API and replaces the workspace with what it finds."""

    async def sync(self, context: SessionContext, path: str = "") -> SyncResult:
        """Sync files from the session branch into the workspace.

        Timestamps of synced files are set to now; the originals are not
        recoverable from the remote. When nothing is found the workspace is
        left untouched and the result carries an EmptyResultError while still
        reporting success.
        """
        try:
            owner, repo, branch = check_session(context)
        except GitSyncError as e:
            return SyncResult(success=False, message=e.message, error=e)

        client = self._client(context)
        try:
            files = await self._fetch(client, owner, repo, branch, path)
        except GitSyncError as e:
            logger.error(f"Sync from {owner}/{repo}@{branch} failed: {e}")
            return SyncResult(
                success=False, message=SYNC_FAILED_ERROR.format(error=e.message), error=e
            )

        if not files:
            message = NO_FILES_MESSAGE.format(
                owner=owner, repo=repo, branch=branch, suffix=f"/{path}" if path else ""
            )
            logger.warning(message)
            return SyncResult(
                success=True, message=message, error=EmptyResultError(message), file_count=0
            )

        context.workspace.replace_files(files)
        logger.info(f"Synced {len(files)} files from {owner}/{repo}@{branch}")
        return SyncResult(
            success=True,
            message=SUCCESS_MESSAGE_TEMPLATE.format(
                count=len(files), owner=owner, repo=repo, branch=branch
            ),
            file_count=len(files),
        )

    async def _fetch(
        self,
        client: GitRepositoryClient,
        owner: str,
        repo: str,
        branch: str,
        path: str,
    ) -> Dict[str, FileRecord]:
        contents = await client.contents.get_contents(owner, repo, path, ref=branch)

        if not isinstance(contents, list):
            record = self._decode(contents)
            return {contents.path: record} if record else {}

        if len(contents) >= config.CONTENTS_LISTING_LIMIT:
            logger.warning(
                f"Directory '{path or '/'}' in {owner}/{repo} lists {len(contents)} entries; "
                f"the Contents API may have truncated it"
            )

        files: Dict[str, FileRecord] = {}
        for item in contents:
            if item.is_file:
                try:
                    detail = await client.contents.get_contents_by_url(item.url)
                except GitSyncError as e:
                    logger.warning(f"Skipping {item.path}: {e}")
                    continue
                record = self._decode(detail)
                if record:
                    files[item.path] = record
            elif item.is_directory:
                files.update(await self._fetch(client, owner, repo, branch, item.path))
        return files

    @staticmethod
    def _decode(item: ContentItem) -> Optional[FileRecord]:
        try:
            return FileRecord.fresh(item.decoded_text())
        except ValueError as e:
            logger.warning(f"Skipping {item.path}: {e}")
            return None
