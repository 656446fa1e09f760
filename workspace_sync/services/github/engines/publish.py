"""
Publish the workspace snapshot as one new commit on the session branch.

The new tree is built over the base commit's tree, so publishing upserts the
workspace paths and, unless ``prune_missing`` is set, leaves remote-only paths
in place.
"""

import logging
from typing import Dict, List, Tuple

from workspace_sync.models.session import SessionContext
from workspace_sync.models.workspace import FileRecord
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.engines.base import (
    BaseEngine,
    bounded_gather,
    check_session,
)
from workspace_sync.services.github.engines.branch_resolver import resolve_base
from workspace_sync.services.github.errors import GitSyncError
from workspace_sync.services.github.models.schemas import GitTreeEntry
from workspace_sync.services.github.models.types import PublishResult

logger = logging.getLogger(__name__)

REPOSITORY_INFO_ERROR = (
    "Error: Could not get repository information. "
    "Make sure the repository exists and you have access to it."
)
BASE_COMMIT_ERROR = (
    "Error: Could not resolve the base commit for branch {branch} "
    "(default branch {default_branch}). Details: {error}"
)
PUBLISH_FAILED_ERROR = "Failed to publish files: {error}"
SUCCESS_MESSAGE_TEMPLATE = (
    "Successfully published {count} files to GitHub repository {owner}/{repo} on branch {branch}."
)


class PublishEngine(BaseEngine):
    """Builds one commit from the workspace and advances (or creates) the branch."""

    async def publish(
        self,
        context: SessionContext,
        commit_message: str,
        prune_missing: bool = False,
    ) -> PublishResult:
        """Publish every workspace file in a single commit.

        Args:
            context: Session whose workspace and repository are used
            commit_message: Message of the new commit
            prune_missing: Also delete remote paths that are absent from the workspace

        Returns:
            PublishResult; on failure nothing already created remotely is rolled back
        """
        try:
            owner, repo, branch = check_session(context, require_files=True)
        except GitSyncError as e:
            return PublishResult(success=False, message=e.message, error=e)

        client = self._client(context)
        files = context.workspace.get_files()

        try:
            repository = await client.repositories.get_repository(owner, repo)
        except GitSyncError as e:
            logger.error(f"Could not read repository {owner}/{repo}: {e}")
            return PublishResult(
                success=False,
                message=f"{REPOSITORY_INFO_ERROR} Details: {e.message}",
                error=e,
            )

        try:
            base = await resolve_base(client.git, owner, repo, branch, repository.default_branch)
        except GitSyncError as e:
            logger.error(f"Could not resolve base commit for {owner}/{repo}@{branch}: {e}")
            return PublishResult(
                success=False,
                message=BASE_COMMIT_ERROR.format(
                    branch=branch, default_branch=repository.default_branch, error=e.message
                ),
                error=e,
            )

        try:
            entries = await self._create_blobs(client, owner, repo, files)

            removed: List[str] = []
            if prune_missing:
                removed = await self._paths_missing_locally(
                    client, owner, repo, base.base_tree_sha, files
                )
                entries.extend(GitTreeEntry(path=path, sha=None) for path in removed)

            tree = await client.git.create_tree(
                owner, repo, entries, base_tree=base.base_tree_sha
            )
            commit = await client.git.create_commit(
                owner, repo, commit_message, tree.sha, [base.base_commit_sha]
            )

            if base.branch_exists:
                await client.git.update_ref(owner, repo, branch, commit.sha, force=False)
            else:
                await client.git.create_ref(owner, repo, branch, commit.sha)
        except GitSyncError as e:
            logger.error(f"Publish to {owner}/{repo}@{branch} failed: {e}")
            return PublishResult(
                success=False,
                message=PUBLISH_FAILED_ERROR.format(error=e.message),
                error=e,
            )

        logger.info(
            f"Published {len(files)} files to {owner}/{repo}@{branch} "
            f"as commit {commit.sha} (parent {base.base_commit_sha})"
        )
        return PublishResult(
            success=True,
            message=SUCCESS_MESSAGE_TEMPLATE.format(
                count=len(files), owner=owner, repo=repo, branch=branch
            ),
            files_published=len(files),
            owner=owner,
            repository_name=repo,
            branch=branch,
            commit_sha=commit.sha,
            tree_sha=tree.sha,
            branch_created=not base.branch_exists,
            paths_removed=removed,
        )

    async def _create_blobs(
        self,
        client: GitRepositoryClient,
        owner: str,
        repo: str,
        files: Dict[str, FileRecord],
    ) -> List[GitTreeEntry]:
        async def create_entry(item: Tuple[str, FileRecord]) -> GitTreeEntry:
            path, record = item
            try:
                blob = await client.git.create_blob(owner, repo, record.content)
            except GitSyncError as e:
                logger.error(f"Failed to create blob for {path}: {e}")
                raise
            return GitTreeEntry(path=path, sha=blob.sha)

        return await bounded_gather(sorted(files.items()), create_entry)

    async def _paths_missing_locally(
        self,
        client: GitRepositoryClient,
        owner: str,
        repo: str,
        base_tree_sha: str,
        files: Dict[str, FileRecord],
    ) -> List[str]:
        base_tree = await client.git.get_tree(owner, repo, base_tree_sha, recursive=True)
        return sorted(item.path for item in base_tree.blobs() if item.path not in files)
