"""
Git Data API operations: refs, commits, trees and blobs.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from workspace_sync.services.github.api.client import GitHubAPIClient
from workspace_sync.services.github.errors import NotFoundError
from workspace_sync.services.github.models.schemas import (
    GitBlobPayload,
    GitCommitPayload,
    GitRefPayload,
    GitTreeEntry,
    GitTreePayload,
)

logger = logging.getLogger(__name__)


def branch_ref_path(owner: str, repository_name: str, branch: str) -> str:
    # Branch names may contain '#', '?' or '%'
    return f"repos/{owner}/{repository_name}/git/refs/heads/{quote(branch, safe='/')}"


class GitDataOperations:
    """Low-level object operations against one repository."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    # Refs

    async def get_ref(self, owner: str, repository_name: str, branch: str) -> GitRefPayload:
        """Resolve ``heads/{branch}``.

        GitHub answers a ref that does not exist exactly but prefixes other refs
        with a list of those refs; that is treated as not found.

        Raises:
            NotFoundError: If the branch does not exist
        """
        path = branch_ref_path(owner, repository_name, branch)
        response = await self.client.get(path)

        if isinstance(response, list):
            wanted = f"refs/heads/{branch}"
            for item in response:
                if isinstance(item, dict) and item.get("ref") == wanted:
                    return self.client.parse(GitRefPayload, item, "git ref")
            raise NotFoundError(
                f"Branch not found: {branch} (only prefix matches returned)",
                status_code=404,
                method="GET",
                url=path,
            )

        return self.client.parse(GitRefPayload, response, "git ref")

    async def create_ref(
        self, owner: str, repository_name: str, branch: str, sha: str
    ) -> GitRefPayload:
        """Create ``refs/heads/{branch}`` pointing at ``sha``.

        Args:
            owner: Repository owner
            repository_name: Repository name
            branch: New branch name
            sha: Commit the branch starts at

        Returns:
            The created ref
        """
        response = await self.client.post(
            f"repos/{owner}/{repository_name}/git/refs",
            data={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        logger.info(f"Created branch {branch} at {sha} in {owner}/{repository_name}")
        return self.client.parse(GitRefPayload, response, "created git ref")

    async def update_ref(
        self,
        owner: str,
        repository_name: str,
        branch: str,
        sha: str,
        force: bool = False,
    ) -> GitRefPayload:
        """Move ``heads/{branch}`` to ``sha``.

        Args:
            owner: Repository owner
            repository_name: Repository name
            branch: Branch to move
            sha: New tip commit
            force: Allow non-fast-forward updates; with False GitHub answers 422

        Returns:
            The updated ref
        """
        response = await self.client.patch(
            branch_ref_path(owner, repository_name, branch),
            data={"sha": sha, "force": force},
        )
        logger.info(f"Updated branch {branch} to {sha} in {owner}/{repository_name}")
        return self.client.parse(GitRefPayload, response, "updated git ref")

    # Commits

    async def get_commit(self, owner: str, repository_name: str, sha: str) -> GitCommitPayload:
        """Get a commit object.

        Args:
            owner: Repository owner
            repository_name: Repository name
            sha: Commit SHA

        Returns:
            Commit with its tree, parents and author
        """
        response = await self.client.get(f"repos/{owner}/{repository_name}/git/commits/{sha}")
        return self.client.parse(GitCommitPayload, response, "git commit")

    async def create_commit(
        self,
        owner: str,
        repository_name: str,
        message: str,
        tree_sha: str,
        parents: List[str],
    ) -> GitCommitPayload:
        """Create a commit object without moving any ref.

        Args:
            owner: Repository owner
            repository_name: Repository name
            message: Commit message
            tree_sha: Tree the commit records
            parents: Parent commit SHAs

        Returns:
            The created commit
        """
        response = await self.client.post(
            f"repos/{owner}/{repository_name}/git/commits",
            data={"message": message, "tree": tree_sha, "parents": parents},
        )
        return self.client.parse(GitCommitPayload, response, "created git commit")

    # Trees

    async def get_tree(
        self, owner: str, repository_name: str, sha: str, recursive: bool = False
    ) -> GitTreePayload:
        """Get a tree, optionally with every nested entry.

        Args:
            owner: Repository owner
            repository_name: Repository name
            sha: Tree SHA
            recursive: List entries of all subtrees as well

        Returns:
            Tree entries; a warning is logged when GitHub truncated the listing
        """
        params = {"recursive": "1"} if recursive else None
        response = await self.client.get(
            f"repos/{owner}/{repository_name}/git/trees/{sha}", params=params
        )
        tree = self.client.parse(GitTreePayload, response, "git tree")
        if tree.truncated:
            logger.warning(
                f"Tree {sha} in {owner}/{repository_name} was truncated by GitHub; "
                f"only {len(tree.tree)} entries were returned"
            )
        return tree

    async def create_tree(
        self,
        owner: str,
        repository_name: str,
        entries: List[GitTreeEntry],
        base_tree: Optional[str] = None,
    ) -> GitTreePayload:
        """Create a tree.

        Args:
            owner: Repository owner
            repository_name: Repository name
            entries: Entries upserted over ``base_tree``; ``sha=None`` removes a path
            base_tree: Tree to start from (empty tree when omitted)

        Returns:
            The created tree
        """
        data = {"tree": [entry.model_dump() for entry in entries]}
        if base_tree:
            data["base_tree"] = base_tree
        response = await self.client.post(
            f"repos/{owner}/{repository_name}/git/trees", data=data
        )
        return self.client.parse(GitTreePayload, response, "created git tree")

    # Blobs

    async def get_blob(self, owner: str, repository_name: str, sha: str) -> GitBlobPayload:
        """Get a blob with its base64 content.

        Args:
            owner: Repository owner
            repository_name: Repository name
            sha: Blob SHA

        Returns:
            Blob payload; use ``decoded_text()`` for the file content
        """
        response = await self.client.get(f"repos/{owner}/{repository_name}/git/blobs/{sha}")
        return self.client.parse(GitBlobPayload, response, "git blob")

    async def create_blob(self, owner: str, repository_name: str, content: str) -> GitBlobPayload:
        """Store text content as a blob.

        Args:
            owner: Repository owner
            repository_name: Repository name
            content: File text, sent with ``encoding="utf-8"``

        Returns:
            Blob payload carrying only the new SHA
        """
        response = await self.client.post(
            f"repos/{owner}/{repository_name}/git/blobs",
            data={"content": content, "encoding": "utf-8"},
        )
        return self.client.parse(GitBlobPayload, response, "created git blob")
