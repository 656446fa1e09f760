"""
GitHub repository contents operations.

Provides methods to read files, list directory contents and delete single files.
"""

import logging
from typing import List, Optional, Union
from urllib.parse import quote

from pydantic import TypeAdapter

from workspace_sync.services.github.api.client import GitHubAPIClient
from workspace_sync.services.github.errors import MalformedResponseError
from workspace_sync.services.github.models.schemas import ContentItem

logger = logging.getLogger(__name__)

_CONTENTS_ADAPTER = TypeAdapter(Union[List[ContentItem], ContentItem])


def contents_path(owner: str, repository_name: str, path: str) -> str:
    encoded = quote(path.strip("/"), safe="/")
    return f"repos/{owner}/{repository_name}/contents/{encoded}"


class ContentsOperations:
    """Handles GitHub repository contents operations."""

    def __init__(self, client: GitHubAPIClient):
        self.client = client

    async def get_contents(
        self,
        owner: str,
        repository_name: str,
        path: str = "",
        ref: Optional[str] = None,
    ) -> Union[List[ContentItem], ContentItem]:
        """Get contents of a directory or file.

        Args:
            owner: Repository owner
            repository_name: Repository name
            path: Path to directory or file (empty string for root)
            ref: Git reference (branch, tag, commit SHA)

        Returns:
            A list of items for a directory, a single item for a file
        """
        params = {"ref": ref} if ref else None
        response = await self.client.get(
            contents_path(owner, repository_name, path), params=params
        )
        return self.client.parse(_CONTENTS_ADAPTER, response, f"contents of '{path}'")

    async def get_contents_by_url(self, url: str) -> ContentItem:
        """Fetch one file through the ``url`` a directory listing item points at."""
        response = await self.client.get(url)
        item = self.client.parse(ContentItem, response, f"contents at {url}")
        return item

    async def get_file(
        self,
        owner: str,
        repository_name: str,
        path: str,
        ref: Optional[str] = None,
    ) -> ContentItem:
        """Get a single file, rejecting directories.

        Raises:
            MalformedResponseError: If ``path`` is a directory
        """
        contents = await self.get_contents(owner, repository_name, path, ref)
        if isinstance(contents, list) or not contents.is_file:
            raise MalformedResponseError(f"Path '{path}' is not a file")
        return contents

    async def delete_file(
        self,
        owner: str,
        repository_name: str,
        path: str,
        sha: str,
        message: str,
        branch: str,
    ) -> None:
        """Delete one file; ``sha`` must be the file's current blob sha."""
        await self.client.delete(
            contents_path(owner, repository_name, path),
            data={"message": message, "sha": sha, "branch": branch},
        )
        logger.info(f"Deleted {path} from {owner}/{repository_name} on {branch}")
