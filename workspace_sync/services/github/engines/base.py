"""
Shared plumbing for the sync engines: client construction, session
preconditions and bounded concurrent fan-out.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, TypeVar

from workspace_sync.config import config
from workspace_sync.models.session import SessionContext
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.errors import ConfigurationError, EmptyResultError

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

ClientFactory = Callable[[str], GitRepositoryClient]

OWNER_MISSING_ERROR = "GitHub owner not configured in session."
NAME_MISSING_ERROR = "Workspace name (used as repository name) not configured in session."
BRANCH_MISSING_ERROR = "GitHub branch not configured in session."
NO_FILES_ERROR = "No files to publish. Create some files first."
TOKEN_MISSING_ERROR = "GITHUB_PERSONAL_ACCESS_TOKEN environment variable not set."


class BaseEngine:
    """Base class giving engines a way to build a client for a session."""

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        self.client_factory = client_factory or GitRepositoryClient

    def _client(self, context: SessionContext) -> GitRepositoryClient:
        return self.client_factory(context.token)


def check_session(
    context: SessionContext,
    require_branch: bool = True,
    require_files: bool = False,
) -> Tuple[str, str, Optional[str]]:
    """Validate the session in a fixed order: owner, name, branch, files, token.

    Returns:
        Tuple of (owner, repository_name, branch)

    Raises:
        ConfigurationError: If owner, name, branch or token is missing
        EmptyResultError: If ``require_files`` and the workspace is empty
    """
    repository = context.repository
    if not repository.owner:
        raise ConfigurationError(OWNER_MISSING_ERROR)
    if not repository.repository_name:
        raise ConfigurationError(NAME_MISSING_ERROR)
    if require_branch and not repository.branch:
        raise ConfigurationError(BRANCH_MISSING_ERROR)
    if require_files and len(context.workspace) == 0:
        raise EmptyResultError(NO_FILES_ERROR)
    if not context.token:
        raise ConfigurationError(TOKEN_MISSING_ERROR)
    return repository.owner, repository.repository_name, repository.branch


async def bounded_gather(
    items: Iterable[ItemT],
    worker: Callable[[ItemT], Awaitable[ResultT]],
    limit: Optional[int] = None,
) -> List[ResultT]:
    """Run ``worker`` over ``items`` with at most ``limit`` calls in flight.

    Every call runs to completion; the first exception (in input order) is
    then re-raised, so a single failure fails the whole batch.
    """
    semaphore = asyncio.Semaphore(limit or config.BLOB_UPLOAD_CONCURRENCY)

    async def run_with_limit(item: ItemT) -> ResultT:
        async with semaphore:
            return await worker(item)

    results = await asyncio.gather(
        *(run_with_limit(item) for item in items), return_exceptions=True
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
