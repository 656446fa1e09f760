"""
Resolve the commit a publish builds on.
"""

import logging

from workspace_sync.services.github.api.git_data import GitDataOperations
from workspace_sync.services.github.errors import RemoteAPIError
from workspace_sync.services.github.models.types import BaseResolution

logger = logging.getLogger(__name__)


async def resolve_base(
    git: GitDataOperations,
    owner: str,
    repository_name: str,
    branch: str,
    default_branch: str,
) -> BaseResolution:
    """Return the tip of ``branch``, or of ``default_branch`` when ``branch`` cannot be read.

    Any remote failure on the branch lookup falls back to the default branch.
    If the branch does exist after all, creating it is later rejected with a 422.

    Raises:
        RemoteAPIError: If the default branch or the base commit cannot be read
    """
    try:
        ref = await git.get_ref(owner, repository_name, branch)
        branch_exists = True
        base_branch = branch
    except RemoteAPIError as e:
        logger.info(
            f"Branch {branch} unavailable in {owner}/{repository_name} "
            f"(status {e.status_code}); basing it on default branch {default_branch}"
        )
        ref = await git.get_ref(owner, repository_name, default_branch)
        branch_exists = False
        base_branch = default_branch

    commit = await git.get_commit(owner, repository_name, ref.target.sha)
    return BaseResolution(
        branch_exists=branch_exists,
        base_commit_sha=ref.target.sha,
        base_tree_sha=commit.tree.sha,
        base_branch=base_branch,
    )
