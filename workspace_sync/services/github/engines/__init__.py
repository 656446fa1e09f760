"""
Sync engines: one class per workspace/repository operation.
"""

from workspace_sync.services.github.engines.branch_resolver import resolve_base
from workspace_sync.services.github.engines.delete import DeleteFileOp
from workspace_sync.services.github.engines.publish import PublishEngine
from workspace_sync.services.github.engines.repository import RepositoryEngine
from workspace_sync.services.github.engines.revert import RevertEngine
from workspace_sync.services.github.engines.status import StatusEngine
from workspace_sync.services.github.engines.sync import SyncEngine

__all__ = [
    "DeleteFileOp",
    "PublishEngine",
    "RepositoryEngine",
    "RevertEngine",
    "StatusEngine",
    "SyncEngine",
    "resolve_base",
]
