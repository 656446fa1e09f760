"""
Read-only build status, commit history and build log lookups.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from workspace_sync.config import config
from workspace_sync.models.session import (
    BuildLogsSnapshot,
    BuildStatusSnapshot,
    CommitHistorySnapshot,
    SessionContext,
)
from workspace_sync.models.workspace import utc_now_iso
from workspace_sync.services.github.api.repository_client import GitRepositoryClient
from workspace_sync.services.github.engines.base import BaseEngine, check_session
from workspace_sync.services.github.errors import GitSyncError, NotFoundError
from workspace_sync.services.github.models.schemas import CheckRunPayload
from workspace_sync.services.github.models.types import (
    BuildLogsResult,
    BuildStatusResult,
    BuildStatusSummary,
    CommitHistoryResult,
)

logger = logging.getLogger(__name__)

BUILD_STATUS_ERROR = "Failed to get build status: {error}"
COMMIT_HISTORY_ERROR = "Failed to get commit history: {error}"
CHECK_RUNS_ERROR = "Failed to get check runs: {error}"
NO_FAILED_CHECK_RUN_ERROR = "No failed check runs found for {repository}@{ref}"
LOGS_ERROR = "Failed to get logs: {error}"


def _check_run_view(run: CheckRunPayload) -> Dict[str, Any]:
    return {
        "id": run.id,
        "name": run.name,
        "status": run.status,
        "conclusion": run.conclusion,
        "started_at": run.started_at,
        "completed_at": run.completed_at,
        "html_url": run.html_url,
        "app": {"name": run.app.name if run.app else None},
    }


def summarize_build_status(repository: str, ref: str, build_status: Dict[str, Any]) -> BuildStatusSummary:
    statuses = build_status.get("statuses", [])
    check_runs = build_status.get("check_runs", [])
    return BuildStatusSummary(
        repository=repository,
        ref=ref,
        state=build_status["state"],
        status_count=len(statuses),
        check_runs_count=len(check_runs),
        failed_statuses=sum(1 for s in statuses if s["state"] != "success"),
        failed_check_runs=sum(
            1 for c in check_runs if c["status"] == "completed" and c["conclusion"] != "success"
        ),
        pending_check_runs=sum(1 for c in check_runs if c["status"] != "completed"),
    )


class StatusEngine(BaseEngine):
    """Combined status, check runs, commit history and check-run logs."""

    async def get_build_status(
        self, context: SessionContext, ref: str, update_state: bool = False
    ) -> BuildStatusResult:
        """Merge the combined status and the check runs of ``ref`` into one summary.

        Check runs are optional: if they cannot be read, the summary is built
        from commit statuses alone.
        """
        try:
            owner, repo, _ = check_session(context, require_branch=False)
        except GitSyncError as e:
            return BuildStatusResult(success=False, message=e.message, error=e)

        client = self._client(context)
        repository = f"{owner}/{repo}"

        try:
            combined = await client.statuses.get_combined_status(owner, repo, ref)
        except GitSyncError as e:
            return BuildStatusResult(
                success=False, message=BUILD_STATUS_ERROR.format(error=e.message), error=e
            )

        build_status: Dict[str, Any] = {
            "state": combined.state,
            "statuses": [status.model_dump() for status in combined.statuses],
        }

        try:
            checks = await client.statuses.get_check_runs(owner, repo, ref)
            build_status["check_runs"] = [_check_run_view(run) for run in checks.check_runs]
        except GitSyncError as e:
            logger.warning(f"Check runs unavailable for {repository}@{ref}: {e}")

        if update_state:
            context.build_status = BuildStatusSnapshot(
                repository=repository, ref=ref, status=build_status, timestamp=utc_now_iso()
            )

        return BuildStatusResult(
            success=True,
            message=f"Successfully retrieved build status for {repository}@{ref}",
            summary=summarize_build_status(repository, ref, build_status),
            build_status=build_status,
        )

    async def get_commit_history(
        self,
        context: SessionContext,
        branch: Optional[str] = None,
        per_page: int = 10,
        page: int = 1,
        include_status: bool = True,
        update_state: bool = True,
    ) -> CommitHistoryResult:
        """List one page of commits, optionally annotated with their combined status.

        Status lookups run one at a time with a fixed pause between them to
        stay clear of secondary rate limits.
        """
        try:
            owner, repo, session_branch = check_session(context, require_branch=False)
        except GitSyncError as e:
            return CommitHistoryResult(success=False, message=e.message, error=e)

        branch_name = branch or session_branch or config.DEFAULT_HISTORY_BRANCH
        client = self._client(context)
        repository = f"{owner}/{repo}"

        try:
            items = await client.statuses.list_commits(
                owner, repo, branch_name, per_page=per_page, page=page
            )
        except GitSyncError as e:
            return CommitHistoryResult(
                success=False,
                message=COMMIT_HISTORY_ERROR.format(error=e.message),
                error=e,
                branch=branch_name,
            )

        commits = [item.model_dump() for item in items]
        if include_status:
            for commit in commits:
                commit["status"] = await self._commit_status(client, owner, repo, commit["sha"])
                await asyncio.sleep(config.COMMIT_STATUS_DELAY_SECONDS)

        if update_state:
            context.commit_history = CommitHistorySnapshot(
                repository=repository,
                branch=branch_name,
                commits=commits,
                timestamp=utc_now_iso(),
            )

        return CommitHistoryResult(
            success=True,
            message=f"Successfully retrieved {len(commits)} commits from {repository}/{branch_name}",
            branch=branch_name,
            commits=commits,
        )

    async def get_build_logs(
        self,
        context: SessionContext,
        ref: str,
        check_run_id: Optional[int] = None,
        update_state: bool = False,
    ) -> BuildLogsResult:
        """Fetch the logs of a check run, by default the first failed one on ``ref``."""
        try:
            owner, repo, _ = check_session(context, require_branch=False)
        except GitSyncError as e:
            return BuildLogsResult(success=False, message=e.message, error=e)

        client = self._client(context)
        repository = f"{owner}/{repo}"

        if check_run_id is None:
            try:
                checks = await client.statuses.get_check_runs(owner, repo, ref)
            except GitSyncError as e:
                return BuildLogsResult(
                    success=False, message=CHECK_RUNS_ERROR.format(error=e.message), error=e
                )
            failed = self._first_failed(checks.check_runs)
            if failed is None:
                message = NO_FAILED_CHECK_RUN_ERROR.format(repository=repository, ref=ref)
                return BuildLogsResult(
                    success=False,
                    message=message,
                    error=NotFoundError(message, status_code=None),
                )
            check_run_id = failed.id

        try:
            logs = await client.statuses.get_check_run_logs(owner, repo, check_run_id)
        except GitSyncError as e:
            return BuildLogsResult(
                success=False,
                message=LOGS_ERROR.format(error=e.message),
                error=e,
                check_run_id=check_run_id,
            )

        if update_state:
            context.build_logs = BuildLogsSnapshot(
                repository=repository,
                ref=ref,
                check_run_id=str(check_run_id),
                logs=logs,
                timestamp=utc_now_iso(),
            )

        return BuildLogsResult(
            success=True,
            message=f"Successfully retrieved logs for check run {check_run_id}",
            check_run_id=check_run_id,
            logs=logs,
        )

    @staticmethod
    def _first_failed(check_runs: List[CheckRunPayload]) -> Optional[CheckRunPayload]:
        for run in check_runs:
            if run.status == "completed" and run.conclusion == "failure":
                return run
        return None

    async def _commit_status(
        self, client: GitRepositoryClient, owner: str, repo: str, sha: str
    ) -> Dict[str, Any]:
        try:
            combined = await client.statuses.get_combined_status(owner, repo, sha)
        except GitSyncError as e:
            logger.warning(f"Status unavailable for commit {sha}: {e}")
            return {"state": "pending"}
        return {
            "state": combined.state,
            "total_count": combined.total_count,
            "statuses": [status.model_dump() for status in combined.statuses],
        }
