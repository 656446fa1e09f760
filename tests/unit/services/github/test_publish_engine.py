"""Tests for PublishEngine."""

import asyncio
import json
from unittest.mock import patch

import pytest

from tests.fixtures.workspace_fixtures import create_test_context
from workspace_sync.services.github.api.git_data import GitDataOperations
from workspace_sync.services.github.engines.publish import PublishEngine
from workspace_sync.services.github.errors import ErrorKind


@pytest.fixture
def engine(client_factory):
    return PublishEngine(client_factory)


class TestPreconditions:
    """Preconditions fail fast, in order, without touching the network."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, expected",
        [
            ({"owner": None}, "owner"),
            ({"repository_name": None}, "repository name"),
            ({"branch": None}, "branch"),
            ({"files": {}}, "No files to publish"),
            ({"token": None}, "GITHUB_PERSONAL_ACCESS_TOKEN"),
        ],
    )
    async def test_missing_configuration(self, engine, fake_github, overrides, expected):
        params = {"files": {"a.txt": "hello"}}
        params.update(overrides)
        context = create_test_context(**params)

        result = await engine.publish(context, "init")

        assert result.success is False
        assert expected in result.message
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_owner_checked_before_token(self, engine):
        context = create_test_context(files={"a.txt": "x"}, owner=None, token=None)

        result = await engine.publish(context, "init")

        assert "owner" in result.message
        assert result.kind == ErrorKind.CONFIGURATION

    @pytest.mark.asyncio
    async def test_empty_workspace_is_empty_result(self, engine):
        result = await engine.publish(create_test_context(files={}), "init")

        assert result.kind == ErrorKind.EMPTY_RESULT


class TestPublishToExistingBranch:
    """Publishing onto a branch that already exists."""

    @pytest.mark.asyncio
    async def test_advances_branch_with_single_parent(self, engine, fake_github):
        tip = fake_github.refs["main"]
        context = create_test_context(files={"a.txt": "hello", "src/b.py": "print(2)\n"})

        result = await engine.publish(context, "add files")

        assert result.success is True
        assert result.files_published == 2
        assert result.branch_created is False
        assert fake_github.refs["main"] == result.commit_sha
        assert fake_github.commits[result.commit_sha]["parents"] == [tip]
        assert fake_github.commits[result.commit_sha]["message"] == "add files"
        assert "Successfully published 2 files" in result.message
        assert "octo-org/demo-site" in result.message

    @pytest.mark.asyncio
    async def test_ref_update_is_not_forced(self, engine, fake_github):
        context = create_test_context(files={"a.txt": "hello"})

        await engine.publish(context, "add a")

        patch_request = fake_github.requests_matching("PATCH", "/git/refs/heads/main")[0]
        assert json.loads(patch_request.content)["force"] is False
        assert fake_github.requests_matching("POST", "/git/refs") == []

    @pytest.mark.asyncio
    async def test_blobs_are_utf8_encoded(self, engine, fake_github):
        context = create_test_context(files={"a.txt": "hello"})

        await engine.publish(context, "add a")

        blob_request = fake_github.requests_matching("POST", "/git/blobs")[0]
        assert json.loads(blob_request.content) == {"content": "hello", "encoding": "utf-8"}

    @pytest.mark.asyncio
    async def test_publish_is_additive(self, engine, fake_github):
        fake_github.commit_on("main", {"remote-only.txt": "keep me"})
        context = create_test_context(files={"a.txt": "hello"})

        result = await engine.publish(context, "add a")

        remote = fake_github.files_at("main")
        assert result.success is True
        assert remote["remote-only.txt"] == "keep me"
        assert remote["README.md"] == "# demo\n"
        assert remote["a.txt"] == "hello"
        assert result.paths_removed == []

    @pytest.mark.asyncio
    async def test_prune_missing_mirrors_workspace(self, engine, fake_github):
        fake_github.commit_on("main", {"old/stale.txt": "bye"})
        context = create_test_context(files={"a.txt": "hello"})

        result = await engine.publish(context, "mirror", prune_missing=True)

        assert result.success is True
        assert result.paths_removed == ["README.md", "old/stale.txt"]
        assert fake_github.files_at("main") == {"a.txt": "hello"}

    @pytest.mark.asyncio
    async def test_workspace_is_not_mutated(self, engine):
        context = create_test_context(files={"a.txt": "hello"})
        before = context.workspace.get_files()

        await engine.publish(context, "add a")

        assert context.workspace.get_files() == before


class TestPublishToNewBranch:
    """Publishing to a branch that does not exist yet."""

    @pytest.mark.asyncio
    async def test_creates_branch_from_default_tip(self, engine, fake_github):
        default_tip = fake_github.refs["main"]
        context = create_test_context(files={"a.txt": "hello"}, branch="feature")

        result = await engine.publish(context, "start feature")

        assert result.success is True
        assert result.branch_created is True
        assert fake_github.refs["feature"] == result.commit_sha
        assert fake_github.refs["main"] == default_tip
        assert fake_github.commits[result.commit_sha]["parents"] == [default_tip]

        create_request = fake_github.requests_matching("POST", "/git/refs")[0]
        assert json.loads(create_request.content)["ref"] == "refs/heads/feature"
        assert fake_github.requests_matching("PATCH", "/git/refs") == []

    @pytest.mark.asyncio
    async def test_branch_prefixing_other_refs_is_created(self, engine, fake_github):
        fake_github.refs["feature/login"] = fake_github.refs["main"]
        context = create_test_context(files={"a.txt": "hello"}, branch="feature")

        result = await engine.publish(context, "start feature")

        assert result.success is True
        assert result.branch_created is True
        assert "feature" in fake_github.refs


class TestFailures:
    """Remote failures stop the publish where they happen."""

    @pytest.mark.asyncio
    async def test_missing_repository(self, engine, fake_github):
        fake_github.exists = False
        context = create_test_context(files={"a.txt": "hello"})

        result = await engine.publish(context, "init")

        assert result.success is False
        assert "Could not get repository information" in result.message
        assert result.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_blob_failure_aborts_before_tree(self, engine, fake_github):
        fake_github.fail("POST", "/git/blobs", status=500)
        tip = fake_github.refs["main"]
        context = create_test_context(files={"a.txt": "hello", "b.txt": "world"})

        result = await engine.publish(context, "init")

        assert result.success is False
        assert result.kind == ErrorKind.REMOTE
        assert fake_github.requests_matching("POST", "/git/trees") == []
        assert fake_github.requests_matching("POST", "/git/commits") == []
        assert fake_github.refs["main"] == tip

    @pytest.mark.asyncio
    async def test_ref_update_failure_leaves_unreferenced_commit(self, engine, fake_github):
        fake_github.fail("PATCH", "/git/refs/heads/main", status=422)
        tip = fake_github.refs["main"]
        commits_before = set(fake_github.commits)
        context = create_test_context(files={"a.txt": "hello"})

        result = await engine.publish(context, "init")

        assert result.success is False
        assert result.error.status_code == 422
        assert fake_github.refs["main"] == tip
        assert len(set(fake_github.commits) - commits_before) == 1

    @pytest.mark.asyncio
    async def test_non_fast_forward_is_rejected(self, engine, fake_github):
        context = create_test_context(files={"a.txt": "hello"})
        tip = fake_github.refs["main"]
        real_get_commit = fake_github._commit_payload

        def race(sha):
            # Someone pushes between base resolution and the ref update
            payload = real_get_commit(sha)
            if sha == tip and fake_github.refs["main"] == tip:
                fake_github.commit_on("main", {"race.txt": "theirs"})
            return payload

        with patch.object(fake_github, "_commit_payload", side_effect=race):
            result = await engine.publish(context, "mine")

        assert result.success is False
        assert "fast forward" in result.error.body
        assert fake_github.files_at("main")["race.txt"] == "theirs"


class TestBaseResolution:
    """How the publish picks the commit it builds on."""

    @pytest.mark.asyncio
    async def test_unreadable_branch_is_created_from_default(self, engine, fake_github):
        fake_github.fail("GET", "/git/refs/heads/newbranch", status=500)
        default_tip = fake_github.refs["main"]
        context = create_test_context(files={"a.txt": "hello"}, branch="newbranch")

        result = await engine.publish(context, "init")

        assert result.success is True
        assert result.branch_created is True
        assert fake_github.commits[fake_github.refs["newbranch"]]["parents"] == [default_tip]

    @pytest.mark.asyncio
    async def test_branch_with_reserved_characters(self, engine, fake_github):
        context = create_test_context(files={"a.txt": "one"}, branch="fix#12")

        first = await engine.publish(context, "first")
        context.workspace.create_or_update_file("a.txt", "two")
        second = await engine.publish(context, "second")

        assert first.branch_created is True
        assert second.success is True
        assert second.branch_created is False
        assert sorted(fake_github.refs) == ["fix#12", "main"]
        assert fake_github.files_at("fix#12")["a.txt"] == "two"
        assert fake_github.commits[second.commit_sha]["parents"] == [first.commit_sha]

    @pytest.mark.asyncio
    async def test_base_commit_failure_is_reported_separately(self, engine, fake_github):
        fake_github.fail("GET", "/git/commits/", status=500)
        context = create_test_context(files={"a.txt": "hello"})

        result = await engine.publish(context, "init")

        assert result.success is False
        assert result.message.startswith(
            "Error: Could not resolve the base commit for branch main (default branch main)."
        )
        assert "Could not get repository information" not in result.message
        assert result.error.status_code == 500


class TestBlobConcurrency:
    @pytest.mark.asyncio
    async def test_uploads_respect_configured_limit(self, engine, fake_github, monkeypatch):
        monkeypatch.setattr("workspace_sync.config.config.BLOB_UPLOAD_CONCURRENCY", 2)
        real_create_blob = GitDataOperations.create_blob
        in_flight = 0
        peak = 0

        async def tracking_create_blob(self, owner, repository_name, content):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            try:
                await asyncio.sleep(0.01)
                return await real_create_blob(self, owner, repository_name, content)
            finally:
                in_flight -= 1

        files = {f"file{n}.txt": str(n) for n in range(6)}
        with patch.object(GitDataOperations, "create_blob", tracking_create_blob):
            result = await engine.publish(create_test_context(files=files), "many")

        assert result.success is True
        assert peak == 2
        assert len(fake_github.requests_matching("POST", "/git/blobs")) == 6
