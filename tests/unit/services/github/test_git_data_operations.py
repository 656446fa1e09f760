"""Tests for Git Data and Contents operations against the fake repository."""

import json

import pytest

from workspace_sync.services.github.errors import MalformedResponseError, NotFoundError
from workspace_sync.services.github.models.schemas import GitTreeEntry


@pytest.fixture
def client(client_factory):
    return client_factory("test-token")


class TestRefs:
    """Ref lookups."""

    @pytest.mark.asyncio
    async def test_get_existing_ref(self, client, fake_github):
        ref = await client.git.get_ref("octo-org", "demo-site", "main")

        assert ref.ref == "refs/heads/main"
        assert ref.target.sha == fake_github.refs["main"]

    @pytest.mark.asyncio
    async def test_missing_ref_raises_not_found(self, client):
        with pytest.raises(NotFoundError):
            await client.git.get_ref("octo-org", "demo-site", "nope")

    @pytest.mark.asyncio
    async def test_prefix_match_list_is_not_found(self, client, fake_github):
        fake_github.refs["feature/login"] = fake_github.refs["main"]

        with pytest.raises(NotFoundError):
            await client.git.get_ref("octo-org", "demo-site", "feature")

    @pytest.mark.asyncio
    async def test_prefix_match_list_containing_exact_ref(self, client, fake_github):
        fake_github.refs["main-old"] = fake_github.refs["main"]
        # The fake answers exact refs with an object; force the list form
        real_get_ref = fake_github._get_ref
        fake_github._get_ref = lambda branch: real_get_ref("ma")

        ref = await client.git.get_ref("octo-org", "demo-site", "main")

        assert ref.ref == "refs/heads/main"


class TestObjects:
    """Blob, tree and commit creation."""

    @pytest.mark.asyncio
    async def test_blob_round_trip(self, client):
        created = await client.git.create_blob("octo-org", "demo-site", "héllo\n")
        blob = await client.git.get_blob("octo-org", "demo-site", created.sha)

        assert blob.decoded_text() == "héllo\n"

    @pytest.mark.asyncio
    async def test_create_tree_sends_null_sha_for_removals(self, client, fake_github):
        base = fake_github.commits[fake_github.refs["main"]]["tree"]
        blob = await client.git.create_blob("octo-org", "demo-site", "x")

        tree = await client.git.create_tree(
            "octo-org",
            "demo-site",
            [GitTreeEntry(path="x.txt", sha=blob.sha), GitTreeEntry(path="README.md", sha=None)],
            base_tree=base,
        )

        request = fake_github.requests_matching("POST", "/git/trees")[-1]
        sent = json.loads(request.content)
        assert sent["base_tree"] == base
        assert {"path": "README.md", "mode": "100644", "type": "blob", "sha": None} in sent["tree"]
        assert fake_github.trees[tree.sha] == {"x.txt": blob.sha}

    @pytest.mark.asyncio
    async def test_create_commit_records_parent(self, client, fake_github):
        tip = fake_github.refs["main"]
        tree = fake_github.commits[tip]["tree"]

        commit = await client.git.create_commit("octo-org", "demo-site", "msg", tree, [tip])

        assert [p.sha for p in commit.parents] == [tip]
        assert commit.tree.sha == tree


class TestContents:
    """Contents API reads."""

    @pytest.mark.asyncio
    async def test_directory_listing_and_single_file(self, client, fake_github):
        fake_github.commit_on("main", {"src/app.py": "print(1)\n"})

        root = await client.contents.get_contents("octo-org", "demo-site", "", ref="main")
        single = await client.contents.get_contents("octo-org", "demo-site", "src/app.py", ref="main")

        assert isinstance(root, list)
        assert {(item.path, item.type) for item in root} == {("README.md", "file"), ("src", "dir")}
        assert single.decoded_text() == "print(1)\n"

    @pytest.mark.asyncio
    async def test_get_file_rejects_directory(self, client, fake_github):
        fake_github.commit_on("main", {"src/app.py": "print(1)\n"})

        with pytest.raises(MalformedResponseError):
            await client.contents.get_file("octo-org", "demo-site", "src", ref="main")
