"""Tests for the Workspace model."""

from workspace_sync.models.workspace import FileRecord, Workspace


def make_record(content="x"):
    return FileRecord(
        content=content,
        created="2023-06-01T12:00:00+00:00",
        modified="2023-06-01T12:00:00+00:00",
    )


class TestWorkspace:
    def test_create_then_update_keeps_created(self):
        workspace = Workspace()

        assert workspace.create_or_update_file("a.txt", "one") == "created"
        created = workspace.get_files()["a.txt"].created

        assert workspace.create_or_update_file("a.txt", "two") == "updated"
        record = workspace.get_files()["a.txt"]
        assert record.content == "two"
        assert record.created == created

    def test_update_bumps_modified(self):
        workspace = Workspace({"a.txt": make_record()})

        workspace.create_or_update_file("a.txt", "y")

        record = workspace.get_files()["a.txt"]
        assert record.created == "2023-06-01T12:00:00+00:00"
        assert record.modified != "2023-06-01T12:00:00+00:00"

    def test_get_files_returns_copy(self):
        workspace = Workspace({"a.txt": make_record()})

        workspace.get_files().pop("a.txt")

        assert "a.txt" in workspace

    def test_replace_files(self):
        workspace = Workspace({"a.txt": make_record()})

        workspace.replace_files({"b.txt": make_record("b")})

        assert list(workspace) == ["b.txt"]
        assert len(workspace) == 1

    def test_delete_file(self):
        workspace = Workspace({"a.txt": make_record()})

        assert workspace.delete_file("a.txt") is True
        assert workspace.delete_file("a.txt") is False
        assert len(workspace) == 0

    def test_fresh_record(self):
        record = FileRecord.fresh("hello")

        assert record.content == "hello"
        assert record.created == record.modified
        assert record.streaming is False
