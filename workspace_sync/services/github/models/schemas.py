"""
Response and request schemas for the GitHub REST endpoints used by the sync engines.

Payloads are validated at the client boundary so that a malformed response
fails before any engine acts on it. Unknown fields are ignored.
"""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional

from pydantic import BaseModel, Field


def decode_base64_text(content: str) -> str:
    """Decode GitHub's base64 content (which contains line breaks) to UTF-8 text."""
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Content is not base64-encoded UTF-8 text: {e}") from e


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class RepositoryOwner(BaseModel):
    login: str
    type: Optional[str] = None


class RepositoryPayload(BaseModel):
    """GET /repos/{owner}/{repo} and POST /orgs/{owner}/repos."""

    name: str
    full_name: str
    default_branch: str
    private: bool = False
    html_url: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[RepositoryOwner] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    pushed_at: Optional[str] = None
    size: Optional[int] = None
    stargazers_count: Optional[int] = None
    watchers_count: Optional[int] = None
    forks_count: Optional[int] = None
    open_issues_count: Optional[int] = None


# ---------------------------------------------------------------------------
# Git data: refs, commits, trees, blobs
# ---------------------------------------------------------------------------


class GitObjectPointer(BaseModel):
    sha: str
    type: Optional[str] = None
    url: Optional[str] = None


class GitRefPayload(BaseModel):
    """GET/PATCH /git/refs/heads/{branch} and POST /git/refs."""

    ref: str
    target: GitObjectPointer = Field(alias="object")


class GitActor(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None


class GitCommitPayload(BaseModel):
    """GET/POST /git/commits."""

    sha: str
    message: str = ""
    tree: GitObjectPointer
    parents: List[GitObjectPointer] = Field(default_factory=list)
    author: Optional[GitActor] = None
    committer: Optional[GitActor] = None


class GitTreeEntry(BaseModel):
    """One entry sent to POST /git/trees.

    ``sha=None`` removes ``path`` from the base tree.
    """

    path: str
    mode: str = "100644"
    type: str = "blob"
    sha: Optional[str]


class GitTreeItem(BaseModel):
    path: str
    mode: str
    type: str
    sha: Optional[str] = None
    size: Optional[int] = None


class GitTreePayload(BaseModel):
    """GET /git/trees/{sha} and POST /git/trees."""

    sha: str
    tree: List[GitTreeItem] = Field(default_factory=list)
    truncated: bool = False

    def blobs(self) -> List[GitTreeItem]:
        return [item for item in self.tree if item.type == "blob"]


class GitBlobPayload(BaseModel):
    """GET /git/blobs/{sha} (content present) and POST /git/blobs (sha only)."""

    sha: str
    content: Optional[str] = None
    encoding: Optional[str] = None
    size: Optional[int] = None

    def decoded_text(self) -> str:
        if self.content is None:
            raise ValueError(f"Blob {self.sha} has no content")
        if self.encoding in (None, "base64"):
            return decode_base64_text(self.content)
        return self.content


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


class ContentItem(BaseModel):
    """Entry of GET /contents/{path}: a directory listing item or a single file."""

    name: str
    path: str
    sha: str
    type: str
    size: int = 0
    url: str
    download_url: Optional[str] = None
    content: Optional[str] = None
    encoding: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_directory(self) -> bool:
        return self.type == "dir"

    def decoded_text(self) -> str:
        if self.content is None:
            raise ValueError(f"No inline content for {self.path}")
        if self.encoding in (None, "base64"):
            return decode_base64_text(self.content)
        return self.content


# ---------------------------------------------------------------------------
# Statuses, check runs, commit history
# ---------------------------------------------------------------------------


class CommitStatusEntry(BaseModel):
    state: str
    context: Optional[str] = None
    description: Optional[str] = None
    target_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CombinedStatusPayload(BaseModel):
    """GET /commits/{ref}/status."""

    state: str
    total_count: int = 0
    statuses: List[CommitStatusEntry] = Field(default_factory=list)


class CheckRunApp(BaseModel):
    name: Optional[str] = None


class CheckRunPayload(BaseModel):
    id: int
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    html_url: Optional[str] = None
    app: Optional[CheckRunApp] = None


class CheckRunsPayload(BaseModel):
    """GET /commits/{ref}/check-runs."""

    total_count: int = 0
    check_runs: List[CheckRunPayload] = Field(default_factory=list)


class CommitAccount(BaseModel):
    login: str
    avatar_url: Optional[str] = None


class CommitSummary(BaseModel):
    message: str = ""
    author: Optional[GitActor] = None


class CommitListItem(BaseModel):
    """Item of GET /commits?sha=..."""

    sha: str
    commit: CommitSummary
    html_url: Optional[str] = None
    author: Optional[CommitAccount] = None
