"""
Pydantic models for the GitHub REST API responses used by the changelog.
"""

from pydantic import BaseModel, Field


class TagCommit(BaseModel):
    """Commit a tag points at."""

    sha: str


class Tag(BaseModel):
    """Repository tag."""

    name: str
    commit: TagCommit


class CommitDetail(BaseModel):
    """Git data of a commit."""

    message: str


class Commit(BaseModel):
    """Repository commit."""

    sha: str
    commit: CommitDetail
    html_url: str | None = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        lines = self.commit.message.strip().splitlines()
        return lines[0].strip() if lines else ""


class CompareResponse(BaseModel):
    """Result of comparing two refs."""

    status: str = ""
    total_commits: int = 0
    commits: list[Commit] = Field(default_factory=list)
