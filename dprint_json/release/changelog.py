"""
Changelog aggregation over the GitHub REST API.

The release notes only depend on the :class:`ChangeLogGenerator` protocol,
so rendering can be exercised with a fake that returns canned text.
"""

import logging
import re
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from .models import Commit, CompareResponse, Tag

logger = logging.getLogger(__name__)

_CONVENTIONAL_PREFIX = re.compile(r"^(?P<kind>[A-Za-z]+)(\([^)]*\))?!?:")
# Release commits in this repository are just the version number
_RELEASE_COMMIT = re.compile(r"^v?\d+\.\d+\.\d+$")
_VERSION_TAG = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")
_PAGE_SIZE = 100


def _version_key(name: str) -> tuple[int, int, int] | None:
    """Parse a release tag name into a sortable version, or None for other tags."""
    match = _VERSION_TAG.match(name)
    if not match:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


class ChangeLogGenerator(Protocol):
    """Anything that can produce the change history for a version."""

    def generate_change_log(self, version_to: str) -> str: ...


class ChangeLogError(Exception):
    """Base exception for changelog aggregation errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ChangeLogConnectionError(ChangeLogError):
    """Connection error."""

    pass


class ChangeLogAuthError(ChangeLogError):
    """Authentication or rate limit error."""

    pass


class ChangeLogNotFoundError(ChangeLogError):
    """Repository or ref not found."""

    pass


def render_change_log(commits: list[Commit]) -> str:
    """
    Group commits into Markdown sections.

    ``feat`` commits go under Features, ``fix`` commits under Fixes and
    everything else under Other. Bare version commits are skipped.
    """
    sections: dict[str, list[str]] = {"Features": [], "Fixes": [], "Other": []}

    for commit in commits:
        summary = commit.summary
        if not summary or _RELEASE_COMMIT.match(summary):
            continue
        match = _CONVENTIONAL_PREFIX.match(summary)
        kind = match.group("kind").lower() if match else ""
        if kind == "feat":
            section = "Features"
        elif kind == "fix":
            section = "Fixes"
        else:
            section = "Other"
        sections[section].append(f"* {summary} ({commit.short_sha})")

    blocks = [f"### {title}\n\n" + "\n".join(lines) for title, lines in sections.items() if lines]
    return "\n\n".join(blocks)


class GitHubChangeLog:
    """
    Builds the change history of a release from GitHub tags and commits.

    Release tags are ordered by version, not by API order, and non-version
    tags are ignored. When the target version is tagged, commits run from the
    next lower version tag up to the target tag. Otherwise they run from the
    highest version tag up to the configured branch.
    """

    def __init__(
        self,
        repo: str,
        token: str = "",
        api_url: str = "https://api.github.com",
        branch: str = "main",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the changelog client.

        Args:
            repo: Repository as owner/name
            token: Optional API token (raises the rate limit)
            api_url: GitHub REST API base URL
            branch: Head used when the target version is not tagged
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls) -> "GitHubChangeLog":
        """Create a client from the global settings."""
        from dprint_json.config import get_settings

        github = get_settings().github
        return cls(
            repo=github.repo,
            token=github.token,
            api_url=github.api_url,
            branch=github.branch,
            timeout=github.timeout,
        )

    def _request(self, endpoint: str, params: dict | None = None) -> Any:
        """
        Make a GET request against the repository API.

        Raises:
            ChangeLogError: On API errors
        """
        url = f"/repos/{self.repo}{endpoint}"
        logger.debug("GitHub API request: GET %s params=%s", url, params)

        try:
            response = self._client.get(url, params=params)
        except httpx.ConnectError as e:
            logger.debug("GitHub connection error: %s", e)
            raise ChangeLogConnectionError(f"Failed to connect to {self.api_url}: {e}") from e
        except httpx.TimeoutException as e:
            logger.debug("GitHub timeout: %s", e)
            raise ChangeLogConnectionError(f"Request timed out: {e}") from e

        if response.status_code in (401, 403):
            raise ChangeLogAuthError(
                f"GitHub refused the request ({response.status_code}). "
                "Check GITHUB_TOKEN or wait for the rate limit to reset.",
                status_code=response.status_code,
            )
        if response.status_code == 404:
            raise ChangeLogNotFoundError(f"Not found: {url}", status_code=404)
        if response.status_code >= 400:
            raise ChangeLogError(f"GitHub API error: {response.status_code}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ChangeLogError(
                f"GitHub returned invalid JSON for {url}", status_code=response.status_code
            ) from e

    def get_tags(self) -> list[Tag]:
        """Get all repository tags in API order (every page)."""
        tags: list[Tag] = []
        page = 1
        while True:
            data = self._request("/tags", params={"per_page": _PAGE_SIZE, "page": page})
            try:
                tags.extend(Tag.model_validate(item) for item in data)
            except (ValidationError, TypeError) as e:
                raise ChangeLogError(f"Unexpected tags response: {e}") from e
            if len(data) < _PAGE_SIZE:
                return tags
            page += 1

    def get_version_tags(self) -> list[str]:
        """Get names of ``X.Y.Z`` / ``vX.Y.Z`` tags, highest version first."""
        versioned = [(key, tag.name) for tag in self.get_tags() if (key := _version_key(tag.name)) is not None]
        versioned.sort(key=lambda item: item[0], reverse=True)
        return [name for _, name in versioned]

    def get_commits(self, base: str | None, head: str) -> list[Commit]:
        """Get the commits after ``base`` up to ``head`` (all of ``head`` when base is None)."""
        try:
            if base is None:
                data = self._request("/commits", params={"sha": head, "per_page": 100})
                return [Commit.model_validate(item) for item in data]
            data = self._request(f"/compare/{base}...{head}")
            return CompareResponse.model_validate(data).commits
        except (ValidationError, TypeError) as e:
            raise ChangeLogError(f"Unexpected commits response: {e}") from e

    def generate_change_log(self, version_to: str) -> str:
        """Generate the Markdown change history for ``version_to``."""
        target_names = {version_to, f"v{version_to}"}
        names = self.get_version_tags()

        target_index = next((i for i, name in enumerate(names) if name in target_names), None)
        if target_index is None:
            head = self.branch
            base = names[0] if names else None
        else:
            head = names[target_index]
            base = names[target_index + 1] if target_index + 1 < len(names) else None
        logger.debug("Changelog for %s: %s...%s", version_to, base, head)

        commits = self.get_commits(base, head)
        logger.debug("Collected %d commits for %s", len(commits), version_to)
        return render_change_log(commits)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GitHubChangeLog":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
