"""
Release notes generation.
"""

from .changelog import (
    ChangeLogAuthError,
    ChangeLogConnectionError,
    ChangeLogError,
    ChangeLogGenerator,
    ChangeLogNotFoundError,
    GitHubChangeLog,
    render_change_log,
)
from .models import Commit, CommitDetail, CompareResponse, Tag, TagCommit
from .notes import generate_release_notes, plugin_url, render_release_notes

__all__ = [
    # Aggregator
    "ChangeLogGenerator",
    "GitHubChangeLog",
    "render_change_log",
    # Exceptions
    "ChangeLogError",
    "ChangeLogAuthError",
    "ChangeLogConnectionError",
    "ChangeLogNotFoundError",
    # Models
    "Commit",
    "CommitDetail",
    "CompareResponse",
    "Tag",
    "TagCommit",
    # Notes
    "generate_release_notes",
    "plugin_url",
    "render_release_notes",
]
