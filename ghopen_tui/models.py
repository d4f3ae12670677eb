"""Data models for ghopen."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_BRANCH = "main"


class FailureKind(str, Enum):
    NO_GIT_DIRECTORY = "no_git_directory"
    NO_CONFIG_FILE = "no_config_file"
    NO_ORIGIN_REMOTE = "no_origin_remote"
    UNRECOGNIZED_REMOTE_FORMAT = "unrecognized_remote_format"
    NO_HEAD_FILE = "no_head_file"
    UNPARSABLE_HEAD = "unparsable_head"
    NO_ACTIVE_FILE = "no_active_file"

    @property
    def message(self) -> str:
        """Return the user-facing message for this failure."""
        messages = {
            FailureKind.NO_GIT_DIRECTORY: "No .git directory found in the working copy.",
            FailureKind.NO_CONFIG_FILE: "No .git/config file found.",
            FailureKind.NO_ORIGIN_REMOTE: 'No remote "origin" found in .git/config.',
            FailureKind.UNRECOGNIZED_REMOTE_FORMAT: "Could not determine GitHub repository URL.",
            FailureKind.NO_HEAD_FILE: "No .git/HEAD file found.",
            FailureKind.UNPARSABLE_HEAD: "Could not determine the current branch from .git/HEAD.",
            FailureKind.NO_ACTIVE_FILE: "Not found file relative path!",
        }
        return messages[self]


class ResolveError(Exception):
    """Raised when a GitHub URL cannot be derived from the working copy."""

    def __init__(self, kind: FailureKind, detail: Optional[str] = None) -> None:
        super().__init__(kind.message)
        self.kind = kind
        self.detail = detail


@dataclass
class Settings:
    default_branch: str = DEFAULT_BRANCH
    browser: Optional[str] = None  # webbrowser name, None for the platform default

    def to_dict(self) -> dict:
        return {"default_branch": self.default_branch, "browser": self.browser}

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        return cls(
            default_branch=data.get("default_branch") or DEFAULT_BRANCH,
            browser=data.get("browser") or None,
        )


@dataclass
class RepoInfo:
    """What the working copy resolves to, for display."""
    repo_url: Optional[str] = None
    branch: Optional[str] = None
    error: Optional[FailureKind] = None

    @property
    def status_icon(self) -> str:
        return "✓" if self.repo_url else "○"

    @property
    def status_color(self) -> str:
        return "green" if self.repo_url else "dim"
