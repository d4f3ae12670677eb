"""Services for ghopen."""

from .git import (
    build_file_url,
    convert_to_github_url,
    get_repo_info,
    repo_relative_path,
    resolve_current_branch,
    resolve_repo_url,
)
from .github import github_url_for, open_url
from .settings import load_settings, save_settings

__all__ = [
    "build_file_url",
    "convert_to_github_url",
    "get_repo_info",
    "repo_relative_path",
    "resolve_current_branch",
    "resolve_repo_url",
    "github_url_for",
    "open_url",
    "load_settings",
    "save_settings",
]
