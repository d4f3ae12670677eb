"""Git metadata parsing for ghopen.

Everything here reads the plain-text files under ``.git`` directly; no git
executable is involved. Nothing is cached, so every call reflects what is on
disk right now.
"""

import os
import re
from pathlib import Path
from typing import Optional, Union

from ..models import FailureKind, RepoInfo, ResolveError

# The origin block runs until the next section header.
ORIGIN_URL_PATTERN = re.compile(
    r'\[remote "origin"\][^\[]*?^[ \t]*url[ \t]*=[ \t]*(.*)$',
    re.MULTILINE,
)
HEAD_REF_PATTERN = re.compile(r"ref: refs/heads/(.+)")
HTTPS_REMOTE_PATTERN = re.compile(r"^https?://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")
SSH_REMOTE_PATTERN = re.compile(r"^git@github\.com:([^/]+)/([^/]+?)(?:\.git)?/?$")


def convert_to_github_url(remote_url: str) -> Optional[str]:
    """Convert a git remote URL to ``https://github.com/<owner>/<repo>``.

    Handles:
    - https://github.com/owner/repo(.git)
    - http://github.com/owner/repo(.git)
    - git@github.com:owner/repo(.git)

    Returns None for any other host or shape.
    """
    for pattern in (HTTPS_REMOTE_PATTERN, SSH_REMOTE_PATTERN):
        match = pattern.match(remote_url)
        if match:
            owner, repo = match.groups()
            return f"https://github.com/{owner}/{repo}"
    return None


def read_origin_url(config_text: str) -> Optional[str]:
    """Return the raw ``url`` of the origin remote in a .git/config text."""
    match = ORIGIN_URL_PATTERN.search(config_text)
    if not match:
        return None
    return match.group(1).strip() or None


def read_head_branch(head_text: str) -> Optional[str]:
    """Return the branch name from a .git/HEAD text, or None if detached."""
    match = HEAD_REF_PATTERN.match(head_text.rstrip())
    if not match:
        return None
    return match.group(1)


def resolve_repo_url(root: Path) -> str:
    """Return the GitHub web URL for the working copy at ``root``.

    Raises ResolveError when there is no .git directory, no config, no origin
    remote, or the origin is not a GitHub URL.
    """
    git_dir = Path(root) / ".git"
    if not git_dir.exists():
        raise ResolveError(FailureKind.NO_GIT_DIRECTORY, str(git_dir))

    config_path = git_dir / "config"
    if not config_path.exists():
        raise ResolveError(FailureKind.NO_CONFIG_FILE, str(config_path))

    remote_url = read_origin_url(config_path.read_text(encoding="utf-8"))
    if remote_url is None:
        raise ResolveError(FailureKind.NO_ORIGIN_REMOTE, str(config_path))

    repo_url = convert_to_github_url(remote_url)
    if repo_url is None:
        raise ResolveError(FailureKind.UNRECOGNIZED_REMOTE_FORMAT, remote_url)
    return repo_url


def resolve_current_branch(root: Path) -> str:
    """Return the branch checked out in the working copy at ``root``."""
    git_dir = Path(root) / ".git"
    if not git_dir.exists():
        raise ResolveError(FailureKind.NO_GIT_DIRECTORY, str(git_dir))

    head_path = git_dir / "HEAD"
    if not head_path.exists():
        raise ResolveError(FailureKind.NO_HEAD_FILE, str(head_path))

    head_text = head_path.read_text(encoding="utf-8")
    branch = read_head_branch(head_text)
    if branch is None:
        raise ResolveError(FailureKind.UNPARSABLE_HEAD, head_text.strip())
    return branch


def build_file_url(repo_url: str, branch: str, file_path: str) -> str:
    """Compose a blob URL. The file path is used as given, unescaped."""
    return f"{repo_url}/blob/{branch}/{file_path}"


def repo_relative_path(root: Path, path: Union[str, Path]) -> Optional[str]:
    """Return ``path`` as a forward-slash path relative to ``root``.

    Relative paths are taken relative to ``root``. Symlinks inside the working
    copy are kept as they are, not followed. Returns None for the root itself
    or anything outside it.
    """
    root = Path(root)
    path = Path(path)
    if not path.is_absolute():
        path = root / path
    path = Path(os.path.abspath(path))
    try:
        relative = path.relative_to(os.path.abspath(root))
    except ValueError:
        # root may itself be reached through a symlink
        try:
            relative = path.relative_to(root.resolve())
        except ValueError:
            return None
    if not relative.parts:
        return None
    return relative.as_posix()


def get_repo_info(root: Path) -> RepoInfo:
    """Resolve repo URL and branch for display, folding failures into ``error``."""
    info = RepoInfo()
    try:
        info.repo_url = resolve_repo_url(root)
    except ResolveError as e:
        info.error = e.kind
        return info

    try:
        info.branch = resolve_current_branch(root)
    except ResolveError as e:
        info.error = e.kind
    return info
