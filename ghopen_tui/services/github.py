"""GitHub URL composition and browser opening for ghopen."""

import logging
import webbrowser
from pathlib import Path
from typing import Optional

from ..models import DEFAULT_BRANCH, FailureKind, ResolveError
from .git import build_file_url, resolve_current_branch, resolve_repo_url

logger = logging.getLogger(__name__)


def github_url_for(
    root: Path,
    file_path: Optional[str] = None,
    open_file: bool = False,
    default_branch: str = DEFAULT_BRANCH,
) -> str:
    """Return the URL to open for the working copy at ``root``.

    With ``open_file`` the URL points at ``file_path`` on the current branch.
    A branch that cannot be resolved is replaced by ``default_branch``.
    """
    repo_url = resolve_repo_url(root)
    if not open_file:
        return repo_url

    if not file_path:
        raise ResolveError(FailureKind.NO_ACTIVE_FILE)

    try:
        branch = resolve_current_branch(root)
    except ResolveError as e:
        logger.warning("Using branch %r: %s (%s)", default_branch, e.kind.value, e.detail)
        branch = default_branch

    return build_file_url(repo_url, branch, file_path)


def open_url(url: str, browser: Optional[str] = None) -> bool:
    """Open a URL in a new browser tab.

    Returns True if a browser accepted the URL.
    """
    try:
        controller = webbrowser.get(browser) if browser else webbrowser
        return bool(controller.open(url, new=2))
    except webbrowser.Error as e:
        logger.error("Could not open %s: %s", url, e)
        return False
