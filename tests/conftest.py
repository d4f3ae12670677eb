from __future__ import annotations

from pathlib import Path

import pytest

GITHUB_CONFIG = """[core]
\trepositoryformatversion = 0
\tfilemode = true
\tbare = false
[remote "origin"]
\turl = {url}
\tfetch = +refs/heads/*:refs/remotes/origin/*
[branch "main"]
\tremote = origin
\tmerge = refs/heads/main
"""


@pytest.fixture
def make_working_copy(tmp_path):
    """Build a fake working copy with hand-written .git metadata."""

    def _make(
        url: str | None = "git@github.com:octo/widgets.git",
        head: str | None = "ref: refs/heads/main\n",
        config: str | None = None,
        files: dict[str, str] | None = None,
    ) -> Path:
        root = tmp_path / "repo"
        git_dir = root / ".git"
        git_dir.mkdir(parents=True)
        if config is not None:
            (git_dir / "config").write_text(config)
        elif url is not None:
            (git_dir / "config").write_text(GITHUB_CONFIG.format(url=url))
        if head is not None:
            (git_dir / "HEAD").write_text(head)
        for name, content in (files or {}).items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make
