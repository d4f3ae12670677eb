from __future__ import annotations

import pytest

from ghopen_tui.__main__ import build_parser, main
from ghopen_tui.models import Settings
from ghopen_tui.services.settings import save_settings


def test_print_repo_url(make_working_copy, tmp_path, capsys):
    root = make_working_copy(url="https://github.com/octo/widgets.git")

    exit_code = main([str(root), "--print", "--settings", str(tmp_path / "settings.json")])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "https://github.com/octo/widgets"


def test_print_file_url(make_working_copy, tmp_path, capsys):
    root = make_working_copy(head="ref: refs/heads/feature/login\n", files={"src/index.ts": ""})

    exit_code = main([
        str(root),
        "--print",
        "--file",
        str(root / "src" / "index.ts"),
        "--settings",
        str(tmp_path / "settings.json"),
    ])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "https://github.com/octo/widgets/blob/feature/login/src/index.ts"


def test_default_branch_from_settings_and_flag(make_working_copy, tmp_path, capsys):
    root = make_working_copy(head="9fceb02d0ae598e95dc970b74767f19372d61af8\n")
    settings_path = tmp_path / "settings.json"
    save_settings(Settings(default_branch="trunk"), settings_path)

    assert main([str(root), "--print", "--file", "README.md", "--settings", str(settings_path)]) == 0
    assert capsys.readouterr().out.strip() == "https://github.com/octo/widgets/blob/trunk/README.md"

    assert main([
        str(root), "--print", "--file", "README.md",
        "--settings", str(settings_path), "--default-branch", "develop",
    ]) == 0
    assert capsys.readouterr().out.strip() == "https://github.com/octo/widgets/blob/develop/README.md"


def test_failure_goes_to_stderr(tmp_path, capsys):
    exit_code = main([str(tmp_path), "--print", "--settings", str(tmp_path / "settings.json")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert captured.err.strip() == "No .git directory found in the working copy."


def test_file_outside_root_is_not_an_active_file(make_working_copy, tmp_path, capsys):
    root = make_working_copy()

    exit_code = main([
        str(root), "--print", "--file", str(tmp_path / "elsewhere.txt"),
        "--settings", str(tmp_path / "settings.json"),
    ])

    assert exit_code == 1
    assert capsys.readouterr().err.strip() == "Not found file relative path!"


def test_open_calls_browser(make_working_copy, tmp_path, monkeypatch):
    root = make_working_copy()
    opened = []
    monkeypatch.setattr("ghopen_tui.__main__.open_url", lambda url, browser=None: opened.append(url) or True)

    exit_code = main([str(root), "--open", "--settings", str(tmp_path / "settings.json")])

    assert exit_code == 0
    assert opened == ["https://github.com/octo/widgets"]


def test_open_and_print_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--open", "--print"])


def test_unexpected_error_prints_generic_message(make_working_copy, tmp_path, monkeypatch, capsys):
    root = make_working_copy()

    def _boom(*args, **kwargs):
        raise PermissionError("denied: /secret/.git/config")

    monkeypatch.setattr("ghopen_tui.__main__.github_url_for", _boom)

    exit_code = main([str(root), "--print", "--settings", str(tmp_path / "settings.json")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.err.strip() == "Failed to open GitHub repository."
    assert "secret" not in captured.err


def test_unreadable_settings_do_not_stop_the_cli(make_working_copy, tmp_path, capsys):
    root = make_working_copy()
    settings_path = tmp_path / "settings.json"
    settings_path.write_bytes(b"\xff\xfe")

    assert main([str(root), "--print", "--settings", str(settings_path)]) == 0
    assert capsys.readouterr().out.strip() == "https://github.com/octo/widgets"
