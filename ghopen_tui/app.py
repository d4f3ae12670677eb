"""Main Textual application for ghopen."""

from pathlib import Path
from typing import Iterable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import (
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
)

from .models import ResolveError, Settings
from .services.git import get_repo_info, repo_relative_path
from .services.github import github_url_for, open_url
from .services.settings import SETTINGS_PATH, load_settings, save_settings

EXCLUDED_NAMES = {".git", ".DS_Store"}


class WorkingCopyTree(DirectoryTree):
    """Directory tree of the working copy without git internals."""

    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [path for path in paths if path.name not in EXCLUDED_NAMES]


class FileMenuScreen(ModalScreen[str | None]):
    """Modal menu of GitHub actions for the highlighted file."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("q", "cancel", "Cancel"),
    ]

    CSS = """
    FileMenuScreen {
        align: center middle;
    }
    FileMenuScreen > Container {
        width: 50%;
        height: auto;
        border: solid $primary;
        background: $surface;
        padding: 1 2;
    }
    FileMenuScreen .title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }
    FileMenuScreen ListView {
        height: auto;
    }
    """

    def __init__(self, file_path: str | None) -> None:
        super().__init__()
        self.file_path = file_path

    def compose(self) -> ComposeResult:
        with Container():
            yield Label(self.file_path or "No file selected", classes="title")
            yield ListView(
                ListItem(Label("Open in GitHub"), id="open_file"),
                ListItem(Label("Open repository in GitHub"), id="open_repo"),
                ListItem(Label("Copy GitHub URL"), id="copy_url"),
                id="menu-list",
            )

    def on_mount(self) -> None:
        self.query_one("#menu-list", ListView).focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        self.dismiss(event.item.id)

    def action_cancel(self) -> None:
        self.dismiss(None)


class BranchInputScreen(ModalScreen[str | None]):
    """Modal for editing the fallback branch."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    BranchInputScreen {
        align: center middle;
    }
    BranchInputScreen > Container {
        width: 60%;
        height: auto;
        border: solid $primary;
        background: $surface;
        padding: 1 2;
    }
    BranchInputScreen .title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }
    BranchInputScreen .hint {
        color: $text-muted;
        padding-bottom: 1;
    }
    """

    def __init__(self, initial: str) -> None:
        super().__init__()
        self.initial = initial

    def compose(self) -> ComposeResult:
        with Container():
            yield Label("Default Branch", classes="title")
            yield Label("Used when the current branch cannot be read from .git/HEAD", classes="hint")
            yield Input(value=self.initial, id="branch-input")

    def on_mount(self) -> None:
        self.query_one("#branch-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip() or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class StatusScreen(ModalScreen):
    """Modal screen showing what the working copy resolves to."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close"),
    ]

    CSS = """
    StatusScreen {
        align: center middle;
    }
    StatusScreen > Container {
        width: 80%;
        height: auto;
        border: solid $primary;
        background: $surface;
        padding: 1 2;
    }
    StatusScreen .title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }
    """

    def __init__(self, root: Path, settings: Settings) -> None:
        super().__init__()
        self.root = root
        self.settings = settings

    def compose(self) -> ComposeResult:
        with Container():
            yield Label(f"Status: {self.root.name}", classes="title")
            yield Static(id="status-content")

    def on_mount(self) -> None:
        content = self.query_one("#status-content", Static)
        lines = ["[bold cyan]Working Copy[/]", f"  Root: {self.root}"]

        try:
            info = get_repo_info(self.root)
        except Exception as e:
            self.log.error(f"Failed to read git metadata: {e!r}")
            lines.append("  [red]Failed to read git metadata[/]")
            content.update("\n".join(lines))
            return

        lines.append("")
        lines.append("[bold cyan]GitHub[/]")
        lines.append(f"  Repository: {info.repo_url or '-'}")
        lines.append(f"  Branch: {info.branch or '-'}")
        lines.append(f"  Default branch: {self.settings.default_branch}")
        if info.error is not None:
            lines.append("")
            lines.append(f"  [yellow]{info.error.message}[/]")

        content.update("\n".join(lines))

    def action_close(self) -> None:
        self.dismiss()


class GhOpenApp(App):
    """Browse a working copy and open it on GitHub."""

    CSS = """
    Screen {
        background: $surface;
    }
    #main-container {
        height: 100%;
    }
    #file-tree {
        height: 1fr;
    }
    #repo-status {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("g", "open_repo", "Open Repo"),
        Binding("o", "open_file", "Open File"),
        Binding("m", "file_menu", "Menu"),
        Binding("s", "open_status", "Status"),
        Binding("b", "edit_branch", "Default Branch"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        root: Path,
        settings: Settings | None = None,
        settings_path: Path = SETTINGS_PATH,
    ) -> None:
        super().__init__()
        self.root = Path(root)
        self.settings_path = settings_path
        self.settings = settings if settings is not None else load_settings(settings_path)
        self.title = "ghopen"
        self.sub_title = str(self.root)

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield WorkingCopyTree(self.root, id="file-tree")
            yield Static(id="repo-status")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#file-tree", WorkingCopyTree).focus()
        self._refresh_status()

    def _refresh_status(self) -> None:
        status = self.query_one("#repo-status", Static)
        try:
            info = get_repo_info(self.root)
        except Exception as e:
            self.log.error(f"Failed to read git metadata: {e!r}")
            status.update("[red]Failed to read git metadata[/]")
            return

        if info.repo_url:
            branch = info.branch or f"{self.settings.default_branch} (default)"
            status.update(f"[{info.status_color}]{info.status_icon}[/] {info.repo_url} @ {branch}")
        else:
            message = info.error.message if info.error else "Not a GitHub repository"
            status.update(f"[{info.status_color}]{info.status_icon}[/] {message}")

    def _get_active_file(self) -> str | None:
        """Return the highlighted file relative to the root, if it is a file."""
        tree = self.query_one("#file-tree", WorkingCopyTree)
        node = tree.cursor_node
        if node is None or node.data is None:
            return None
        path = node.data.path
        if not path.is_file():
            return None
        return repo_relative_path(self.root, path)

    def _resolve_url(self, open_file: bool) -> str | None:
        """Resolve the target URL, reporting any failure as a single notice."""
        try:
            return github_url_for(
                self.root,
                self._get_active_file() if open_file else None,
                open_file=open_file,
                default_branch=self.settings.default_branch,
            )
        except ResolveError as e:
            self.notify(str(e), severity="error")
        except Exception as e:
            self.notify("Failed to open GitHub repository.", severity="error")
            self.log.error(f"Failed to open GitHub repository: {e!r}")
        return None

    def _open_github(self, open_file: bool) -> None:
        url = self._resolve_url(open_file)
        if url is None:
            return
        try:
            opened = open_url(url, self.settings.browser)
        except Exception as e:
            self.notify("Failed to open GitHub repository.", severity="error")
            self.log.error(f"Failed to open {url}: {e!r}")
            return
        if not opened:
            self.notify("Failed to open browser", severity="error")

    def action_open_repo(self) -> None:
        self._open_github(open_file=False)

    def action_open_file(self) -> None:
        self._open_github(open_file=True)

    def action_copy_url(self) -> None:
        url = self._resolve_url(open_file=self._get_active_file() is not None)
        if url:
            self.copy_to_clipboard(url)
            self.notify(f"Copied {url}")

    def action_file_menu(self) -> None:
        self.push_screen(FileMenuScreen(self._get_active_file()), callback=self._on_menu_choice)

    def _on_menu_choice(self, choice: str | None) -> None:
        if choice == "open_file":
            self.action_open_file()
        elif choice == "open_repo":
            self.action_open_repo()
        elif choice == "copy_url":
            self.action_copy_url()

    def action_open_status(self) -> None:
        self.push_screen(StatusScreen(self.root, self.settings))

    def action_edit_branch(self) -> None:
        self.push_screen(
            BranchInputScreen(self.settings.default_branch),
            callback=self._on_branch_edited,
        )

    def _on_branch_edited(self, branch: str | None) -> None:
        if not branch:
            return
        self.settings.default_branch = branch
        if save_settings(self.settings, self.settings_path):
            self.notify(f"Default branch set to {branch}")
        else:
            self.notify("Failed to save settings", severity="error")
        self._refresh_status()

    async def action_refresh(self) -> None:
        self._refresh_status()
        await self.query_one("#file-tree", WorkingCopyTree).reload()
