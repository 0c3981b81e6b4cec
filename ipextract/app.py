"""
Textual TUI for ipextract — browse interfaces by class.

Left pane:  tree grouped Wireless / Wired / Other, one node per interface
Right pane: the selected interface, all five fields
Press r to re-run the listing command; nothing is cached between runs.

    InterfaceBrowserApp()                          # runs ifconfig
    InterfaceBrowserApp(source=file_source(path))  # saved output
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import RichLog, Static, Tree
from textual.widgets.tree import TreeNode

from .collector import CommandUnavailable, TextSource
from .lookup import SelectorConfig, classify, enumerate_all
from .models import InterfaceClass, InterfaceRecord

CSS_PATH = Path(__file__).parent / "theme.tcss"

# Class → (color, icon, group label)
CLASS_STYLE: dict[InterfaceClass, tuple[str, str, str]] = {
    InterfaceClass.WIRELESS: ("#00d4ff", "≋", "Wireless"),
    InterfaceClass.WIRED:    ("#00ff88", "⇌", "Wired"),
    InterfaceClass.OTHER:    ("#888888", "•", "Other"),
}


class TitleBar(Static):
    pass

class StatusBar(Static):
    pass


class InterfaceBrowserApp(App):
    """ipextract TUI — interfaces grouped by class."""

    CSS_PATH = CSS_PATH
    TITLE = "ipextract"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        source: Optional[TextSource] = None,
        config: Optional[SelectorConfig] = None,
    ):
        super().__init__()
        self._source = source
        self._config = config or SelectorConfig()
        self.records: list[InterfaceRecord] = []
        self._group_nodes: dict[InterfaceClass, TreeNode] = {}
        self._loaded_at: Optional[datetime] = None
        self._error: Optional[str] = None
        self._loading = False

    def compose(self) -> ComposeResult:
        origin = "saved output" if self._source else "ifconfig"
        yield TitleBar(f"  ⌁ ipextract: interfaces from {origin}", id="title-bar")
        with Horizontal(id="main-split"):
            with Vertical(id="tree-pane"):
                tree: Tree[InterfaceRecord | None] = Tree("interfaces", id="iface-tree")
                tree.show_root = True
                tree.root.expand()
                tree.guide_depth = 3
                yield tree
            with Vertical(id="detail-pane"):
                yield RichLog(id="detail-view", highlight=True, markup=True,
                              wrap=True, auto_scroll=False)
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        self.action_refresh()

    # ── Enumeration ─────────────────────────────────────────────────────

    async def _load_interfaces(self) -> None:
        """enumerate_all() blocks on the subprocess, so run it off the loop."""
        self._loading = True
        self._update_status()
        try:
            records = await asyncio.to_thread(
                enumerate_all, self._source, self._config,
            )
        except CommandUnavailable as e:
            self._error = str(e)
            self.records = []
            self._rebuild_tree()
            self.query_one("#detail-view", RichLog).write(
                Text.from_markup(f"[#ff4444]{e}[/]")
            )
        else:
            self._error = None
            self.records = records
            self._rebuild_tree()
        finally:
            self._loading = False
            self._loaded_at = datetime.now()
            self._update_status()

    # ── Tree management ─────────────────────────────────────────────────

    def _rebuild_tree(self) -> None:
        tree = self.query_one("#iface-tree", Tree)
        tree.clear()
        self._group_nodes = {}
        for cls, (color, _, label) in CLASS_STYLE.items():
            node = tree.root.add(Text(label, style=f"bold {color}"), expand=True)
            self._group_nodes[cls] = node

        for record in self.records:
            cls = classify(record, self._config)
            color, icon, _ = CLASS_STYLE[cls]
            label = Text()
            label.append(f"{icon} ", style=color)
            label.append(record.name, style="bold " + color)
            if record.inet:
                label.append(f"  {record.inet}", style="#888888")
            self._group_nodes[cls].add_leaf(label, data=record)
        tree.root.expand()

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        record = event.node.data
        if isinstance(record, InterfaceRecord):
            self._show_record(record)

    # ── Detail pane ─────────────────────────────────────────────────────

    def _show_record(self, record: InterfaceRecord) -> None:
        log = self.query_one("#detail-view", RichLog)
        log.clear()
        cls = classify(record, self._config)
        color, icon, label = CLASS_STYLE[cls]
        log.write(Text.from_markup(f"[bold {color}]{icon} {record.name}[/]  [#555555]{label}[/]"))
        for line in str(record).splitlines():
            key, _, value = line.partition(": ")
            shown = value if value else "[#555555]—[/]"
            log.write(Text.from_markup(f"  [#888888]{key:<10}[/] {shown}"))

    # ── Status bar ──────────────────────────────────────────────────────

    def _update_status(self) -> None:
        bar = self.query_one("#status-bar", StatusBar)
        if self._loading:
            bar.update(Text.from_markup("  [#00d4ff]⟳[/] enumerating │ q:quit"))
            return
        if self._error:
            bar.update(Text.from_markup(
                f"  [#ff4444]✗ {self._error}[/] │ r:retry │ q:quit"
            ))
            return
        counts = {cls: 0 for cls in CLASS_STYLE}
        for record in self.records:
            counts[classify(record, self._config)] += 1
        ts = self._loaded_at.strftime("%H:%M:%S") if self._loaded_at else "--:--:--"
        bar.update(Text.from_markup(
            f"  [#00ff88]✓[/] {len(self.records)} interfaces │ "
            f"{counts[InterfaceClass.WIRELESS]} wireless │ "
            f"{counts[InterfaceClass.WIRED]} wired │ "
            f"{counts[InterfaceClass.OTHER]} other │ "
            f"{ts} │ r:refresh  q:quit"
        ))

    # ── Key bindings ────────────────────────────────────────────────────

    def action_refresh(self) -> None:
        self.run_worker(self._load_interfaces(), exclusive=True, group="enumerate")

    def action_quit(self) -> None:
        self.exit()


def main():
    import argparse

    from .collector import file_source
    from .diagnostics import setup_logging

    parser = argparse.ArgumentParser(description="ipextract TUI")
    parser.add_argument("--file", default=None,
                        help="Browse saved ifconfig output instead of running it")
    parser.add_argument("--command", default=None,
                        help="Command line to run instead of the platform default")
    parser.add_argument("--log", default=None,
                        help="Write debug log to file")
    args = parser.parse_args()

    # stderr would corrupt the TUI; file only
    setup_logging(log_file=args.log)

    source = file_source(args.file) if args.file else None
    app = InterfaceBrowserApp(
        source=source,
        config=SelectorConfig(command=args.command, log_file=args.log),
    )
    app.run()


if __name__ == "__main__":
    main()
