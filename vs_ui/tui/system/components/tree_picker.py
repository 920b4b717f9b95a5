"""Full-screen hierarchical multi-select picker driving a SelectionEngine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from prompt_toolkit.application import Application
from prompt_toolkit.filters import has_focus
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea
from rapidfuzz import fuzz, process, utils
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from vs_core.engine import SelectionEngine
from vs_core.models import Item
from vs_ui.tui.core import theme
from vs_ui.tui.system.protocols import TreePicker

RowFragment = tuple[str, str]

FOOTER_HINT = (
    "Space=select  Right/Left/Enter=expand  x=remove  /=search  Ctrl+S=save  Esc=cancel"
)


@dataclass(frozen=True)
class TreePickerConfig:
    fuzzy_limit: int = 50
    fuzzy_score_cutoff: int = 60
    preview_badge_limit: int = 12


@dataclass(frozen=True)
class _Row:
    item: Item
    depth: int
    path: str = ""


class _SkillTreeApp:
    """
    Tree view over the engine's visible rows with a search box and preview.

    With an empty query the list honors the expansion map; with a query it
    shows fuzzy matches from the whole catalog with their breadcrumb.
    """

    def __init__(
        self,
        engine: SelectionEngine,
        *,
        title: str,
        config: TreePickerConfig | None = None,
    ) -> None:
        self.engine = engine
        self.title = title
        self._config = config or TreePickerConfig()
        self.cursor = 0
        self.rich = Console(force_terminal=True, color_system="truecolor")

        index = engine.index
        self._search_ids = index.ids
        self._search_choices = [
            f"{index.get(item_id).label} {index.display_path(item_id)}" for item_id in self._search_ids
        ]

        self.search = TextArea(height=1, prompt="Search: ", multiline=False, style="class:search")
        self.list_control = FormattedTextControl(self._list_fragments, focusable=True, show_cursor=False)
        self.preview_control = FormattedTextControl(self._preview_ansi)
        self.kb = self._bindings()

        body = HSplit(
            [
                self.search,
                Window(height=1, char="-", style="class:separator"),
                VSplit(
                    [
                        Window(self.list_control, width=Dimension(weight=3)),
                        Window(width=1, char="|", style="class:separator"),
                        Window(self.preview_control, width=Dimension(weight=2)),
                    ],
                    padding=1,
                ),
                Window(height=1, content=FormattedTextControl([("class:footer", FOOTER_HINT)])),
            ]
        )

        self.app: Application = Application(
            layout=Layout(Frame(body, title=title), focused_element=self.list_control),
            key_bindings=self.kb,
            style=Style.from_dict(dict(theme.prompt_toolkit_picker_style())),
            full_screen=True,
        )

        self.search.buffer.on_text_changed += lambda _: self._on_query_changed()

    # --- rows ------------------------------------------------------------

    @property
    def query(self) -> str:
        return self.search.text.strip()

    def rows(self) -> list[_Row]:
        if not self.query:
            return [_Row(item=row.item, depth=row.depth) for row in self.engine.visible_rows()]

        matches = process.extract(
            self.query,
            self._search_choices,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=self._config.fuzzy_limit,
            score_cutoff=self._config.fuzzy_score_cutoff,
        )
        index = self.engine.index
        rows: list[_Row] = []
        for _, _, position in matches:
            item_id = self._search_ids[position]
            rows.append(_Row(item=index.get(item_id), depth=1, path=index.display_path(item_id)))
        return rows

    def current_row(self) -> _Row | None:
        rows = self.rows()
        if not rows:
            return None
        self.cursor = max(0, min(self.cursor, len(rows) - 1))
        return rows[self.cursor]

    def _checkbox(self, item: Item) -> str:
        if self.engine.is_selected(item.id):
            return theme.CHECKBOX_ON
        if any(self.engine.is_selected(i) for i in self.engine.index.descendant_ids(item.id)):
            return theme.CHECKBOX_PARTIAL
        return theme.CHECKBOX_OFF

    # --- actions ---------------------------------------------------------

    def move(self, delta: int) -> None:
        rows = self.rows()
        if not rows:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor + delta, len(rows) - 1))

    def toggle_current(self) -> None:
        row = self.current_row()
        if row is not None:
            self.engine.toggle_selection(row.item.id)

    def remove_current(self) -> None:
        row = self.current_row()
        if row is not None:
            self.engine.remove_selection(row.item.id)

    def expand_current(self) -> None:
        row = self.current_row()
        if row is not None and not row.item.is_leaf and not self.engine.is_expanded(row.item.id):
            self.engine.toggle_expansion(row.item.id)

    def toggle_expansion_current(self) -> None:
        row = self.current_row()
        if row is not None:
            self.engine.toggle_expansion(row.item.id)

    def collapse_current(self) -> None:
        """Collapse an open branch, otherwise jump to the parent row."""
        row = self.current_row()
        if row is None:
            return
        if self.engine.is_expanded(row.item.id):
            self.engine.toggle_expansion(row.item.id)
            return
        parent = self.engine.index.parent(row.item.id)
        if parent is None:
            return
        for position, candidate in enumerate(self.rows()):
            if candidate.item.id == parent.id:
                self.cursor = position
                break

    # --- rendering -------------------------------------------------------

    def _list_fragments(self) -> list[RowFragment]:
        rows = self.rows()
        if not rows:
            return [("class:path", "  No matching skills\n")]
        fragments: list[RowFragment] = []
        for position, row in enumerate(rows):
            item = row.item
            checkbox = self._checkbox(item)
            if position == self.cursor:
                style = "class:selected"
            elif checkbox == theme.CHECKBOX_ON:
                style = "class:checked"
            elif checkbox == theme.CHECKBOX_PARTIAL:
                style = "class:partial"
            else:
                style = ""
            if item.is_leaf:
                branch = " "
            else:
                branch = theme.BRANCH_OPEN if self.engine.is_expanded(item.id) else theme.BRANCH_CLOSED
            indent = "  " * (row.depth - 1)
            fragments.append((style, f" {indent}{branch} {checkbox} {item.label}"))
            if row.path:
                fragments.append(("class:path", f"  {row.path}"))
            fragments.append(("", "\n"))
        return fragments

    def _preview_panel(self, row: _Row | None) -> Panel:
        engine = self.engine
        text = Text()
        if row is not None:
            item = row.item
            text.append("Path\n", style="bold")
            text.append(f"  {engine.resolve_display_path(item.id)}\n")
            text.append(f"  id: {item.id}\n")
            if not item.is_leaf:
                text.append(f"  {len(item.child_nodes())} options\n")
            text.append("\n")

        badges = engine.badges()
        text.append(f"Selected ({len(badges)})\n", style="bold")
        limit = self._config.preview_badge_limit
        for badge in badges[:limit]:
            text.append(f"  {badge.label}", style="reverse")
            text.append(f"  {badge.path}\n", style=theme.RICH_PATH_STYLE)
        if len(badges) > limit:
            text.append(f"  … {len(badges) - limit} more\n", style=theme.RICH_PATH_STYLE)
        if not badges:
            text.append("  nothing yet\n", style=theme.RICH_PATH_STYLE)

        stale = engine.stale_ids
        if stale:
            text.append(f"\n{len(stale)} saved ids are no longer in the catalog\n", style="yellow")
        return Panel(text, title="Preview", border_style="cyan", padding=(0, 1))

    def _preview_ansi(self) -> ANSI:
        with self.rich.capture() as cap:
            self.rich.print(self._preview_panel(self.current_row()))
        return ANSI(cap.get())

    # --- wiring ----------------------------------------------------------

    def _on_query_changed(self) -> None:
        self.cursor = 0
        self.app.invalidate()

    def _exit(self, result: Any) -> None:
        if self.app.is_done:
            return
        self.app.exit(result=result)

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()
        searching = has_focus(self.search)
        browsing = ~searching

        @kb.add("down")
        def _(event: Any) -> None:
            self.move(1)
            event.app.invalidate()

        @kb.add("up")
        def _(event: Any) -> None:
            self.move(-1)
            event.app.invalidate()

        @kb.add("space", filter=browsing)
        def _(event: Any) -> None:
            self.toggle_current()
            event.app.invalidate()

        @kb.add("right", filter=browsing)
        def _(event: Any) -> None:
            self.expand_current()
            event.app.invalidate()

        @kb.add("left", filter=browsing)
        def _(event: Any) -> None:
            self.collapse_current()
            event.app.invalidate()

        @kb.add("enter", filter=browsing)
        def _(event: Any) -> None:
            self.toggle_expansion_current()
            event.app.invalidate()

        @kb.add("enter", filter=searching)
        def _(event: Any) -> None:
            event.app.layout.focus(self.list_control)

        @kb.add("x", filter=browsing)
        @kb.add("delete", filter=browsing)
        def _(event: Any) -> None:
            self.remove_current()
            event.app.invalidate()

        @kb.add("/", filter=browsing)
        def _(event: Any) -> None:
            event.app.layout.focus(self.search)

        @kb.add("escape", filter=searching)
        def _(event: Any) -> None:
            self.search.text = ""
            event.app.layout.focus(self.list_control)

        @kb.add("c-s")
        def _(event: Any) -> None:
            self._exit(self.engine.selected_ids)

        @kb.add("escape", filter=browsing)
        @kb.add("c-c")
        def _(event: Any) -> None:
            self._exit(None)

        return kb

    def run(self) -> list[str] | None:
        return self.app.run()


class PowerTreePicker(TreePicker):
    def __init__(self, config: TreePickerConfig | None = None) -> None:
        self._config = config

    def pick(self, engine: SelectionEngine, *, title: str) -> list[str] | None:
        return _SkillTreeApp(engine, title=title, config=self._config).run()
