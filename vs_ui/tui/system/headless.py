from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import ContextManager

from vs_common.errors import SelectionValidationError
from vs_core.engine import SelectionEngine
from vs_ui.tui.system.models import TableModel
from vs_ui.tui.system.protocols import UI, Form, Presenter, Progress, TablePresenter, TreePicker

TREE_ACTIONS = ("toggle", "expand", "remove")


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class HeadlessUI(UI):
    """
    Non-interactive UI for CI and tests.

    The tree picker replays ``next_tree_actions`` (``"toggle:<id>"``,
    ``"expand:<id>"``, ``"remove:<id>"``) against the engine and then saves,
    unless ``next_tree_cancel`` is set.
    """

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)

    next_tree_actions: list[str] = field(default_factory=list)
    next_tree_cancel: bool = False
    next_form_response: str = "default"
    next_confirm_response: bool = True

    def __post_init__(self):
        self.tree_picker = _HeadlessTreePicker(self)
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.form = _HeadlessForm(self)
        self.progress = _HeadlessProgress(self)


def apply_tree_action(engine: SelectionEngine, action: str) -> None:
    verb, sep, item_id = action.partition(":")
    if not sep or verb not in TREE_ACTIONS:
        raise SelectionValidationError(
            f"Unsupported picker action '{action}'; expected '<verb>:<id>'",
            context={"action": action, "verbs": TREE_ACTIONS},
        )
    if verb == "toggle":
        engine.toggle_selection(item_id)
    elif verb == "expand":
        engine.toggle_expansion(item_id)
    else:
        engine.remove_selection(item_id)


class _HeadlessTreePicker(TreePicker):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def pick(self, engine: SelectionEngine, *, title: str) -> list[str] | None:
        self._ui.recorded_messages.append(f"PICKER: {title}")
        for action in self._ui.next_tree_actions:
            apply_tree_action(engine, action)
        if self._ui.next_tree_cancel:
            return None
        return engine.selected_ids


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def _record(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level}: {message}")

    def info(self, message: str) -> None:
        self._record("INFO", message)

    def warning(self, message: str) -> None:
        self._record("WARNING", message)

    def error(self, message: str) -> None:
        self._record("ERROR", message)

    def success(self, message: str) -> None:
        self._record("SUCCESS", message)

    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        self._record("PANEL", f"{title} - {message}")

    def rule(self, title: str) -> None:
        self._record("RULE", title)


class _HeadlessForm(Form):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def ask(self, prompt: str, default: str | None = None) -> str:
        return self._ui.next_form_response

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return self._ui.next_confirm_response


class _HeadlessProgress(Progress):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def status(self, message: str) -> ContextManager[None]:
        self._ui.recorded_messages.append(f"STATUS: {message}")
        return nullcontext()
