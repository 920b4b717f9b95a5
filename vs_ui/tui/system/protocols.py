from typing import ContextManager, Protocol

from vs_core.engine import SelectionEngine
from vs_ui.tui.system.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class TreePicker(Protocol):
    def pick(self, engine: SelectionEngine, *, title: str) -> list[str] | None:
        """Drive ``engine`` interactively; return the saved ids or None when cancelled."""
        ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None: ...
    def rule(self, title: str) -> None: ...


class Form(Protocol):
    def ask(self, prompt: str, default: str | None = None) -> str: ...
    def confirm(self, prompt: str, default: bool = True) -> bool: ...


class Progress(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


class UI(Protocol):
    tree_picker: TreePicker
    tables: TablePresenter
    present: Presenter
    form: Form
    progress: Progress
