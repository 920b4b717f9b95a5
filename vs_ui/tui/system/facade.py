from rich.console import Console

from vs_ui.tui.system.components.form import RichForm
from vs_ui.tui.system.components.presenter import RichPresenter
from vs_ui.tui.system.components.progress import RichProgress
from vs_ui.tui.system.components.table import RichTablePresenter
from vs_ui.tui.system.components.tree_picker import PowerTreePicker
from vs_ui.tui.system.protocols import UI, Form, Presenter, Progress, TablePresenter, TreePicker


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self.tree_picker: TreePicker = PowerTreePicker()
        self.tables: TablePresenter = RichTablePresenter(self._console)
        self.present: Presenter = RichPresenter(self._console)
        self.form: Form = RichForm(self._console)
        self.progress: Progress = RichProgress(self._console)
