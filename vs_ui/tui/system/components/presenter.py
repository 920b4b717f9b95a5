from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from vs_ui.tui.core import theme
from vs_ui.tui.system.protocols import Presenter


class RichPresenter(Presenter):
    """Status lines, panels and rules on a rich console, styled by the theme."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def _line(self, level: str, message: str) -> None:
        self._console.print(theme.presenter_message(level, message))

    def info(self, message: str) -> None:
        self._line("info", message)

    def warning(self, message: str) -> None:
        self._line("warning", message)

    def error(self, message: str) -> None:
        self._line("error", message)

    def success(self, message: str) -> None:
        self._line("success", message)

    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        self._console.print(
            Panel(
                message,
                title=theme.panel_title(title) if title else None,
                border_style=border_style or theme.RICH_BORDER_STYLE,
            )
        )

    def rule(self, title: str) -> None:
        self._console.print(Rule(title, style=theme.RICH_BORDER_STYLE))
