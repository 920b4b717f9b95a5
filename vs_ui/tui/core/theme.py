from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT
RICH_PATH_STYLE = "dim"

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

CHECKBOX_ON = "[x]"
CHECKBOX_OFF = "[ ]"
CHECKBOX_PARTIAL = "[-]"
BRANCH_OPEN = "▾"
BRANCH_CLOSED = "▸"


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def prompt_toolkit_picker_style() -> Mapping[str, str]:
    return {
        "header": "bold",
        "selected": "bg:#0000aa fg:white bold",
        "checked": "fg:#00ff00 bold",
        "partial": "fg:#aaaa00",
        "separator": "fg:#0000aa",
        "frame.border": "fg:#0000aa",
        "frame.label": "fg:#0000aa bold",
        "search": "bg:#eeeeee fg:#000000",
        "path": "fg:#888888",
        "footer": "fg:#888888 italic",
    }
