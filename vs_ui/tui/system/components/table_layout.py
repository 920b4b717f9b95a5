from __future__ import annotations

import shutil

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from vs_ui.tui.system.models import TableModel

MIN_COLUMN_WIDTH = 4


def _console_width(console: Console) -> int:
    width = console.size.width
    if width and width > 0:
        return width
    return shutil.get_terminal_size(fallback=(100, 24)).columns


def _cell_width(value: str) -> int:
    return max((len(line) for line in str(value).splitlines()), default=0)


def fit_column_widths(model: TableModel, max_width: int) -> list[int]:
    """
    Widths for each column that fit in ``max_width``.

    Starts from the longest cell per column and trims the widest column one
    character at a time until borders and padding fit.
    """
    column_count = max(1, len(model.columns))
    overhead = 4 + (column_count - 1) * 3

    desired: list[int] = []
    for idx, column in enumerate(model.columns):
        longest = _cell_width(column)
        for row in model.rows:
            if idx < len(row):
                longest = max(longest, _cell_width(row[idx]))
        desired.append(max(MIN_COLUMN_WIDTH, min(longest, max_width)))

    while desired and sum(desired) + overhead > max_width:
        widest = max(range(len(desired)), key=lambda i: desired[i])
        if desired[widest] <= MIN_COLUMN_WIDTH:
            break
        desired[widest] -= 1
    return desired


def build_rich_table(
    model: TableModel,
    *,
    console: Console,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold blue",
    title_style: str = "bold blue",
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """Build a Rich Table from a TableModel that fits the terminal width."""
    max_table_width = max(60, _console_width(console) - 2)

    title_text = Text.from_markup(str(model.title))
    title_text.no_wrap = True
    title_text.overflow = "ellipsis"
    title_max = max(10, max_table_width - 6)
    if len(title_text) > title_max:
        title_text.truncate(title_max, overflow="ellipsis")

    rich_table = Table(
        title=title_text,
        show_lines=show_lines,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=title_style,
    )

    widths = fit_column_widths(model, max_table_width)
    for idx, column in enumerate(model.columns):
        rich_table.add_column(
            column,
            overflow="ellipsis",
            no_wrap=True,
            min_width=MIN_COLUMN_WIDTH,
            max_width=widths[idx] if idx < len(widths) else None,
        )
    for row in model.rows:
        rich_table.add_row(*row)
    return rich_table
