import logging
from collections import defaultdict
from pathlib import Path

import pytest
from rich.console import Console
from rich.table import Table

from vs_core.models import Item

KNOWN_MARKERS = {"unit_common", "unit_core", "unit_app", "unit_ui"}


@pytest.fixture
def dev_tree() -> list[Item]:
    """Development > Frontend (React, Vue) / Backend (Node)."""
    return [
        Item.model_validate(
            {
                "id": "dev",
                "label": "Development",
                "children": [
                    {
                        "id": "frontend",
                        "label": "Frontend",
                        "subChildren": [
                            {"id": "react", "label": "React"},
                            {"id": "vue", "label": "Vue"},
                        ],
                    },
                    {
                        "id": "backend",
                        "label": "Backend",
                        "subChildren": [{"id": "node", "label": "Node"}],
                    },
                ],
            }
        ),
        Item.model_validate(
            {
                "id": "design",
                "label": "Design",
                "children": [{"id": "ux", "label": "UX"}, {"id": "ui", "label": "UI"}],
            }
        ),
    ]


@pytest.fixture
def restore_root_logger():
    """Undo handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "vs-data"


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print pass/fail counts per marker at the end of the session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0})

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        if stats["total"] > 0:
            table.add_row(
                marker,
                str(stats["total"]),
                str(stats["passed"]),
                str(stats["failed"]),
                str(stats["skipped"]),
                f"{stats['duration']:.2f}",
            )

    console = Console()
    console.print("\n")
    console.print(table)
