"""Translate typed failures into presenter output and exit codes."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from vs_common.errors import VSError, error_to_payload
from vs_ui.flows.errors import UIFlowError
from vs_ui.tui.system.protocols import UI

logger = logging.getLogger(__name__)


@contextmanager
def report_errors(ui: UI) -> Iterator[None]:
    try:
        yield
    except VSError as exc:
        logger.debug("Command failed: %s", error_to_payload(exc))
        ui.present.error(str(exc))
        raise typer.Exit(1) from exc
    except UIFlowError as exc:
        raise typer.Exit(exc.exit_code) from exc
