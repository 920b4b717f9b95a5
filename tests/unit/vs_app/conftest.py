from __future__ import annotations

from pathlib import Path

import pytest

from vs_app.client import ApplicationClient
from vs_app.services.store import RecordStore
from vs_app.settings import AppSettings
from vs_core.loader import flatten_tree
from vs_core.models import Item


@pytest.fixture
def settings(data_dir: Path) -> AppSettings:
    return AppSettings(data_dir=data_dir)


@pytest.fixture
def client(settings: AppSettings) -> ApplicationClient:
    return ApplicationClient(settings, RecordStore(settings.store_path))


@pytest.fixture
def seeded_client(client: ApplicationClient, dev_tree: list[Item]) -> ApplicationClient:
    client.store.replace_table("skillsets", [row.model_dump() for row in flatten_tree(dev_tree)])
    return client
