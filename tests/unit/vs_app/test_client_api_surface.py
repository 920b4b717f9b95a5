"""Tests for the app client API surface."""

import pytest

from vs_app.api import ApplicationClient

pytestmark = pytest.mark.unit_app


def test_application_client_exposes_services(client: ApplicationClient) -> None:
    for name in ("catalog", "profiles", "matching", "store", "settings"):
        assert hasattr(client, name)
    assert client.catalog.store is client.store
    assert client.profiles.catalog is client.catalog


def test_selection_engine_reads_stored_catalog(seeded_client: ApplicationClient) -> None:
    engine = seeded_client.selection_engine(["react"])

    assert engine.index.ids[0] == "dev"
    assert engine.is_expanded("frontend")
