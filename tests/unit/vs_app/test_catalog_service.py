from __future__ import annotations

import pytest

from vs_app.client import ApplicationClient
from vs_common.errors import CatalogError, RecordNotFoundError
from vs_core.models import Item

pytestmark = pytest.mark.unit_app


def test_empty_store_falls_back_to_bundled_catalog(client: ApplicationClient) -> None:
    assert not client.catalog.is_seeded()

    items = client.catalog.load_items()

    assert len(items) == 9
    assert items[0].id == "information_technology"


def test_seed_defaults_is_idempotent(client: ApplicationClient) -> None:
    assert client.catalog.seed_defaults() == 227
    assert client.catalog.seed_defaults() == 0
    assert client.catalog.seed_defaults(overwrite=True) == 227
    assert len(client.catalog.index()) == 227


def test_load_items_from_rows(seeded_client: ApplicationClient, dev_tree: list[Item]) -> None:
    assert seeded_client.catalog.load_items() == dev_tree


def test_add_skillset_validations(seeded_client: ApplicationClient) -> None:
    catalog = seeded_client.catalog

    with pytest.raises(CatalogError, match="ID and Label are required."):
        catalog.add_skillset("", "Angular")
    with pytest.raises(CatalogError, match="ID must be lowercase"):
        catalog.add_skillset("Angular JS", "Angular")
    with pytest.raises(CatalogError, match="already exists"):
        catalog.add_skillset("react", "React again", "frontend")
    with pytest.raises(CatalogError, match="Unknown parent"):
        catalog.add_skillset("angular", "Angular", "mobile")
    with pytest.raises(CatalogError, match="maximum depth"):
        catalog.add_skillset("hooks", "Hooks", "react")

    row = catalog.add_skillset("angular", "Angular", "frontend")

    assert row.parent_id == "frontend"
    assert catalog.index().display_path("angular") == "Development > Frontend > Angular"


def test_update_renames_and_reparents_children(seeded_client: ApplicationClient) -> None:
    catalog = seeded_client.catalog

    catalog.update_skillset("frontend", new_id="web_frontend", label="Web Frontend")

    index = catalog.index()
    assert "frontend" not in index
    assert index.parent("react").id == "web_frontend"
    assert index.display_path("vue") == "Development > Web Frontend > Vue"


def test_update_moves_to_root_and_rejects_cycles(seeded_client: ApplicationClient) -> None:
    catalog = seeded_client.catalog

    with pytest.raises(CatalogError, match="under itself"):
        catalog.update_skillset("dev", parent_id="react")
    with pytest.raises(RecordNotFoundError):
        catalog.update_skillset("missing", label="x")

    catalog.update_skillset("backend", parent_id=None)

    index = catalog.index()
    assert index.depth("backend") == 1
    assert [child.id for child in index.get("backend").child_nodes()] == ["node"]


def test_delete_cascades_to_descendants(seeded_client: ApplicationClient) -> None:
    removed = seeded_client.catalog.delete_skillset("dev")

    assert set(removed) == {"dev", "frontend", "react", "vue", "backend", "node"}
    assert seeded_client.catalog.index().ids == ["design", "ux", "ui"]

    with pytest.raises(RecordNotFoundError):
        seeded_client.catalog.delete_skillset("dev")


def test_parent_options_exclude_max_depth_and_subtree(seeded_client: ApplicationClient) -> None:
    options = dict(seeded_client.catalog.parent_options())

    assert options == {
        "dev": "Development",
        "frontend": "Development > Frontend",
        "backend": "Development > Backend",
        "design": "Design",
        "ux": "Design > UX",
        "ui": "Design > UI",
    }
    assert "frontend" not in dict(seeded_client.catalog.parent_options(exclude="dev"))


def test_create_engine_uses_configured_propagation(seeded_client: ApplicationClient) -> None:
    seeded_client.settings.propagation = "parent"

    engine = seeded_client.selection_engine(["frontend"])
    engine.toggle_selection("node")

    assert engine.is_selected("backend")
    assert not engine.is_selected("dev")


def test_add_on_unseeded_store_keeps_bundled_catalog(client: ApplicationClient) -> None:
    catalog = client.catalog
    assert "software_development" in catalog.index()

    catalog.add_skillset("web_accessibility", "Web Accessibility", "software_development")

    index = catalog.index()
    assert catalog.is_seeded()
    assert len(index) == 228
    assert index.display_path("web_accessibility") == (
        "Information Technology > Software Development > Web Accessibility"
    )


def test_new_root_on_unseeded_store_does_not_strand_saved_skills(client: ApplicationClient) -> None:
    client.profiles.create_profile("v1", "Ada")
    client.profiles.save_skills("v1", ["front_end"])

    client.catalog.add_skillset("climate", "Climate")

    assert len(client.catalog.index()) == 228
    engine = client.selection_engine(client.profiles.get_profile("v1").skills)
    assert engine.stale_ids == []


def test_edit_and_delete_on_unseeded_store(client: ApplicationClient) -> None:
    catalog = client.catalog

    catalog.update_skillset("front_end", label="Frontend")
    assert catalog.index().display_path("front_end") == (
        "Information Technology > Software Development > Frontend"
    )

    removed = catalog.delete_skillset("software_development")
    index = catalog.index()
    assert "front_end" in removed
    assert "software_development" not in index
    assert "information_technology" in index
    assert len(index) == 227 - len(removed)
