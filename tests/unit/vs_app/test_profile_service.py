from __future__ import annotations

import logging

import pytest

from vs_app.client import ApplicationClient
from vs_common.errors import RecordNotFoundError, SelectionValidationError, StoreError
from vs_core.models import ProjectRecord

pytestmark = pytest.mark.unit_app


def test_create_and_get_profile(seeded_client: ApplicationClient) -> None:
    seeded_client.profiles.create_profile("u1", "Ada Lovelace")

    profile = seeded_client.profiles.get_profile("u1")

    assert profile.full_name == "Ada Lovelace"
    assert profile.role == "volunteer"
    assert profile.skills == []


def test_missing_profile(seeded_client: ApplicationClient) -> None:
    with pytest.raises(RecordNotFoundError):
        seeded_client.profiles.get_profile("ghost")
    with pytest.raises(RecordNotFoundError):
        seeded_client.profiles.save_skills("ghost", ["react"])


def test_save_skills_dedupes_and_persists(seeded_client: ApplicationClient) -> None:
    seeded_client.profiles.create_profile("u1", "Ada")

    saved = seeded_client.profiles.save_skills("u1", ["react", "vue", "react"])

    assert saved.skills == ["react", "vue"]
    assert seeded_client.profiles.get_profile("u1").skills == ["react", "vue"]


def test_save_rejects_empty_selection(seeded_client: ApplicationClient) -> None:
    seeded_client.profiles.create_profile("u1", "Ada")

    with pytest.raises(SelectionValidationError, match="You have to select at least one item."):
        seeded_client.profiles.save_skills("u1", [])


def test_stale_ids_kept_by_default(seeded_client: ApplicationClient, caplog: pytest.LogCaptureFixture) -> None:
    seeded_client.profiles.create_profile("u1", "Ada")

    with caplog.at_level(logging.WARNING, logger="vs_app.services.profile_service"):
        saved = seeded_client.profiles.save_skills("u1", ["react", "cobol"])

    assert saved.skills == ["react", "cobol"]
    assert "cobol" in caplog.text


def test_stale_ids_pruned_when_configured(seeded_client: ApplicationClient) -> None:
    seeded_client.settings.prune_stale = True
    seeded_client.profiles.create_project("p1", "Food bank", "org1")

    saved = seeded_client.profiles.save_required_skills("p1", ["cobol", "ux"])
    assert saved.required_skills == ["ux"]

    with pytest.raises(SelectionValidationError):
        seeded_client.profiles.save_required_skills("p1", ["cobol"])


def test_list_profiles_by_role(seeded_client: ApplicationClient) -> None:
    seeded_client.profiles.create_profile("u1", "Ada")
    seeded_client.profiles.create_profile("a1", "Helping Hands", role="agency")

    assert [p.id for p in seeded_client.profiles.list_profiles("agency")] == ["a1"]
    assert len(seeded_client.profiles.list_profiles()) == 2


def test_invalid_stored_record_raises_store_error(seeded_client: ApplicationClient) -> None:
    seeded_client.store.insert("profiles", {"id": "u1", "role": "pirate"})

    with pytest.raises(StoreError) as excinfo:
        seeded_client.profiles.get_profile("u1")

    assert excinfo.value.context == {"table": "profiles", "id": "u1"}


def test_stored_records_come_back_typed(seeded_client: ApplicationClient) -> None:
    seeded_client.store.insert("projects", {"id": "p1", "title": "Pantry", "required_skills": None})

    project = seeded_client.profiles.get_project("p1")

    assert isinstance(project, ProjectRecord)
    assert project.required_skills == []
    assert [type(p) for p in seeded_client.profiles.list_projects()] == [ProjectRecord]
