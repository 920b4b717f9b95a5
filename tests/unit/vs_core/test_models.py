from __future__ import annotations

import pytest
from pydantic import ValidationError

from vs_core.models import Item, ProfileRecord, ProjectRecord, SkillsetRow

pytestmark = pytest.mark.unit_core


def test_item_reads_sub_children_alias() -> None:
    item = Item.model_validate(
        {"id": "frontend", "label": "Frontend", "subChildren": [{"id": "react", "label": "React"}]}
    )

    assert [child.id for child in item.child_nodes()] == ["react"]
    assert item.to_dict()["subChildren"] == [{"id": "react", "label": "React"}]


def test_item_is_immutable() -> None:
    item = Item(id="a", label="A")

    with pytest.raises(ValidationError):
        item.label = "B"  # type: ignore[misc]


@pytest.mark.parametrize("bad_id", ["Has Caps", "with space", "dash-ed", ""])
def test_skillset_row_rejects_bad_ids(bad_id: str) -> None:
    with pytest.raises(ValidationError, match="ID must be lowercase"):
        SkillsetRow(id=bad_id, label="Label")


def test_skillset_row_blank_parent_means_root() -> None:
    row = SkillsetRow(id="web", label="  Web  ", parent_id="")

    assert row.parent_id is None
    assert row.label == "Web"


def test_records_default_null_skill_lists() -> None:
    profile = ProfileRecord.model_validate({"id": "u1", "skills": None, "email": "ignored@example.org"})
    project = ProjectRecord.model_validate({"id": "p1", "required_skills": None})

    assert profile.skills == []
    assert profile.role == "volunteer"
    assert project.required_skills == []


def test_profile_role_is_checked() -> None:
    with pytest.raises(ValidationError):
        ProfileRecord(id="u1", role="admin")  # type: ignore[arg-type]
