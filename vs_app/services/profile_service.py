"""Persist skill selections on profiles and projects."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from vs_app.services.catalog_service import CatalogService
from vs_app.services.store import RecordStore
from vs_app.settings import AppSettings
from vs_common.errors import RecordNotFoundError, SelectionValidationError, StoreError
from vs_core.engine import EMPTY_SELECTION_MESSAGE
from vs_core.models import ProfileRecord, ProjectRecord, Role

logger = logging.getLogger(__name__)

PROFILES = "profiles"
PROJECTS = "projects"

RecordT = TypeVar("RecordT", bound=BaseModel)


class ProfileService:
    """Read and write ``skills`` / ``required_skills`` through the store."""

    def __init__(
        self,
        store: RecordStore,
        catalog: CatalogService,
        settings: AppSettings | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.settings = settings or catalog.settings

    # --- profiles --------------------------------------------------------

    def get_profile(self, profile_id: str) -> ProfileRecord:
        raw = self.store.get(PROFILES, profile_id)
        if raw is None:
            raise RecordNotFoundError(f"Profile '{profile_id}' not found", context={"id": profile_id})
        return self._validate(ProfileRecord, raw, PROFILES)

    def list_profiles(self, role: Optional[Role] = None) -> list[ProfileRecord]:
        filters = {"role": role} if role else {}
        return [self._validate(ProfileRecord, raw, PROFILES) for raw in self.store.select(PROFILES, **filters)]

    def upsert_profile(self, profile: ProfileRecord) -> ProfileRecord:
        self.store.upsert(PROFILES, profile.model_dump())
        return profile

    def create_profile(self, profile_id: str, full_name: str, role: Role = "volunteer") -> ProfileRecord:
        return self.upsert_profile(ProfileRecord(id=profile_id, full_name=full_name, role=role))

    def save_skills(self, profile_id: str, skill_ids: Iterable[str]) -> ProfileRecord:
        profile = self.get_profile(profile_id)
        skills = self.prepare_selection(skill_ids, owner=f"profile {profile_id}")
        self.store.update(PROFILES, profile_id, {"skills": skills})
        logger.info("Saved %d skills for profile %s", len(skills), profile_id)
        return profile.model_copy(update={"skills": skills})

    # --- projects --------------------------------------------------------

    def get_project(self, project_id: str) -> ProjectRecord:
        raw = self.store.get(PROJECTS, project_id)
        if raw is None:
            raise RecordNotFoundError(f"Project '{project_id}' not found", context={"id": project_id})
        return self._validate(ProjectRecord, raw, PROJECTS)

    def list_projects(self) -> list[ProjectRecord]:
        return [self._validate(ProjectRecord, raw, PROJECTS) for raw in self.store.select(PROJECTS)]

    def upsert_project(self, project: ProjectRecord) -> ProjectRecord:
        self.store.upsert(PROJECTS, project.model_dump())
        return project

    def create_project(self, project_id: str, title: str, organization_id: Optional[str] = None) -> ProjectRecord:
        return self.upsert_project(ProjectRecord(id=project_id, title=title, organization_id=organization_id))

    def save_required_skills(self, project_id: str, skill_ids: Iterable[str]) -> ProjectRecord:
        project = self.get_project(project_id)
        skills = self.prepare_selection(skill_ids, owner=f"project {project_id}")
        self.store.update(PROJECTS, project_id, {"required_skills": skills})
        logger.info("Saved %d required skills for project %s", len(skills), project_id)
        return project.model_copy(update={"required_skills": skills})

    # --- helpers ---------------------------------------------------------

    def prepare_selection(self, skill_ids: Iterable[str], *, owner: str = "selection") -> list[str]:
        """
        Deduplicate a submitted selection and apply the stale-id policy.

        Raises SelectionValidationError when nothing is left to save.
        """
        skills = list(dict.fromkeys(skill_ids))
        if not skills:
            raise SelectionValidationError(EMPTY_SELECTION_MESSAGE, context={"owner": owner})

        index = self.catalog.index()
        stale = [skill for skill in skills if skill not in index]
        if stale:
            if self.settings.prune_stale:
                logger.warning("Pruning %d stale ids from %s: %s", len(stale), owner, stale)
                skills = [skill for skill in skills if skill in index]
            else:
                logger.warning("Keeping %d ids missing from the catalog on %s: %s", len(stale), owner, stale)
        if not skills:
            raise SelectionValidationError(
                EMPTY_SELECTION_MESSAGE,
                context={"owner": owner, "pruned": stale},
            )
        return skills

    @staticmethod
    def _validate(model: type[RecordT], raw: dict[str, Any], table: str) -> RecordT:
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(
                f"Invalid record '{raw.get('id')}' in {table}",
                context={"table": table, "id": raw.get("id")},
                cause=exc,
            ) from exc
