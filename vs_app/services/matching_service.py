"""Recommend volunteers for a project by shared skills."""

from __future__ import annotations

import logging

from vs_app.services.profile_service import ProfileService
from vs_core.matching import effective_required_skills, match_volunteers
from vs_core.models import VolunteerMatch

logger = logging.getLogger(__name__)


class MatchingService:
    def __init__(self, profiles: ProfileService) -> None:
        self.profiles = profiles

    def recommend(self, project_id: str) -> list[VolunteerMatch]:
        project = self.profiles.get_project(project_id)
        volunteers = self.profiles.list_profiles(role="volunteer")
        matches = match_volunteers(project.required_skills, volunteers)
        logger.debug(
            "Project %s requires %s: %d of %d volunteers match",
            project_id,
            effective_required_skills(project.required_skills),
            len(matches),
            len(volunteers),
        )
        return matches
