"""Skill-based volunteer recommendation."""

from __future__ import annotations

from typing import Iterable, Sequence

from vs_core.models import ProfileRecord, VolunteerMatch

DEFAULT_REQUIRED_SKILLS = ("general",)


def effective_required_skills(required_skills: Sequence[str] | None) -> list[str]:
    """A project with no explicit requirement accepts generalists."""
    return list(required_skills) if required_skills else list(DEFAULT_REQUIRED_SKILLS)


def match_volunteers(
    required_skills: Sequence[str] | None,
    volunteers: Iterable[ProfileRecord],
) -> list[VolunteerMatch]:
    """
    Rank volunteers sharing at least one skill with the requirement.

    ``matched_skills`` keeps the volunteer's own ordering. Results are
    sorted by match count (highest first), then by name and id.
    """
    required = set(effective_required_skills(required_skills))
    matches: list[VolunteerMatch] = []
    for profile in volunteers:
        if profile.role != "volunteer":
            continue
        matched = [skill for skill in dict.fromkeys(profile.skills) if skill in required]
        if matched:
            matches.append(VolunteerMatch(profile=profile, matched_skills=matched))
    matches.sort(key=lambda m: (-m.match_count, m.profile.full_name.lower(), m.profile.id))
    return matches
