"""
Field-level validation for job seeker profiles.

``PROFILE_CONSTRAINTS`` maps a field path to the constraints it must satisfy.
Paths use dots for nested objects and ``[]`` for "every element of this
list", e.g. ``work_experience[].achievements[]``. Violations are reported
against the concrete path (``work_experience[2].achievements[0]``).

Every write goes through ``validate_profile``; see
``services/profile_completion.prepare_for_commit``.
"""

from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from pydantic import ValidationError as PydanticValidationError

from ..core.constants import (
    AVAILABILITY,
    COMPLETION_YEAR_LOOKAHEAD,
    CURRENCIES,
    DEGREES,
    JOB_TYPES,
    MAX_EXPERIENCE_YEARS,
    MIN_COMPLETION_YEAR,
    PORTFOLIO_TYPES,
    REMOTE_PREFERENCES,
    SALARY_PERIODS,
    SHIFTS,
    SKILL_LEVELS,
    SPECIALIZATIONS,
)
from ..schemas.job_seeker import JobSeekerProfile
from ..utils.constraints import Constraint, MaxLength, NotBefore, OneOf, Range, Required
from ..utils.exceptions import ValidationException


def latest_completion_year() -> int:
    return date.today().year + COMPLETION_YEAR_LOOKAHEAD


PROFILE_CONSTRAINTS: Dict[str, List[Constraint]] = {
    "user_id": [Required()],
    "title": [MaxLength(100)],
    "bio": [MaxLength(1000)],
    "specializations[]": [OneOf(SPECIALIZATIONS)],
    # experience
    "experience.total_years": [Range(0, MAX_EXPERIENCE_YEARS)],
    "experience.current_position": [MaxLength(100)],
    "experience.current_company": [MaxLength(100)],
    # education
    "education[].degree": [Required(), OneOf(DEGREES)],
    "education[].field": [Required(), MaxLength(100)],
    "education[].institution": [Required(), MaxLength(200)],
    "education[].year_of_completion": [
        Required(),
        Range(MIN_COMPLETION_YEAR, latest_completion_year),
    ],
    "education[].grade": [MaxLength(20)],
    # work experience
    "work_experience[].position": [Required(), MaxLength(100)],
    "work_experience[].company": [Required(), MaxLength(100)],
    "work_experience[].location": [Required(), MaxLength(100)],
    "work_experience[].start_date": [Required()],
    "work_experience[].end_date": [NotBefore("start_date")],
    "work_experience[].description": [MaxLength(1000)],
    "work_experience[].achievements[]": [MaxLength(200)],
    # skills
    "skills[].name": [Required(), MaxLength(50)],
    "skills[].level": [OneOf(SKILL_LEVELS)],
    # certifications
    "certifications[].name": [Required(), MaxLength(100)],
    "certifications[].issuing_organization": [Required(), MaxLength(100)],
    "certifications[].issue_date": [Required()],
    "certifications[].expiry_date": [NotBefore("issue_date")],
    "certifications[].credential_id": [MaxLength(50)],
    # job preferences
    "job_preferences.preferred_locations[].city": [Required(), MaxLength(50)],
    "job_preferences.preferred_locations[].state": [Required(), MaxLength(50)],
    "job_preferences.preferred_locations[].country": [Required(), MaxLength(50)],
    "job_preferences.preferred_job_types[]": [OneOf(JOB_TYPES)],
    "job_preferences.preferred_shifts[]": [OneOf(SHIFTS)],
    "job_preferences.expected_salary.min": [Range(0, None)],
    "job_preferences.expected_salary.max": [Range(0, None)],
    "job_preferences.expected_salary.currency": [OneOf(CURRENCIES)],
    "job_preferences.expected_salary.period": [OneOf(SALARY_PERIODS)],
    "job_preferences.availability": [OneOf(AVAILABILITY)],
    "job_preferences.remote_work_preference": [OneOf(REMOTE_PREFERENCES)],
    # documents
    "resume.size_bytes": [Range(0, None)],
    "cover_letter.size_bytes": [Range(0, None)],
    "portfolio[].title": [Required(), MaxLength(100)],
    "portfolio[].description": [MaxLength(500)],
    "portfolio[].url": [Required()],
    "portfolio[].type": [OneOf(PORTFOLIO_TYPES)],
    # derived / external
    "profile_completion": [Range(0, 100)],
    "stats.profile_views": [Range(0, None)],
    "stats.applications_submitted": [Range(0, None)],
    "stats.interviews_scheduled": [Range(0, None)],
    "stats.jobs_offered": [Range(0, None)],
}


def iter_field(
    data: Mapping[str, Any], path: str
) -> Iterator[Tuple[str, Any, Mapping[str, Any]]]:
    """
    Yield ``(concrete_path, value, parent)`` for every value a path selects.

    A missing intermediate object (e.g. ``resume`` is None) selects nothing;
    a missing leaf selects ``None`` so ``Required`` can report it.
    """

    def walk(node, parts, prefix):
        head, rest = parts[0], parts[1:]
        is_list = head.endswith("[]")
        key = head[:-2] if is_list else head
        if not isinstance(node, Mapping):
            return
        here = f"{prefix}.{key}" if prefix else key
        value = node.get(key)

        if is_list:
            for index, item in enumerate(value or []):
                item_path = f"{here}[{index}]"
                if rest:
                    yield from walk(item, rest, item_path)
                else:
                    yield item_path, item, node
            return

        if rest:
            if value is not None:
                yield from walk(value, rest, here)
        else:
            yield here, value, node

    yield from walk(data, path.split("."), "")


def find_violations(profile: JobSeekerProfile) -> List[ValidationException]:
    """Evaluate every constraint and return all failures, in table order."""
    data = profile.model_dump()
    violations = []
    for path, constraints in PROFILE_CONSTRAINTS.items():
        for field, value, parent in iter_field(data, path):
            for constraint in constraints:
                if not constraint(value, parent):
                    violations.append(
                        ValidationException(field, constraint.describe(), value)
                    )
                    # one report per field is enough
                    break
    return violations


def validate_profile(profile: JobSeekerProfile) -> JobSeekerProfile:
    """Raise ``ValidationException`` for the first violated constraint."""
    violations = find_violations(profile)
    if violations:
        raise violations[0]
    return profile


def parse_profile(data: Mapping[str, Any]) -> JobSeekerProfile:
    """Build and validate a profile from raw data."""
    try:
        profile = JobSeekerProfile.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationException.from_pydantic(e) from e
    return validate_profile(profile)
