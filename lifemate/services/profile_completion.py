"""
Profile completion scoring.

The score is ten equally weighted checks, 10 points each. It is a pure
function of the profile plus the owner's identity (for the profile image)
and is never accepted from callers.

IMPORTANT: every persisted write of a profile must go through
``prepare_for_commit``. ``JobSeekerRepository`` does this on ``create`` and
``save``; code that writes job seeker rows any other way bypasses both
validation and scoring.
"""

from typing import Any, Callable, List, Optional, Tuple

from ..core.constants import COMPLETION_STEP
from ..schemas.job_seeker import JobSeekerProfile
from .profile_validation import validate_profile


def _has_profile_image(identity: Any) -> bool:
    return bool(identity is not None and getattr(identity, "profile_image", None))


COMPLETION_CHECKS: List[Tuple[str, Callable[[JobSeekerProfile, Any], bool]]] = [
    ("title", lambda p, _: bool(p.title)),
    ("bio", lambda p, _: bool(p.bio)),
    ("specializations", lambda p, _: len(p.specializations) > 0),
    # zero years is a valid answer
    ("experience.total_years", lambda p, _: p.experience.total_years is not None),
    ("education", lambda p, _: len(p.education) > 0),
    ("work_experience", lambda p, _: len(p.work_experience) > 0),
    ("skills", lambda p, _: len(p.skills) > 0),
    (
        "job_preferences.preferred_locations",
        lambda p, _: len(p.job_preferences.preferred_locations) > 0,
    ),
    ("resume.url", lambda p, _: bool(p.resume is not None and p.resume.url)),
    ("profile_image", lambda _, identity: _has_profile_image(identity)),
]


def missing_sections(profile: JobSeekerProfile, identity: Optional[Any] = None) -> List[str]:
    """Names of the completion checks the profile does not yet satisfy."""
    return [name for name, check in COMPLETION_CHECKS if not check(profile, identity)]


def calculate_profile_completion(
    profile: JobSeekerProfile, identity: Optional[Any] = None
) -> int:
    """
    Return the completion percentage (0-100, multiples of 10).

    ``identity`` is anything with a ``profile_image`` attribute (a ``User``
    row or a ``UserIdentity``); None means no linked user.
    """
    satisfied = sum(1 for _, check in COMPLETION_CHECKS if check(profile, identity))
    return satisfied * COMPLETION_STEP


def prepare_for_commit(
    profile: JobSeekerProfile, identity: Optional[Any] = None
) -> JobSeekerProfile:
    """
    Pre-commit hook: validate every field, then write the score back.

    A rejected profile is left untouched. The stored score is ignored by
    validation since it is about to be replaced.
    """
    score = calculate_profile_completion(profile, identity)
    validate_profile(profile.model_copy(update={"profile_completion": score}))
    profile.profile_completion = score
    return profile
