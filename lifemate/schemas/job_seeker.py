from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime

from ..core.constants import (
    DEFAULT_AVAILABILITY,
    DEFAULT_COUNTRY,
    DEFAULT_CURRENCY,
    DEFAULT_PORTFOLIO_TYPE,
    DEFAULT_REMOTE_PREFERENCE,
    DEFAULT_SALARY_PERIOD,
    DEFAULT_SKILL_LEVEL,
)


def _unique(values):
    # set semantics, first occurrence wins
    seen = []
    for value in values or []:
        if value not in seen:
            seen.append(value)
    return seen


class ProfileModel(BaseModel):
    """Base for every profile shape: text is trimmed before it is validated."""

    class Config:
        str_strip_whitespace = True


# Required markers on sub-entities are enforced by the constraint table in
# services/profile_validation.py, so the fields stay Optional here.


class Experience(ProfileModel):
    total_years: Optional[float] = None
    current_position: Optional[str] = None
    current_company: Optional[str] = None
    is_currently_employed: bool = True


class Education(ProfileModel):
    degree: Optional[str] = None
    field: Optional[str] = None
    institution: Optional[str] = None
    year_of_completion: Optional[int] = None
    grade: Optional[str] = None


class WorkExperience(ProfileModel):
    position: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)


class Skill(ProfileModel):
    name: Optional[str] = None
    level: str = DEFAULT_SKILL_LEVEL


class Certification(ProfileModel):
    name: Optional[str] = None
    issuing_organization: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None


class PreferredLocation(ProfileModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: str = DEFAULT_COUNTRY


class ExpectedSalary(ProfileModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    period: str = DEFAULT_SALARY_PERIOD


class JobPreferences(ProfileModel):
    preferred_locations: List[PreferredLocation] = Field(default_factory=list)
    preferred_job_types: List[str] = Field(default_factory=list)
    preferred_shifts: List[str] = Field(default_factory=list)
    expected_salary: ExpectedSalary = Field(default_factory=ExpectedSalary)
    availability: str = DEFAULT_AVAILABILITY
    willing_to_relocate: bool = False
    remote_work_preference: str = DEFAULT_REMOTE_PREFERENCE

    @field_validator("preferred_job_types", "preferred_shifts")
    @classmethod
    def drop_duplicates(cls, v):
        return _unique(v)


class Document(ProfileModel):
    """Descriptor of an uploaded file; the bytes live in external storage."""

    url: Optional[str] = None
    filename: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    storage_id: Optional[str] = None
    size_bytes: Optional[int] = None


class PortfolioItem(ProfileModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    type: str = DEFAULT_PORTFOLIO_TYPE


class PrivacySettings(ProfileModel):
    show_contact_info: bool = True
    show_current_salary: bool = False
    show_profile_to_employers: bool = True
    allow_direct_messages: bool = True


class ProfileStats(ProfileModel):
    profile_views: int = 0
    applications_submitted: int = 0
    interviews_scheduled: int = 0
    jobs_offered: int = 0


class JobSeekerProfile(ProfileModel):
    """
    The job seeker record.

    ``profile_completion`` is derived: it is overwritten by
    ``services.profile_completion.prepare_for_commit`` before every write and
    must not be treated as caller input.
    """

    user_id: int
    title: Optional[str] = None
    bio: Optional[str] = None
    specializations: List[str] = Field(default_factory=list)
    experience: Experience = Field(default_factory=Experience)
    education: List[Education] = Field(default_factory=list)
    work_experience: List[WorkExperience] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    job_preferences: JobPreferences = Field(default_factory=JobPreferences)
    resume: Optional[Document] = None
    cover_letter: Optional[Document] = None
    portfolio: List[PortfolioItem] = Field(default_factory=list)
    profile_completion: int = 0
    privacy_settings: PrivacySettings = Field(default_factory=PrivacySettings)
    stats: ProfileStats = Field(default_factory=ProfileStats)

    @field_validator("specializations")
    @classmethod
    def drop_duplicates(cls, v):
        return _unique(v)


class JobSeekerUpdate(ProfileModel):
    """Fields the owner may edit. Unset fields keep their stored value."""

    title: Optional[str] = None
    bio: Optional[str] = None
    specializations: Optional[List[str]] = None
    experience: Optional[Experience] = None
    education: Optional[List[Education]] = None
    work_experience: Optional[List[WorkExperience]] = None
    skills: Optional[List[Skill]] = None
    certifications: Optional[List[Certification]] = None
    job_preferences: Optional[JobPreferences] = None
    resume: Optional[Document] = None
    cover_letter: Optional[Document] = None
    portfolio: Optional[List[PortfolioItem]] = None
    privacy_settings: Optional[PrivacySettings] = None

    class Config:
        str_strip_whitespace = True
        extra = "forbid"


class JobSeekerResponse(JobSeekerProfile):
    id: int
    full_name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserIdentity(BaseModel):
    """What the identity layer knows about the owner of a profile."""

    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    profile_image: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    class Config:
        from_attributes = True
