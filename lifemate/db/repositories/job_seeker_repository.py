from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Any, List, Optional, Tuple

from ...core.constants import DEFAULT_LIMIT, DEFAULT_OFFSET
from ...core.logger import logger
from ...models.job_seeker import JobSeeker, JobSeekerLocation, JobSeekerSpecialization
from ...models.user import User
from ...schemas.job_seeker import JobSeekerProfile
from ...services.profile_completion import prepare_for_commit
from ...utils.exceptions import (
    DatabaseException,
    DuplicateProfileException,
    ValidationException,
)

STAT_FIELDS = (
    "profile_views",
    "applications_submitted",
    "interviews_scheduled",
    "jobs_offered",
)


class JobSeekerRepository:
    """
    Store and query job seeker profiles.

    ``create`` and ``save`` are the only write paths and both run
    ``prepare_for_commit`` (validation + completion score) before touching
    the session.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # row <-> record mapping
    # ------------------------------------------------------------------
    @staticmethod
    def to_record(row: JobSeeker) -> JobSeekerProfile:
        preferences = dict(row.job_preferences or {})
        preferences["preferred_locations"] = [
            {"city": loc.city, "state": loc.state, "country": loc.country}
            for loc in row.location_rows
        ]
        return JobSeekerProfile.model_validate(
            {
                "user_id": row.user_id,
                "title": row.title,
                "bio": row.bio,
                "specializations": [s.name for s in row.specialization_rows],
                "experience": {
                    "total_years": row.experience_total_years,
                    "current_position": row.current_position,
                    "current_company": row.current_company,
                    "is_currently_employed": (
                        True
                        if row.is_currently_employed is None
                        else row.is_currently_employed
                    ),
                },
                "education": row.education or [],
                "work_experience": row.work_experience or [],
                "skills": row.skills or [],
                "certifications": row.certifications or [],
                "job_preferences": preferences,
                "resume": row.resume,
                "cover_letter": row.cover_letter,
                "portfolio": row.portfolio or [],
                "profile_completion": row.profile_completion or 0,
                "privacy_settings": row.privacy_settings or {},
                "stats": {name: getattr(row, name) or 0 for name in STAT_FIELDS},
            }
        )

    @staticmethod
    def _apply(row: JobSeeker, profile: JobSeekerProfile) -> None:
        data = profile.model_dump(mode="json")

        row.title = data["title"]
        row.bio = data["bio"]

        experience = data["experience"]
        row.experience_total_years = experience["total_years"]
        row.current_position = experience["current_position"]
        row.current_company = experience["current_company"]
        row.is_currently_employed = experience["is_currently_employed"]

        row.education = data["education"]
        row.work_experience = data["work_experience"]
        row.skills = data["skills"]
        row.certifications = data["certifications"]

        preferences = dict(data["job_preferences"])
        locations = preferences.pop("preferred_locations")
        row.job_preferences = preferences

        row.resume = data["resume"]
        row.cover_letter = data["cover_letter"]
        row.portfolio = data["portfolio"]
        row.profile_completion = data["profile_completion"]
        row.privacy_settings = data["privacy_settings"]
        for name in STAT_FIELDS:
            setattr(row, name, data["stats"][name])

        row.specialization_rows = [
            JobSeekerSpecialization(position=i, name=name)
            for i, name in enumerate(data["specializations"])
        ]
        row.location_rows = [
            JobSeekerLocation(
                position=i,
                city=loc["city"],
                state=loc["state"],
                country=loc["country"],
            )
            for i, loc in enumerate(locations)
        ]

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    def get_by_user_id(self, user_id: int) -> Optional[JobSeeker]:
        return self.db.query(JobSeeker).filter(JobSeeker.user_id == user_id).first()

    def search(
        self,
        specialization: Optional[str] = None,
        min_years: Optional[float] = None,
        max_years: Optional[float] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        min_completion: Optional[int] = None,
        skip: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
    ) -> Tuple[List[JobSeeker], int]:
        """
        Filter profiles on the indexed fields and return (page, total count)
        """
        try:
            query = self.db.query(JobSeeker)

            if specialization:
                query = query.filter(
                    JobSeeker.specialization_rows.any(
                        JobSeekerSpecialization.name == specialization
                    )
                )
            if min_years is not None:
                query = query.filter(JobSeeker.experience_total_years >= min_years)
            if max_years is not None:
                query = query.filter(JobSeeker.experience_total_years <= max_years)
            if city:
                query = query.filter(
                    JobSeeker.location_rows.any(JobSeekerLocation.city == city)
                )
            if state:
                query = query.filter(
                    JobSeeker.location_rows.any(JobSeekerLocation.state == state)
                )
            if min_completion is not None:
                query = query.filter(JobSeeker.profile_completion >= min_completion)

            total = query.count()
            rows = query.order_by(JobSeeker.id).offset(skip).limit(limit).all()
            return rows, total

        except SQLAlchemyError as e:
            error_msg = f"Error searching job seeker profiles: {str(e)}"
            logger.error(error_msg)
            raise DatabaseException(error_msg)

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------
    def create(self, profile: JobSeekerProfile, identity: Any = None) -> JobSeeker:
        if self.get_by_user_id(profile.user_id) is not None:
            raise DuplicateProfileException(profile.user_id)

        if identity is None:
            identity = self.db.get(User, profile.user_id)
        prepare_for_commit(profile, identity)
        row = JobSeeker(user_id=profile.user_id)
        self._apply(row, profile)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except IntegrityError as e:
            self.db.rollback()
            # lost a race with another create for the same user
            if self.get_by_user_id(profile.user_id) is not None:
                raise DuplicateProfileException(profile.user_id)
            error_msg = f"Error creating job seeker profile: {str(e)}"
            logger.error(error_msg)
            raise DatabaseException(error_msg)
        except SQLAlchemyError as e:
            self.db.rollback()
            error_msg = f"Error creating job seeker profile: {str(e)}"
            logger.error(error_msg)
            raise DatabaseException(error_msg)

        logger.info(
            f"Created job seeker profile for user {row.user_id} "
            f"({row.profile_completion}% complete)"
        )
        return row

    def save(self, row: JobSeeker, profile: JobSeekerProfile, identity: Any = None) -> JobSeeker:
        # the stored owner always wins over whatever the record claims
        profile.user_id = row.user_id
        for name in STAT_FIELDS:
            stored = getattr(row, name) or 0
            value = getattr(profile.stats, name)
            if value < stored:
                raise ValidationException(f"stats.{name}", "non_decreasing", value)
        if identity is None:
            identity = row.user
        prepare_for_commit(profile, identity)
        try:
            self._apply(row, profile)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            error_msg = f"Error saving job seeker profile: {str(e)}"
            logger.error(error_msg)
            raise DatabaseException(error_msg)

        logger.info(
            f"Saved job seeker profile for user {row.user_id} "
            f"({row.profile_completion}% complete)"
        )
        return row

    def increment_stat(
        self, row: JobSeeker, stat: str, amount: int = 1, identity: Any = None
    ) -> JobSeeker:
        """Bump one of the profile counters. Counters never go down."""
        if stat not in STAT_FIELDS:
            raise ValidationException(f"stats.{stat}", "unknown_stat", stat)
        if amount < 0:
            raise ValidationException(f"stats.{stat}", "non_decreasing", amount)

        profile = self.to_record(row)
        setattr(profile.stats, stat, getattr(profile.stats, stat) + amount)
        return self.save(row, profile, identity)
