from typing import Optional
from sqlalchemy.orm import Session
from pydantic import ValidationError as PydanticValidationError

from ..core.logger import logger
from ..db.repositories.job_seeker_repository import JobSeekerRepository
from ..models.job_seeker import JobSeeker
from ..models.user import User
from ..schemas.job_seeker import JobSeekerProfile, JobSeekerResponse, JobSeekerUpdate
from ..utils.exceptions import ValidationException


class JobSeekerService:
    @staticmethod
    def create_profile(
        db: Session, user: User, profile_data: Optional[JobSeekerUpdate] = None
    ) -> JobSeeker:
        """Create the user's profile, empty unless initial data is given."""
        values = profile_data.model_dump(exclude_unset=True) if profile_data else {}
        try:
            profile = JobSeekerProfile.model_validate({**values, "user_id": user.id})
        except PydanticValidationError as e:
            raise ValidationException.from_pydantic(e) from e

        return JobSeekerRepository(db).create(profile, identity=user)

    @staticmethod
    def update_profile(
        db: Session, user: User, profile_data: JobSeekerUpdate
    ) -> JobSeeker:
        """Apply the fields set in ``profile_data`` on top of the stored profile."""
        repository = JobSeekerRepository(db)
        row = repository.get_by_user_id(user.id)
        if row is None:
            # first edit creates the profile
            logger.info(f"No profile for user {user.id} yet, creating one")
            return JobSeekerService.create_profile(db, user, profile_data)

        current = repository.to_record(row).model_dump()
        changes = profile_data.model_dump(exclude_unset=True)
        try:
            profile = JobSeekerProfile.model_validate({**current, **changes})
        except PydanticValidationError as e:
            raise ValidationException.from_pydantic(e) from e

        return repository.save(row, profile, identity=user)

    @staticmethod
    def get_profile(db: Session, user: User) -> JobSeeker:
        """Fetch the user's profile, creating the default one on first access."""
        repository = JobSeekerRepository(db)
        row = repository.get_by_user_id(user.id)
        if row is None:
            row = repository.create(JobSeekerProfile(user_id=user.id), identity=user)
        return row

    @staticmethod
    def to_response(row: JobSeeker) -> JobSeekerResponse:
        profile = JobSeekerRepository.to_record(row)
        return JobSeekerResponse(
            **profile.model_dump(),
            id=row.id,
            full_name=row.user.full_name if row.user else "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
