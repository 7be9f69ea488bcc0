from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from ...db.session import get_db
from ...core.auth import get_current_jobseeker
from ...models.user import User
from ...schemas.job_seeker import JobSeekerResponse, JobSeekerUpdate
from ...services.job_seeker_service import JobSeekerService

router = APIRouter()


@router.post("", response_model=JobSeekerResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile_data: Optional[JobSeekerUpdate] = None,
    current_user: User = Depends(get_current_jobseeker),
    db: Session = Depends(get_db),
):
    profile = JobSeekerService.create_profile(db, current_user, profile_data)
    return JobSeekerService.to_response(profile)


@router.get("", response_model=JobSeekerResponse)
async def get_profile(
    current_user: User = Depends(get_current_jobseeker),
    db: Session = Depends(get_db),
):
    profile = JobSeekerService.get_profile(db, current_user)
    return JobSeekerService.to_response(profile)


@router.put("", response_model=JobSeekerResponse)
async def update_profile(
    profile_data: JobSeekerUpdate,
    current_user: User = Depends(get_current_jobseeker),
    db: Session = Depends(get_db),
):
    profile = JobSeekerService.update_profile(db, current_user, profile_data)
    return JobSeekerService.to_response(profile)
