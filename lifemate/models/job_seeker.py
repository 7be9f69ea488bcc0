from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    Float,
    Text,
    JSON,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db.base import Base


class JobSeeker(Base):
    """
    Persisted job seeker profile.

    Scalar fields that are queried on get their own columns; the nested
    lists (education, work experience, ...) are stored as JSON. The
    specializations and preferred locations are child rows so they can be
    indexed.
    """

    __tablename__ = "job_seekers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    # Professional Information
    title = Column(String(100))
    bio = Column(Text)

    # Experience Information
    experience_total_years = Column(Float, index=True)
    current_position = Column(String(100))
    current_company = Column(String(100))
    is_currently_employed = Column(Boolean, default=True)

    education = Column(JSON, nullable=False, default=list)
    work_experience = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)
    certifications = Column(JSON, nullable=False, default=list)

    # everything in job preferences except the locations
    job_preferences = Column(JSON, nullable=False, default=dict)

    # Documents
    resume = Column(JSON)
    cover_letter = Column(JSON)
    portfolio = Column(JSON, nullable=False, default=list)

    profile_completion = Column(Integer, nullable=False, default=0, index=True)
    privacy_settings = Column(JSON, nullable=False, default=dict)

    # Statistics, maintained by other services
    profile_views = Column(Integer, nullable=False, default=0)
    applications_submitted = Column(Integer, nullable=False, default=0)
    interviews_scheduled = Column(Integer, nullable=False, default=0)
    jobs_offered = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="job_seeker", single_parent=True)
    specialization_rows = relationship(
        "JobSeekerSpecialization",
        cascade="all, delete-orphan",
        order_by="JobSeekerSpecialization.position",
        lazy="selectin",
    )
    location_rows = relationship(
        "JobSeekerLocation",
        cascade="all, delete-orphan",
        order_by="JobSeekerLocation.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<JobSeeker user_id={self.user_id} completion={self.profile_completion}>"


class JobSeekerSpecialization(Base):
    __tablename__ = "job_seeker_specializations"

    id = Column(Integer, primary_key=True)
    job_seeker_id = Column(
        Integer, ForeignKey("job_seekers.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(50), nullable=False, index=True)


class JobSeekerLocation(Base):
    __tablename__ = "job_seeker_preferred_locations"

    id = Column(Integer, primary_key=True)
    job_seeker_id = Column(
        Integer, ForeignKey("job_seekers.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)
    city = Column(String(50), nullable=False)
    state = Column(String(50), nullable=False)
    country = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_preferred_location_city", city),
        Index("idx_preferred_location_state", state),
    )
