from pydantic import BaseModel
from typing import Optional
import datetime
from enum import Enum


class NotificationKind(str, Enum):
    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"
    APPLICATION_NOTIFICATION = "application_notification"
    INTERVIEW_INVITATION = "interview_invitation"
    WELCOME = "welcome"


class InterviewDetails(BaseModel):
    date: datetime.date
    time: str
    type: str
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class RenderedEmail(BaseModel):
    kind: NotificationKind
    sender: str
    recipient: str
    subject: str
    html: str


class DeliveryResult(BaseModel):
    kind: NotificationKind
    recipient: str
    message_id: str
    accepted: bool = True
