from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import pytz
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from ..core.config import EmailSettings
from ..core.constants import (
    APPLICATION_NOTIFICATION_TEMPLATE,
    DISPLAY_DATE_FORMAT,
    INTERVIEW_INVITATION_TEMPLATE,
    PASSWORD_RESET_LINK_TTL_HOURS,
    PASSWORD_RESET_TEMPLATE,
    ROLE_JOBSEEKER,
    USER_ROLES,
    VERIFICATION_LINK_TTL_HOURS,
    VERIFICATION_TEMPLATE,
    WELCOME_TEMPLATE,
)
from ..schemas.notification import (
    DeliveryResult,
    InterviewDetails,
    NotificationKind,
    RenderedEmail,
)
from ..utils.constraints import OneOf, Required
from ..utils.exceptions import DeliveryException, ValidationException
from .mail_transport import MailTransport

# Setup Jinja2 environment
template_dir = Path(__file__).parent.parent / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(str(template_dir)),
    autoescape=select_autoescape(["html"]),
)

IST = pytz.timezone("Asia/Kolkata")

_required = Required()
_valid_role = OneOf(USER_ROLES)


def _require(**fields: Any) -> None:
    # checked before rendering so nothing half-built reaches the transport
    for name, value in fields.items():
        if not _required(value):
            raise ValidationException(name, _required.describe(), value)


class EmailService:
    """
    Renders and sends the transactional emails.

    ``render_*`` methods are pure: they only read the injected config and
    their arguments. ``send_*`` methods render, then hand the message to the
    transport exactly once. Failures are logged and raised as
    ``DeliveryException``; retrying is up to the caller.
    """

    def __init__(
        self,
        config: EmailSettings,
        transport: MailTransport,
        env: Environment = jinja_env,
    ):
        self.config = config
        self.transport = transport
        self.env = env

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _link(self, *parts: str) -> str:
        path = "/".join(quote(str(part), safe="") for part in parts)
        return f"{self.config.base_url.rstrip('/')}/{path}"

    def _render(
        self,
        kind: NotificationKind,
        template_name: str,
        recipient: str,
        subject: str,
        context: Dict[str, Any],
    ) -> RenderedEmail:
        template = self.env.get_template(template_name)
        html = template.render(
            brand_name=self.config.brand_name,
            year=datetime.now(IST).year,
            **context,
        )
        return RenderedEmail(
            kind=kind,
            sender=self.config.sender,
            recipient=recipient,
            subject=subject,
            html=html,
        )

    def dispatch(self, message: RenderedEmail) -> DeliveryResult:
        """Submit a rendered message to the transport."""
        kind = message.kind.value
        try:
            message_id = self.transport.send(message)
        except Exception as e:
            logger.error(f"Error sending {kind} email to {message.recipient}: {str(e)}")
            raise DeliveryException(kind, message.recipient, e) from e

        logger.info(
            f"{kind} email sent successfully to {message.recipient}: {message_id}"
        )
        return DeliveryResult(
            kind=message.kind, recipient=message.recipient, message_id=message_id
        )

    # ------------------------------------------------------------------
    # email verification
    # ------------------------------------------------------------------
    def render_verification_email(
        self, email: str, token: str, first_name: str
    ) -> RenderedEmail:
        _require(email=email, token=token, first_name=first_name)
        return self._render(
            NotificationKind.EMAIL_VERIFICATION,
            VERIFICATION_TEMPLATE,
            email,
            f"Verify Your Email Address - {self.config.brand_name}",
            {
                "first_name": first_name,
                "verification_url": self._link("verify-email", token),
                "expires_in_hours": VERIFICATION_LINK_TTL_HOURS,
            },
        )

    def send_verification_email(
        self, email: str, token: str, first_name: str
    ) -> DeliveryResult:
        return self.dispatch(self.render_verification_email(email, token, first_name))

    # ------------------------------------------------------------------
    # password reset
    # ------------------------------------------------------------------
    def render_password_reset_email(
        self, email: str, token: str, first_name: str
    ) -> RenderedEmail:
        _require(email=email, token=token, first_name=first_name)
        return self._render(
            NotificationKind.PASSWORD_RESET,
            PASSWORD_RESET_TEMPLATE,
            email,
            f"Reset Your Password - {self.config.brand_name}",
            {
                "first_name": first_name,
                "reset_url": self._link("reset-password", token),
                "expires_in_hours": PASSWORD_RESET_LINK_TTL_HOURS,
            },
        )

    def send_password_reset_email(
        self, email: str, token: str, first_name: str
    ) -> DeliveryResult:
        return self.dispatch(self.render_password_reset_email(email, token, first_name))

    # ------------------------------------------------------------------
    # application received (to the employer)
    # ------------------------------------------------------------------
    def render_application_notification_email(
        self,
        employer_email: str,
        employer_name: str,
        job_title: str,
        candidate_name: str,
        candidate_email: str,
        applied_on: Optional[date] = None,
    ) -> RenderedEmail:
        _require(
            employer_email=employer_email,
            employer_name=employer_name,
            job_title=job_title,
            candidate_name=candidate_name,
            candidate_email=candidate_email,
        )
        applied_on = applied_on or datetime.now(IST).date()
        return self._render(
            NotificationKind.APPLICATION_NOTIFICATION,
            APPLICATION_NOTIFICATION_TEMPLATE,
            employer_email,
            f"New Application for {job_title} - {self.config.brand_name}",
            {
                "employer_name": employer_name,
                "job_title": job_title,
                "candidate_name": candidate_name,
                "candidate_email": candidate_email,
                "applied_on": applied_on.strftime(DISPLAY_DATE_FORMAT),
                "applications_url": self._link("employer", "applications"),
            },
        )

    def send_application_notification_email(
        self,
        employer_email: str,
        employer_name: str,
        job_title: str,
        candidate_name: str,
        candidate_email: str,
        applied_on: Optional[date] = None,
    ) -> DeliveryResult:
        return self.dispatch(
            self.render_application_notification_email(
                employer_email,
                employer_name,
                job_title,
                candidate_name,
                candidate_email,
                applied_on,
            )
        )

    # ------------------------------------------------------------------
    # interview invitation (to the candidate)
    # ------------------------------------------------------------------
    def render_interview_invitation_email(
        self,
        candidate_email: str,
        candidate_name: str,
        job_title: str,
        company_name: str,
        interview_details: Union[InterviewDetails, Dict[str, Any]],
    ) -> RenderedEmail:
        _require(
            candidate_email=candidate_email,
            candidate_name=candidate_name,
            job_title=job_title,
            company_name=company_name,
            interview_details=interview_details,
        )
        if not isinstance(interview_details, InterviewDetails):
            try:
                interview_details = InterviewDetails.model_validate(interview_details)
            except PydanticValidationError as e:
                error = ValidationException.from_pydantic(e)
                error.field = f"interview_details.{error.field}"
                raise error from e
        _require(time=interview_details.time, type=interview_details.type)

        return self._render(
            NotificationKind.INTERVIEW_INVITATION,
            INTERVIEW_INVITATION_TEMPLATE,
            candidate_email,
            f"Interview Invitation for {job_title} - {company_name}",
            {
                "candidate_name": candidate_name,
                "job_title": job_title,
                "company_name": company_name,
                "interview_date": interview_details.date.strftime(DISPLAY_DATE_FORMAT),
                "interview": interview_details,
                "applications_url": self._link("jobseeker", "applications"),
            },
        )

    def send_interview_invitation_email(
        self,
        candidate_email: str,
        candidate_name: str,
        job_title: str,
        company_name: str,
        interview_details: Union[InterviewDetails, Dict[str, Any]],
    ) -> DeliveryResult:
        return self.dispatch(
            self.render_interview_invitation_email(
                candidate_email, candidate_name, job_title, company_name, interview_details
            )
        )

    # ------------------------------------------------------------------
    # welcome
    # ------------------------------------------------------------------
    def render_welcome_email(self, email: str, first_name: str, role: str) -> RenderedEmail:
        _require(email=email, first_name=first_name, role=role)
        if not _valid_role(role):
            raise ValidationException("role", _valid_role.describe(), role)

        return self._render(
            NotificationKind.WELCOME,
            WELCOME_TEMPLATE,
            email,
            f"Welcome to {self.config.brand_name} - "
            "Your Healthcare Career Journey Starts Here!",
            {
                "first_name": first_name,
                "is_jobseeker": role == ROLE_JOBSEEKER,
                "dashboard_url": self._link(role, "dashboard"),
            },
        )

    def send_welcome_email(self, email: str, first_name: str, role: str) -> DeliveryResult:
        return self.dispatch(self.render_welcome_email(email, first_name, role))
