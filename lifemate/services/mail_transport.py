import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import make_msgid
from typing import Optional, Protocol

from ..core.config import Settings
from ..schemas.notification import RenderedEmail


class MailTransport(Protocol):
    def send(self, message: RenderedEmail) -> str:
        """Deliver the message and return its message id. Raise on failure."""
        ...


class SMTPTransport:
    """Sends one message per SMTP connection."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SMTPTransport":
        return cls(
            host=settings.SMTP_SERVER,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT,
        )

    def build_message(self, message: RenderedEmail) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg["From"] = message.sender
        msg["To"] = message.recipient
        msg["Subject"] = message.subject
        msg["Message-ID"] = make_msgid()
        msg.attach(MIMEText(message.html, "html"))
        return msg

    def send(self, message: RenderedEmail) -> str:
        msg = self.build_message(message)

        connect_kwargs = {}
        if self.timeout is not None:
            connect_kwargs["timeout"] = self.timeout

        with smtplib.SMTP(self.host, self.port, **connect_kwargs) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

        return msg["Message-ID"]
