import math
from typing import Any, Optional


def _json_safe(value: Any) -> Any:
    # NaN and infinities have no JSON spelling
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


class LifeMateException(Exception):
    """Base exception for application errors"""

    pass


class ValidationException(LifeMateException):
    """A single field failed one of its constraints"""

    def __init__(self, field: str, constraint: str, value: Any = None):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"{field}: failed '{constraint}' (got {value!r})")

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationException":
        """Report a pydantic parsing error (wrong type, bad date) like a constraint failure"""
        error = exc.errors()[0]
        field = ""
        for part in error.get("loc", ()):
            if isinstance(part, int):
                field += f"[{part}]"
            else:
                field = f"{field}.{part}" if field else str(part)
        return cls(field, error.get("type", "invalid"), error.get("input"))

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "constraint": self.constraint,
            "value": _json_safe(self.value),
        }


class DuplicateProfileException(LifeMateException):
    """A job seeker profile already exists for the user"""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Profile already exists for user {user_id}")


class EmailException(LifeMateException):
    """Base exception for email errors"""

    pass


class DeliveryException(EmailException):
    """The mail transport refused or failed to send a message"""

    def __init__(self, kind: str, recipient: str, cause: Optional[BaseException]):
        self.kind = kind
        self.recipient = recipient
        self.cause = cause
        super().__init__(f"Failed to deliver {kind} email to {recipient}: {cause}")


class DatabaseException(LifeMateException):
    """Base exception for database errors"""

    pass


class ConfigurationException(LifeMateException):
    """Base exception for configuration errors"""

    pass
