from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status
from ..core.config import get_settings
import pytz

settings = get_settings()
IST = pytz.timezone("Asia/Kolkata")

ACCESS_TOKEN_TYPE = "access"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthService:
    """
    Bearer token handling for the profile API. Tokens are issued by the
    login flow of the accounts service; this side signs them only for tests
    and local tooling, and resolves incoming tokens to a user id.
    """

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Sign a short-lived access token carrying ``data``."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        claims = {
            **data,
            "type": ACCESS_TOKEN_TYPE,
            "exp": datetime.now(IST) + expires_delta,
        }
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> dict:
        try:
            payload = jwt.decode(
                token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
            )
        except JWTError:
            raise _unauthorized("Could not validate credentials")
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise _unauthorized("Invalid access token")
        return payload

    @classmethod
    def user_id_from_token(cls, token: str) -> int:
        """The ``sub`` claim of a valid access token, as a user id."""
        subject = cls.verify_token(token).get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise _unauthorized("Could not validate credentials")
