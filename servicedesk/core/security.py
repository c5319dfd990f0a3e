import datetime as dt
from enum import Enum
from typing import Any

from jose import jwt, JWTError

from servicedesk.core.config import settings
from servicedesk.core.logging import logger


class Role(str, Enum):
    customer = "CUSTOMER"
    employee = "EMPLOYEE"
    admin = "ADMIN"


def parse_role(value: Any) -> Role | None:
    if not value:
        return None
    s = str(value).strip().upper()
    if s.startswith("ROLE_"):
        s = s[len("ROLE_"):]
    try:
        return Role(s)
    except ValueError:
        return None


def decode_unverified(token: str) -> dict:
    # signature is checked by the backend; the client only reads claims
    return jwt.get_unverified_claims(token)


class AuthSession:
    """Holds the tokens for one signed-in user.

    Plays the part of the browser's local storage: the token and the time it
    was stored, plus the refresh token handed out at login.
    """

    def __init__(self, token: str | None = None, refresh_token: str | None = None):
        self.token: str | None = None
        self.refresh_token: str | None = None
        self.issued_at: dt.datetime | None = None
        self.user: dict | None = None
        if token is None:
            token = settings.STATIC_AUTH_TOKEN
        if token:
            self.set_token(token, refresh_token)

    def set_token(self, token: str, refresh_token: str | None = None) -> None:
        self.token = token
        self.issued_at = dt.datetime.now(dt.timezone.utc)
        if refresh_token is not None:
            self.refresh_token = refresh_token

    def clear(self) -> None:
        self.token = None
        self.refresh_token = None
        self.issued_at = None
        self.user = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def claims(self) -> dict:
        if not self.token:
            return {}
        try:
            return decode_unverified(self.token)
        except JWTError:
            logger.warning("token_claims_unreadable")
            return {}

    @property
    def role(self) -> Role | None:
        if self.user and self.user.get("role"):
            return parse_role(self.user["role"])
        claims = self.claims
        role = claims.get("role")
        if role is None and isinstance(claims.get("roles"), list) and claims["roles"]:
            role = claims["roles"][0]
        return parse_role(role)

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def is_expired(self, now: dt.datetime | None = None) -> bool:
        exp = self.claims.get("exp")
        if exp is None:
            return False
        now = now or dt.datetime.now(dt.timezone.utc)
        return int(now.timestamp()) >= int(exp)
