from servicedesk.schemas._base import WireModel


class LoginIn(WireModel):
    email: str
    password: str


class AuthUser(WireModel):
    id: int
    user_name: str | None = None
    email: str
    role: str


class LoginOut(WireModel):
    token: str
    refresh_token: str | None = None
    type: str = "Bearer"
    user: AuthUser
