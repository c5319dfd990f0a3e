from urllib.parse import urlencode

from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.core.errors import ApiError
from servicedesk.core.logging import logger
from servicedesk.schemas.auth import LoginIn, LoginOut


def login(client: ApiClient, email: str, password: str) -> LoginOut:
    data = client.post("/api/auth/login", json=LoginIn(email=email, password=password).to_wire())
    out = LoginOut.model_validate(data)
    client.session.set_token(out.token, out.refresh_token)
    client.session.user = out.user.model_dump()
    logger.info("login_ok", user_id=out.user.id, role=out.user.role)
    return out


def register(client: ApiClient, payload: dict) -> dict | None:
    return client.post("/api/auth/register", json=payload)


def refresh(client: ApiClient) -> str:
    refresh_token = client.session.refresh_token
    if not refresh_token:
        raise ApiError("No refresh token found")
    data = client.post("/api/auth/refresh", json={"refreshToken": refresh_token})
    token = (data or {}).get("token") or (data or {}).get("accessToken")
    if not token:
        raise ApiError("Refresh response did not include a token")
    client.session.set_token(token, (data or {}).get("refreshToken"))
    return token


def logout(client: ApiClient) -> None:
    refresh_token = client.session.refresh_token
    if refresh_token:
        try:
            client.post("/api/auth/logout", json={"refreshToken": refresh_token})
        except ApiError as e:
            # local sign-out still happens
            logger.warning("logout_request_failed", error=str(e))
    client.session.clear()


def user_info(client: ApiClient) -> dict:
    data = client.get("/api/auth/user-info")
    client.session.user = data
    return data


def forgot_password(client: ApiClient, email: str) -> None:
    client.post("/api/auth/forgot-password", json={"email": email})


def reset_password(client: ApiClient, token: str, new_password: str) -> None:
    client.post("/api/auth/reset-password", json={"token": token, "newPassword": new_password})


def oauth_login_url(client: ApiClient, provider: str, redirect_uri: str | None = None) -> str:
    url = client.url(settings.OAUTH_PROVIDER_PATH.format(provider=provider))
    if redirect_uri:
        url = f"{url}?{urlencode({'redirect_uri': redirect_uri})}"
    return url


def accept_oauth_callback(client: ApiClient, token: str, refresh_token: str | None = None) -> None:
    client.session.set_token(token, refresh_token)
