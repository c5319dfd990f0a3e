import datetime as dt

from jose import jwt

from servicedesk.api.auth import accept_oauth_callback, login, logout, oauth_login_url, refresh
from servicedesk.core.security import AuthSession, Role, parse_role

from helpers import make_response


def _token(**claims):
    return jwt.encode(claims, "test-secret", algorithm="HS256")


def test_role_from_claims():
    s = AuthSession(_token(sub="a@b.c", role="ROLE_ADMIN"))
    assert s.role == Role.admin
    assert s.has_role(Role.admin, Role.employee)
    assert not s.has_role(Role.customer)


def test_role_from_roles_list():
    assert AuthSession(_token(sub="x", roles=["EMPLOYEE"])).role == Role.employee


def test_garbage_token_has_no_claims():
    s = AuthSession("not-a-jwt")
    assert s.claims == {}
    assert s.role is None
    assert not s.is_expired()


def test_expiry():
    now = dt.datetime(2025, 3, 1, 12, 0, tzinfo=dt.timezone.utc)
    s = AuthSession(_token(sub="x", exp=int(now.timestamp()) + 60))
    assert not s.is_expired(now)
    assert s.is_expired(now + dt.timedelta(minutes=2))


def test_parse_role():
    assert parse_role("customer") == Role.customer
    assert parse_role("mechanic") is None
    assert parse_role(None) is None


def test_login_stores_tokens_and_user(client, http):
    client.session.clear()
    body = {
        "token": _token(sub="sam@example.com", role="CUSTOMER"),
        "refreshToken": "r-1",
        "type": "Bearer",
        "user": {"id": 4, "userName": "sam", "email": "sam@example.com", "role": "CUSTOMER"},
    }
    http.add("POST", "/api/auth/login", make_response(200, body))

    out = login(client, "sam@example.com", "pw")

    assert http.calls[0]["json"] == {"email": "sam@example.com", "password": "pw"}
    assert out.user.user_name == "sam"
    assert client.session.token == body["token"]
    assert client.session.refresh_token == "r-1"
    assert client.session.issued_at is not None
    assert client.session.role == Role.customer


def test_refresh_swaps_token(client, http):
    client.session.set_token("old", "r-1")
    http.add("POST", "/api/auth/refresh", make_response(200, {"token": "new", "refreshToken": "r-2"}))

    assert refresh(client) == "new"
    assert http.calls[0]["json"] == {"refreshToken": "r-1"}
    assert client.session.refresh_token == "r-2"


def test_logout_clears_even_when_backend_fails(client, http):
    client.session.set_token("t", "r-1")
    http.add("POST", "/api/auth/logout", make_response(500, {"error": "nope"}))

    logout(client)

    assert not client.session.is_authenticated
    assert client.session.refresh_token is None


def test_oauth_helpers(client):
    url = oauth_login_url(client, "google", "http://app/oauth2/callback")
    assert url == "http://localhost:8080/oauth2/authorization/google?redirect_uri=http%3A%2F%2Fapp%2Foauth2%2Fcallback"
    accept_oauth_callback(client, "from-callback")
    assert client.session.token == "from-callback"
