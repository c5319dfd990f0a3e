import pytest

from servicedesk.api.client import ApiClient
from servicedesk.core.security import AuthSession

from helpers import FakeHttp


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(http):
    return ApiClient(base_url="http://localhost:8080", session=AuthSession("tok-123"), http=http)
