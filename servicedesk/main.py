from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.core.logging import configure_logging, logger
from servicedesk.core.security import AuthSession


def create_client(token: str | None = None, base_url: str | None = None) -> ApiClient:
    configure_logging(settings.ENV)
    client = ApiClient(base_url=base_url, session=AuthSession(token))
    logger.info("client_ready", env=settings.ENV, base_url=client.base_url, authenticated=client.session.is_authenticated)
    return client
