from typing import Iterator

import requests
from pydantic import ValidationError

from servicedesk.api.client import ApiClient
from servicedesk.core.logging import logger
from servicedesk.schemas.notifications import Notification
from servicedesk.services.stream import iter_events


def list_notifications(client: ApiClient, user_id: int | str) -> list[Notification]:
    data = client.get(f"/api/notifications/{user_id}")
    return [Notification.model_validate(n) for n in data or []]


def mark_read(client: ApiClient, notification_id: str) -> None:
    client.post(f"/api/notifications/{notification_id}/read")


def mark_all_read(client: ApiClient, user_id: int | str) -> None:
    client.post(f"/api/notifications/{user_id}/read-all")


def unread_count(client: ApiClient, user_id: int | str) -> int:
    return int(client.get(f"/api/notifications/{user_id}/unread-count") or 0)


def open_notification_stream(client: ApiClient, user_id: int | str) -> requests.Response:
    return client.stream(f"/api/notifications/stream/{user_id}", params={"access_token": client.session.token})


def iter_notifications(resp: requests.Response) -> Iterator[Notification]:
    """Yield notifications from an open stream until it ends.

    Every event name is accepted. Heartbeats and keepalives are dropped, and
    so is anything that is not a notification object.
    """
    for event in iter_events(resp.iter_lines()):
        if event.type == "heartbeat":
            continue
        try:
            n = Notification.model_validate_json(event.data)
        except ValidationError as e:
            logger.warning("notification_event_invalid", type=event.type, error=str(e))
            continue
        if n.event_type is None and event.type != "message":
            n.event_type = event.type
        if n.is_heartbeat:
            continue
        yield n
