import datetime as dt
import threading
from typing import Callable

import requests
import structlog
from pydantic import ValidationError

from servicedesk.api.client import ApiClient
from servicedesk.api.progress import (
    FileInput,
    get_project_messages,
    get_project_messages_before,
    open_project_stream,
    post_status_message,
    upload_and_create_message,
)
from servicedesk.core.config import settings
from servicedesk.core.errors import ApiError
from servicedesk.core.logging import logger
from servicedesk.schemas.progress import CreateStatusRequest, EventCategory, ProjectMessage
from servicedesk.services.stream import SseEvent, iter_events

_EPOCH = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def _ts(m: ProjectMessage) -> dt.datetime:
    v = m.sort_key
    if v is None:
        return _EPOCH
    if v.tzinfo is None:
        return v.replace(tzinfo=dt.timezone.utc)
    return v


def newest_first(messages: list[ProjectMessage]) -> list[ProjectMessage]:
    return sorted(messages, key=_ts, reverse=True)


class ProgressFeed:
    """Newest-first message feed for one project.

    History comes from one REST fetch; live messages come from the
    project's SSE stream, read on a background thread and prepended as they
    arrive. When the stream errors or ends the feed goes offline and keeps
    what it already has. There is no reconnect.
    """

    def __init__(
        self,
        client: ApiClient,
        project_id: str,
        on_message: Callable[[ProjectMessage], None] | None = None,
        on_status: Callable[[bool], None] | None = None,
    ):
        self.client = client
        self.project_id = project_id
        self.on_message = on_message
        self.on_status = on_status
        self.error: str | None = None
        self.has_more = True

        self._lock = threading.Lock()
        self._messages: list[ProjectMessage] = []
        self._ids: set[str] = set()
        self._live = False
        self._closed = False
        self._response: requests.Response | None = None
        self._thread: threading.Thread | None = None

    # -- state

    @property
    def messages(self) -> list[ProjectMessage]:
        with self._lock:
            return list(self._messages)

    @property
    def live(self) -> bool:
        return self._live

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    # -- lifecycle

    def open(self, listen: bool = True) -> "ProgressFeed":
        """Fetch history, then subscribe to the stream.

        A failed history fetch raises ApiError. A stream that cannot be
        opened leaves the feed offline with its history loaded.
        """
        history = get_project_messages(self.client, self.project_id)
        if self._closed:
            return self
        self._merge(history)
        logger.info("feed_history_loaded", project_id=self.project_id, count=len(history))

        try:
            resp = open_project_stream(self.client, self.project_id)
        except ApiError as e:
            self._go_offline(str(e))
            return self

        if self._closed:
            resp.close()
            return self

        self._response = resp
        self._set_live(True)
        if listen:
            self._thread = threading.Thread(
                target=self._listen,
                args=(resp,),
                name=f"progress-feed-{self.project_id}",
                daemon=True,
            )
            self._thread.start()
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._set_live(False)
        resp, self._response = self._response, None
        if resp is not None:
            resp.close()
        t = self._thread
        if t is not None and t is not threading.current_thread():
            t.join(timeout=1.0)
        logger.info("feed_closed", project_id=self.project_id)

    def __enter__(self) -> "ProgressFeed":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _listen(self, resp: requests.Response) -> None:
        structlog.contextvars.bind_contextvars(feed_thread=threading.current_thread().name)
        reason = "stream closed"
        try:
            for event in iter_events(resp.iter_lines()):
                if self._closed:
                    return
                self.handle_event(event)
        except Exception as e:
            if self._closed:
                return
            logger.exception("feed_stream_failed", project_id=self.project_id, error=str(e))
            reason = str(e) or reason
        finally:
            if not self._closed:
                self._go_offline(reason)

    def _set_live(self, live: bool) -> None:
        changed = self._live != live
        self._live = live
        if changed and self.on_status is not None:
            self.on_status(live)

    def _go_offline(self, reason: str) -> None:
        self.error = reason
        self._set_live(False)
        logger.warning("feed_offline", project_id=self.project_id, reason=reason)

    # -- merging

    def handle_event(self, event: SseEvent) -> ProjectMessage | None:
        """Apply one stream event. Returns the message if it was added."""
        if self._closed:
            return None
        if event.type == "connected":
            logger.info("feed_stream_connected", project_id=self.project_id, data=event.data)
            return None
        if event.type != "message":
            logger.debug("feed_event_ignored", project_id=self.project_id, type=event.type)
            return None
        try:
            msg = ProjectMessage.model_validate_json(event.data)
        except ValidationError as e:
            logger.warning("feed_event_invalid", project_id=self.project_id, error=str(e))
            return None
        if self._prepend(msg):
            return msg
        return None

    def _prepend(self, msg: ProjectMessage) -> bool:
        with self._lock:
            if msg.id in self._ids:
                return False
            self._ids.add(msg.id)
            self._messages.insert(0, msg)
        if self.on_message is not None:
            self.on_message(msg)
        return True

    def _merge(self, history: list[ProjectMessage]) -> int:
        # unseen history goes on top, newest first; messages already shown keep their order
        unseen = []
        with self._lock:
            for m in newest_first(history):
                if m.id in self._ids:
                    continue
                self._ids.add(m.id)
                unseen.append(m)
            self._messages = unseen + self._messages
        return len(unseen)

    def refresh(self) -> int:
        """Re-fetch history and put anything not seen yet on top.

        Messages already in the feed are not reordered.
        """
        return self._merge(get_project_messages(self.client, self.project_id))

    def load_older(self, size: int | None = None) -> int:
        size = size or settings.MESSAGES_PAGE_SIZE
        with self._lock:
            oldest = self._messages[-1] if self._messages else None
        if oldest is None or oldest.sort_key is None:
            # nothing to anchor on
            self.has_more = False
            return 0
        page = get_project_messages_before(self.client, self.project_id, oldest.sort_key.isoformat(), size)
        self.has_more = page.has_next
        added = 0
        with self._lock:
            for m in newest_first(page.content):
                if m.id in self._ids:
                    continue
                self._ids.add(m.id)
                self._messages.append(m)
                added += 1
        return added

    # -- posting

    def post_update(
        self,
        message: str,
        category: EventCategory | None = None,
        file: FileInput | None = None,
    ) -> ProjectMessage:
        """Post a progress update and put it at the top of the feed.

        Without a file this is a plain JSON call; with one it is a
        multipart upload.
        """
        if not message.strip() and file is None:
            raise ValueError("Write an update or attach a file")
        if file is None:
            created = post_status_message(
                self.client, self.project_id, CreateStatusRequest(message=message, category=category)
            )
        else:
            created = upload_and_create_message(self.client, self.project_id, file, message, category)
        self._prepend(created)
        logger.info(
            "feed_update_posted",
            project_id=self.project_id,
            message_id=created.id,
            attachment=file is not None,
        )
        return created
