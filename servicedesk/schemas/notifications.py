import datetime as dt

from servicedesk.schemas._base import WireModel


class Notification(WireModel):
    id: str
    type: str | None = None  # status|reminder|payment|system
    event_type: str | None = None
    title: str | None = None
    message: str = ""
    created_at: dt.datetime | None = None
    read: bool = False
    link: str | None = None
    customer_id: str | None = None
    project_id: str | None = None
    appointment_id: str | None = None

    @property
    def is_heartbeat(self) -> bool:
        kind = self.event_type or self.type
        return kind == "heartbeat" or self.message.strip().lower() == "keepalive"
