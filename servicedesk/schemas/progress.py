import datetime as dt
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from servicedesk.schemas._base import WireModel


class EventCategory(str, Enum):
    created = "CREATED"
    approved = "APPROVED"
    rejected = "REJECTED"
    completed = "COMPLETED"
    updated = "UPDATED"
    applied = "APPLIED"


@dataclass(frozen=True)
class Attachment:
    url: str
    filename: str | None = None
    content_type: str | None = None
    size: int | None = None

    @property
    def is_image(self) -> bool:
        return bool(self.content_type and self.content_type.startswith("image/"))


class ProjectMessage(WireModel):
    id: str
    project_id: str | None = None
    category: EventCategory = EventCategory.updated
    message: str = ""
    payload: str | None = None
    occurred_at: dt.datetime | None = None
    created_at: dt.datetime | None = None
    attachment_url: str | None = None
    attachment_content_type: str | None = None
    attachment_filename: str | None = None
    attachment_size: int | None = None

    @property
    def attachment(self) -> Attachment | None:
        if not self.attachment_url:
            return None
        return Attachment(
            url=self.attachment_url,
            filename=self.attachment_filename,
            content_type=self.attachment_content_type,
            size=self.attachment_size,
        )

    def payload_json(self) -> Any:
        if not self.payload:
            return None
        try:
            return json.loads(self.payload)
        except ValueError:
            return None

    @property
    def sort_key(self) -> dt.datetime | None:
        return self.occurred_at or self.created_at


class MessagePage(WireModel):
    content: list[ProjectMessage] = []
    has_next: bool = False


class CreateStatusRequest(WireModel):
    category: EventCategory | None = None
    message: str
    payload: str | None = None
    occurred_at: dt.datetime | None = None
    attachment_url: str | None = None
    attachment_content_type: str | None = None
    attachment_filename: str | None = None
    attachment_size: int | None = None


class StatusProject(WireModel):
    project_id: str
    title: str
    status: str
    vehicle_id: str | None = None
    customer_id: str | None = None
    description: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class LastMessage(WireModel):
    message: str
    occurred_at: dt.datetime | None = None
    category: EventCategory | None = None


class ProjectStatusSummary(WireModel):
    project: StatusProject
    last_message: LastMessage | None = None
