import datetime as dt
from enum import Enum

from servicedesk.schemas._base import WireModel


class Employee(WireModel):
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    status: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.email or self.id


class AppointmentStatus(str, Enum):
    pending = "PENDING"
    confirmed = "CONFIRMED"
    in_progress = "IN_PROGRESS"
    completed = "COMPLETED"
    cancelled = "CANCELLED"


class AdminAppointment(WireModel):
    id: str
    customer_id: str | None = None
    vehicle_id: str | None = None
    service_type: str | None = None
    status: str
    requested_start: dt.datetime | None = None
    requested_end: dt.datetime | None = None
    admin_note: str | None = None
    created_at: dt.datetime | None = None


class AppointmentStatusUpdate(WireModel):
    status: str
    admin_note: str | None = None
