import datetime as dt

from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.schemas.admin import AdminAppointment, AppointmentStatusUpdate


def _iso(v: dt.datetime | str | None) -> str | None:
    if isinstance(v, dt.datetime):
        return v.isoformat()
    return v


def list_admin_appointments(
    client: ApiClient,
    status: str | None = None,
    start: dt.datetime | str | None = None,
    end: dt.datetime | str | None = None,
) -> list[AdminAppointment]:
    params = {"status": status, "from": _iso(start), "to": _iso(end)}
    data = client.get("/api/admin/appointments", params=params, base_url=settings.project_base_url)
    return [AdminAppointment.model_validate(a) for a in data or []]


def get_admin_appointment(client: ApiClient, appointment_id: str) -> AdminAppointment:
    data = client.get(f"/api/admin/appointments/{appointment_id}", base_url=settings.project_base_url)
    return AdminAppointment.model_validate(data)


def update_admin_appointment_status(
    client: ApiClient, appointment_id: str, status: str, admin_note: str | None = None
) -> None:
    body = AppointmentStatusUpdate(status=status, admin_note=admin_note).model_dump(by_alias=True)
    client.patch(
        f"/api/admin/appointments/{appointment_id}/status", json=body, base_url=settings.project_base_url
    )


def check_availability(client: ApiClient, start: dt.datetime | str, end: dt.datetime | str) -> bool:
    data = client.get("/api/appointments/availability", params={"start": _iso(start), "end": _iso(end)})
    if isinstance(data, str):
        return data.strip().lower() == "true"
    return bool(data)
