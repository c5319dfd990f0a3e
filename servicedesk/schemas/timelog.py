import datetime as dt

from pydantic import Field

from servicedesk.schemas._base import WireModel


class TimeLog(WireModel):
    id: str
    project_id: str | None = None
    project_title: str | None = None
    task_id: str | None = None
    task_name: str | None = None
    employee_id: str | None = None
    employee_name: str | None = None
    hours: float
    note: str | None = None
    approval_status: str | None = None
    logged_at: dt.datetime | None = None


class TimeLogCreate(WireModel):
    project_id: str
    task_id: str | None = None
    employee_id: str
    hours: float = Field(gt=0, le=24)
    note: str | None = None
    logged_at: dt.datetime | None = None


class TimeLogReject(WireModel):
    reason: str


class EmployeeSummary(WireModel):
    employee_id: str
    employee_name: str | None = None
    total_hours: float = 0.0
    hourly_rate: float = 0.0
    total_earnings: float = 0.0


class DailyHours(WireModel):
    day: str
    hours: float = 0.0


class ProjectHours(WireModel):
    project_id: str
    project_title: str | None = None
    task_count: int = 0
    total_hours: float = 0.0


class WeeklySummary(WireModel):
    daily_hours: list[DailyHours] = []
    project_breakdown: list[ProjectHours] = []
