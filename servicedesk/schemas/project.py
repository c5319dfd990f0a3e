import datetime as dt
from enum import Enum

from servicedesk.schemas._base import WireModel


class ProjectStatus(str, Enum):
    pending_review = "PendingReview"
    approved = "Approved"
    in_progress = "InProgress"
    completed = "Completed"
    cancelled = "Cancelled"


class TaskStatus(str, Enum):
    pending = "Pending"
    requested = "Requested"
    accepted = "Accepted"
    in_progress = "InProgress"
    completed = "Completed"
    cancelled = "Cancelled"


class ProjectSummary(WireModel):
    project_id: str
    vehicle_id: str | None = None
    title: str
    status: ProjectStatus
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    requested_start: dt.datetime | None = None
    requested_end: dt.datetime | None = None
    approved_start: dt.datetime | None = None
    approved_end: dt.datetime | None = None


class ProjectTask(WireModel):
    task_id: str
    title: str
    service_type: str
    detail: str | None = None
    status: TaskStatus
    assignee_id: str | None = None
    estimate_hours: float | None = None
    scheduled_start: dt.datetime | None = None
    scheduled_end: dt.datetime | None = None
    appointment_id: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class ProjectActivity(WireModel):
    id: int
    task_id: str | None = None
    actor_id: str | None = None
    actor_role: str | None = None
    message: str
    created_at: dt.datetime | None = None


class ProjectDetails(ProjectSummary):
    customer_id: str | None = None
    description: str | None = None
    appointment_id: str | None = None
    appointment_snapshot: str | None = None
    tasks: list[ProjectTask] = []
    activity: list[ProjectActivity] = []

    def task(self, task_id: str) -> ProjectTask | None:
        for t in self.tasks:
            if t.task_id == task_id:
                return t
        return None


class TaskAssignment(WireModel):
    task_id: str
    assignee_id: str | None = None
    scheduled_start: dt.datetime | None = None
    scheduled_end: dt.datetime | None = None


class ApproveProjectPayload(WireModel):
    approved_start: dt.datetime | None = None
    approved_end: dt.datetime | None = None
    tasks: list[TaskAssignment]


class CreateTaskPayload(WireModel):
    title: str
    service_type: str
    detail: str | None = None
    scheduled_start: dt.datetime | None = None
    scheduled_end: dt.datetime | None = None


class TaskStatusUpdate(WireModel):
    status: TaskStatus
    note: str | None = None
