import datetime as dt
from dataclasses import dataclass

from servicedesk.api.appointments import update_admin_appointment_status
from servicedesk.api.client import ApiClient
from servicedesk.api.employees import list_employees
from servicedesk.api.projects import approve_project, create_admin_task, get_admin_project
from servicedesk.core.config import settings
from servicedesk.core.errors import ApiError, ApprovalBlocked, AssignmentError
from servicedesk.core.logging import logger
from servicedesk.schemas.admin import Employee
from servicedesk.schemas.project import (
    ApproveProjectPayload,
    CreateTaskPayload,
    ProjectDetails,
    ProjectStatus,
    ProjectTask,
    TaskAssignment,
)


@dataclass
class TaskPlan:
    assignee_id: str | None = None
    scheduled_start: dt.datetime | None = None
    scheduled_end: dt.datetime | None = None


def _check_window(start: dt.datetime | None, end: dt.datetime | None, what: str) -> None:
    if start is not None and end is not None and end < start:
        raise AssignmentError(f"{what} ends before it starts")


class ApprovalPanel:
    """Approve-and-assign form state for a project awaiting review.

    Every task needs an assignee from the employee roster before the
    approval can be submitted. Submission sends the approved window and
    all per-task assignments in one call.
    """

    def __init__(self, project: ProjectDetails, roster: list[Employee]):
        self.project = project
        self.roster: dict[str, Employee] = {e.id: e for e in roster}
        self.approved_start: dt.datetime | None = None
        self.approved_end: dt.datetime | None = None
        self.plans: dict[str, TaskPlan] = {}
        self.reset()

    @classmethod
    def load(cls, client: ApiClient, project_id: str) -> "ApprovalPanel":
        project = get_admin_project(client, project_id)
        roster = list_employees(client)
        return cls(project, roster)

    def reset(self) -> None:
        """Start over from the project snapshot's current values."""
        self.approved_start = self.project.approved_start
        self.approved_end = self.project.approved_end
        self.plans = {
            t.task_id: TaskPlan(t.assignee_id, t.scheduled_start, t.scheduled_end) for t in self.project.tasks
        }

    def _plan(self, task_id: str) -> TaskPlan:
        plan = self.plans.get(task_id)
        if plan is None:
            raise AssignmentError(f"Task {task_id} is not part of project {self.project.project_id}")
        return plan

    def assign(self, task_id: str, employee_id: str) -> None:
        plan = self._plan(task_id)
        if employee_id not in self.roster:
            raise AssignmentError(f"Employee {employee_id} is not on the roster")
        plan.assignee_id = employee_id

    def unassign(self, task_id: str) -> None:
        self._plan(task_id).assignee_id = None

    def schedule(self, task_id: str, start: dt.datetime | None, end: dt.datetime | None) -> None:
        plan = self._plan(task_id)
        _check_window(start, end, "Task schedule")
        plan.scheduled_start = start
        plan.scheduled_end = end

    def set_window(self, start: dt.datetime | None, end: dt.datetime | None) -> None:
        _check_window(start, end, "Approved window")
        self.approved_start = start
        self.approved_end = end

    @property
    def is_pending(self) -> bool:
        return self.project.status == ProjectStatus.pending_review

    def missing_assignees(self) -> list[str]:
        return [t.task_id for t in self.project.tasks if not self.plans[t.task_id].assignee_id]

    @property
    def can_submit(self) -> bool:
        return self.is_pending and not self.missing_assignees()

    def payload(self) -> ApproveProjectPayload:
        return ApproveProjectPayload(
            approved_start=self.approved_start,
            approved_end=self.approved_end,
            tasks=[
                TaskAssignment(
                    task_id=t.task_id,
                    assignee_id=self.plans[t.task_id].assignee_id,
                    scheduled_start=self.plans[t.task_id].scheduled_start,
                    scheduled_end=self.plans[t.task_id].scheduled_end,
                )
                for t in self.project.tasks
            ],
        )

    def submit(self, client: ApiClient) -> ProjectDetails:
        project_id = self.project.project_id
        if not self.is_pending:
            raise ApprovalBlocked(f"Project {project_id} is {self.project.status.value}, not PendingReview")
        missing = self.missing_assignees()
        if missing:
            raise ApprovalBlocked("Every task needs an assignee before approval", missing)

        approve_project(client, project_id, self.payload())
        logger.info("project_approved", project_id=project_id, tasks=len(self.project.tasks))

        if self.project.appointment_id:
            try:
                update_admin_appointment_status(
                    client,
                    self.project.appointment_id,
                    settings.APPOINTMENT_APPROVED_STATUS,
                    f"Project {project_id} approved",
                )
            except ApiError as e:
                logger.warning(
                    "appointment_status_update_failed",
                    project_id=project_id,
                    appointment_id=self.project.appointment_id,
                    error=str(e),
                )

        self.project = get_admin_project(client, project_id)
        self.reset()
        return self.project

    def add_task(self, client: ApiClient, draft: CreateTaskPayload) -> ProjectTask:
        if not draft.title.strip() or not draft.service_type.strip():
            raise AssignmentError("A task needs a title and a service type")
        created = create_admin_task(client, self.project.project_id, draft)
        self.project = get_admin_project(client, self.project.project_id)
        self.reset()
        logger.info("project_task_added", project_id=self.project.project_id, task_id=created.task_id)
        return created
