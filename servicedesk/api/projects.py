from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.schemas.project import (
    ApproveProjectPayload,
    CreateTaskPayload,
    ProjectDetails,
    ProjectSummary,
    ProjectTask,
    TaskStatus,
    TaskStatusUpdate,
)


def _base() -> str:
    return settings.project_base_url


def list_admin_projects(client: ApiClient, status: str | None = None) -> list[ProjectSummary]:
    data = client.get("/api/admin/projects", params={"status": status}, base_url=_base())
    return [ProjectSummary.model_validate(p) for p in data or []]


def get_admin_project(client: ApiClient, project_id: str) -> ProjectDetails:
    return ProjectDetails.model_validate(client.get(f"/api/admin/projects/{project_id}", base_url=_base()))


def approve_project(client: ApiClient, project_id: str, payload: ApproveProjectPayload) -> None:
    client.post(f"/api/admin/projects/{project_id}/approve", json=payload.to_wire(), base_url=_base())


def create_admin_task(client: ApiClient, project_id: str, payload: CreateTaskPayload) -> ProjectTask:
    data = client.post(f"/api/admin/projects/{project_id}/tasks", json=payload.to_wire(), base_url=_base())
    return ProjectTask.model_validate(data)


def fetch_customer_projects(client: ApiClient) -> list[ProjectSummary]:
    data = client.get("/api/projects/mine", base_url=_base())
    return [ProjectSummary.model_validate(p) for p in data or []]


def get_project_details(client: ApiClient, project_id: str) -> ProjectDetails:
    return ProjectDetails.model_validate(client.get(f"/api/projects/{project_id}", base_url=_base()))


def cancel_project(client: ApiClient, project_id: str) -> None:
    client.post(f"/api/projects/{project_id}/cancel", base_url=_base())


def fetch_assigned_tasks(client: ApiClient) -> list[ProjectTask]:
    data = client.get("/api/tasks/assigned", base_url=_base())
    return [ProjectTask.model_validate(t) for t in data or []]


def update_task_status(client: ApiClient, task_id: str, status: TaskStatus, note: str | None = None) -> None:
    body = TaskStatusUpdate(status=status, note=note).model_dump(mode="json", by_alias=True)
    client.patch(f"/api/tasks/{task_id}/status", json=body, base_url=_base())
