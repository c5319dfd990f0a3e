from servicedesk.api.client import ApiClient
from servicedesk.api.projects import get_admin_project, get_project_details, update_task_status
from servicedesk.core.errors import TransitionNotAllowed
from servicedesk.core.logging import logger
from servicedesk.schemas.project import ProjectDetails, ProjectTask, TaskStatus

TRANSITIONS: dict[TaskStatus, tuple[TaskStatus, ...]] = {
    TaskStatus.pending: (TaskStatus.requested, TaskStatus.cancelled),
    TaskStatus.requested: (TaskStatus.accepted, TaskStatus.cancelled),
    TaskStatus.accepted: (TaskStatus.in_progress, TaskStatus.cancelled),
    TaskStatus.in_progress: (TaskStatus.completed,),
    TaskStatus.completed: (),
    TaskStatus.cancelled: (),
}


def next_statuses(status: TaskStatus | str) -> tuple[TaskStatus, ...]:
    return TRANSITIONS[TaskStatus(status)]


def can_transition(current: TaskStatus | str, target: TaskStatus | str) -> bool:
    return TaskStatus(target) in next_statuses(current)


def is_terminal(status: TaskStatus | str) -> bool:
    return not next_statuses(status)


def change_task_status(
    client: ApiClient,
    project_id: str,
    task: ProjectTask,
    target: TaskStatus | str,
    note: str | None = None,
    admin: bool = False,
) -> ProjectDetails:
    """Move a task to `target` and return the refreshed project snapshot.

    Only the adjacency table is checked here; the backend stays the
    authority and may still reject the change, in which case ApiError
    propagates and nothing is refetched.
    """
    target = TaskStatus(target)
    if not can_transition(task.status, target):
        raise TransitionNotAllowed(task.status.value, target.value)

    update_task_status(client, task.task_id, target, note)
    logger.info(
        "task_status_changed",
        project_id=project_id,
        task_id=task.task_id,
        from_status=task.status.value,
        to_status=target.value,
    )
    if admin:
        return get_admin_project(client, project_id)
    return get_project_details(client, project_id)
