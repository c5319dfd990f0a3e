import pytest

from servicedesk.core.errors import ApiError, TransitionNotAllowed
from servicedesk.schemas.project import ProjectTask, TaskStatus
from servicedesk.services.task_workflow import TRANSITIONS, can_transition, change_task_status, is_terminal, next_statuses

from helpers import make_response, project, task


def test_accepted_offers_in_progress_and_cancel():
    assert set(next_statuses("Accepted")) == {TaskStatus.in_progress, TaskStatus.cancelled}


def test_offered_statuses_match_table():
    expected = {
        "Pending": {"Requested", "Cancelled"},
        "Requested": {"Accepted", "Cancelled"},
        "Accepted": {"InProgress", "Cancelled"},
        "InProgress": {"Completed"},
        "Completed": set(),
        "Cancelled": set(),
    }
    for status, targets in expected.items():
        assert {s.value for s in next_statuses(status)} == targets
    assert set(TRANSITIONS) == set(TaskStatus)


def test_terminal_states():
    assert is_terminal(TaskStatus.completed)
    assert is_terminal(TaskStatus.cancelled)
    assert not is_terminal(TaskStatus.in_progress)
    assert not can_transition("InProgress", "Cancelled")
    assert can_transition("Pending", "Requested")


def test_change_status_patches_then_refetches(client, http):
    http.add("PATCH", "/api/tasks/t1/status", make_response(204))
    http.add("GET", "/api/projects/p1", make_response(200, project("InProgress", [task("t1", "InProgress")])))
    t = ProjectTask.model_validate(task("t1", "Accepted"))

    snapshot = change_task_status(client, "p1", t, TaskStatus.in_progress, note="starting")

    patch = http.calls_to("PATCH", "/api/tasks/t1/status")[0]
    assert patch["json"] == {"status": "InProgress", "note": "starting"}
    assert snapshot.tasks[0].status == TaskStatus.in_progress
    assert len(http.calls_to("GET", "/api/projects/p1")) == 1


def test_disallowed_transition_makes_no_request(client, http):
    t = ProjectTask.model_validate(task("t1", "Completed"))
    with pytest.raises(TransitionNotAllowed):
        change_task_status(client, "p1", t, "InProgress")
    assert http.calls == []


def test_backend_rejection_skips_refetch(client, http):
    http.add("PATCH", "/api/tasks/t1/status", make_response(409, {"error": "Task is locked"}))
    t = ProjectTask.model_validate(task("t1", "Requested"))
    with pytest.raises(ApiError) as exc:
        change_task_status(client, "p1", t, "Accepted")
    assert exc.value.message == "Task is locked"
    assert exc.value.status_code == 409
    assert http.calls_to("GET", "/api/projects/p1") == []


def test_admin_refetch_uses_admin_endpoint(client, http):
    http.add("PATCH", "/api/tasks/t1/status", make_response(204))
    http.add("GET", "/api/admin/projects/p1", make_response(200, project("Approved", [task("t1", "Cancelled")])))
    t = ProjectTask.model_validate(task("t1", "Pending"))
    snapshot = change_task_status(client, "p1", t, "Cancelled", admin=True)
    assert snapshot.tasks[0].status == TaskStatus.cancelled
