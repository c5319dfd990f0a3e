from servicedesk.api.client import ApiClient
from servicedesk.schemas.timelog import EmployeeSummary, TimeLog, TimeLogCreate, TimeLogReject, WeeklySummary


def _logs(data) -> list[TimeLog]:
    return [TimeLog.model_validate(t) for t in data or []]


def list_my_time_logs(client: ApiClient, employee_id: str) -> list[TimeLog]:
    return _logs(client.get(f"/api/time-logs/employee/{employee_id}"))


def list_project_time_logs(client: ApiClient, project_id: str) -> list[TimeLog]:
    return _logs(client.get(f"/api/time-logs/project/{project_id}"))


def list_task_time_logs(client: ApiClient, task_id: str) -> list[TimeLog]:
    return _logs(client.get(f"/api/time-logs/task/{task_id}"))


def list_employee_project_time_logs(client: ApiClient, employee_id: str, project_id: str) -> list[TimeLog]:
    return _logs(client.get(f"/api/time-logs/employee/{employee_id}/project/{project_id}"))


def get_time_log(client: ApiClient, time_log_id: str) -> TimeLog:
    return TimeLog.model_validate(client.get(f"/api/time-logs/{time_log_id}"))


def create_time_log(client: ApiClient, payload: TimeLogCreate) -> TimeLog:
    return TimeLog.model_validate(client.post("/api/time-logs", json=payload.to_wire()))


def update_time_log(client: ApiClient, time_log_id: str, payload: TimeLogCreate) -> TimeLog:
    return TimeLog.model_validate(client.put(f"/api/time-logs/{time_log_id}", json=payload.to_wire()))


def delete_time_log(client: ApiClient, time_log_id: str) -> None:
    client.delete(f"/api/time-logs/{time_log_id}")


def get_total_hours(client: ApiClient, employee_id: str) -> float:
    return float(client.get(f"/api/time-logs/employee/{employee_id}/total-hours") or 0)


def get_employee_summary(client: ApiClient, employee_id: str) -> EmployeeSummary:
    return EmployeeSummary.model_validate(client.get(f"/api/time-logs/employee/{employee_id}/summary"))


def get_weekly_summary(client: ApiClient, employee_id: str) -> WeeklySummary:
    return WeeklySummary.model_validate(client.get(f"/api/time-logs/employee/{employee_id}/weekly-summary"))


# admin review


def list_all_time_logs(client: ApiClient) -> list[TimeLog]:
    return _logs(client.get("/api/time-logs"))


def list_pending_time_logs(client: ApiClient) -> list[TimeLog]:
    return _logs(client.get("/api/time-logs/pending"))


def approve_time_log(client: ApiClient, time_log_id: str) -> TimeLog:
    return TimeLog.model_validate(client.patch(f"/api/time-logs/{time_log_id}/approve"))


def reject_time_log(client: ApiClient, time_log_id: str, reason: str) -> TimeLog:
    body = TimeLogReject(reason=reason).to_wire()
    return TimeLog.model_validate(client.patch(f"/api/time-logs/{time_log_id}/reject", json=body))
