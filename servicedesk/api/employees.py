from servicedesk.api.client import ApiClient
from servicedesk.schemas.admin import Employee


def list_employees(client: ApiClient) -> list[Employee]:
    data = client.get("/api/admin/employees")
    return [Employee.model_validate(e) for e in data or []]


def get_employee(client: ApiClient, employee_id: str) -> Employee:
    return Employee.model_validate(client.get(f"/api/admin/employees/{employee_id}"))
