from typing import Any


class ServiceDeskError(Exception):
    """Base class for every error raised by the client."""


class ApiError(ServiceDeskError):
    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class UnauthorizedError(ApiError):
    pass


class TransitionNotAllowed(ServiceDeskError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Task cannot move from {current} to {target}")
        self.current = current
        self.target = target


class ApprovalBlocked(ServiceDeskError):
    def __init__(self, reason: str, missing_task_ids: list[str] | None = None):
        super().__init__(reason)
        self.missing_task_ids = missing_task_ids or []


class AssignmentError(ServiceDeskError):
    pass


def message_from_body(body: Any) -> str | None:
    if isinstance(body, dict):
        for key in ("error", "message"):
            v = body.get(key)
            if isinstance(v, str) and v:
                return v
        return None
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


def describe_error(exc: BaseException, fallback: str = "Please try again") -> str:
    """Human-readable text for a failed call, the way toasts and alert banners show it."""
    if isinstance(exc, ApiError):
        return exc.message or fallback
    text = str(exc).strip()
    return text or fallback
