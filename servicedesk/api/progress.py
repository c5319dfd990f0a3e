import mimetypes
from pathlib import Path
from typing import BinaryIO, Union

import requests

from servicedesk.api.client import ApiClient
from servicedesk.core.config import settings
from servicedesk.schemas.progress import (
    CreateStatusRequest,
    EventCategory,
    MessagePage,
    ProjectMessage,
    ProjectStatusSummary,
)

# a path on disk, or (filename, bytes or binary file, content type)
FileInput = Union[str, Path, tuple[str, Union[bytes, BinaryIO], str | None]]


def file_part(file: FileInput) -> tuple[str, Union[bytes, BinaryIO], str]:
    if isinstance(file, (str, Path)):
        p = Path(file)
        content_type = mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return p.name, p.read_bytes(), content_type
    name, content, content_type = file
    return name, content, content_type or mimetypes.guess_type(name)[0] or "application/octet-stream"


def get_my_project_statuses(client: ApiClient) -> list[ProjectStatusSummary]:
    data = client.get("/api/projects/my/statuses")
    return [ProjectStatusSummary.model_validate(s) for s in data or []]


def get_project_messages(client: ApiClient, project_id: str) -> list[ProjectMessage]:
    data = client.get(f"/api/projects/{project_id}/messages")
    return [ProjectMessage.model_validate(m) for m in data or []]


def get_project_messages_page(client: ApiClient, project_id: str, page: int = 0, size: int = 20) -> MessagePage:
    data = client.get(f"/api/projects/{project_id}/messages/page", params={"page": page, "size": size})
    return MessagePage.model_validate(data or {})


def get_project_messages_before(client: ApiClient, project_id: str, before: str, size: int = 20) -> MessagePage:
    data = client.get(f"/api/projects/{project_id}/messages/before", params={"before": before, "size": size})
    return MessagePage.model_validate(data or {})


def get_project_messages_after(client: ApiClient, project_id: str, after: str, size: int = 20) -> MessagePage:
    data = client.get(f"/api/projects/{project_id}/messages/after", params={"after": after, "size": size})
    return MessagePage.model_validate(data or {})


def post_status_message(client: ApiClient, project_id: str, request: CreateStatusRequest) -> ProjectMessage:
    data = client.post(f"/api/projects/{project_id}/messages", json=request.to_wire())
    return ProjectMessage.model_validate(data)


def upload_and_create_message(
    client: ApiClient,
    project_id: str,
    file: FileInput,
    message: str,
    category: EventCategory | str | None = None,
) -> ProjectMessage:
    form = {"message": message}
    if category:
        form["category"] = category.value if isinstance(category, EventCategory) else str(category)
    data = client.post(
        f"/api/projects/{project_id}/messages/upload",
        data=form,
        files={"file": file_part(file)},
    )
    return ProjectMessage.model_validate(data)


def open_project_stream(client: ApiClient, project_id: str) -> requests.Response:
    # token goes in the query string for SSE
    path = settings.SSE_PATH.format(project_id=project_id)
    return client.stream(path, params={"access_token": client.session.token})
