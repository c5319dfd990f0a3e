import io
import json
from http import HTTPStatus
from urllib.parse import urlsplit

import requests


def make_response(status=200, body=None, content=None, headers=None, stream=None):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = HTTPStatus(status).phrase
    resp.encoding = "utf-8"
    if body is not None:
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
    elif content is not None:
        resp._content = content if isinstance(content, bytes) else content.encode()
        resp.headers["Content-Type"] = "text/plain"
    elif stream is not None:
        resp.raw = io.BytesIO(stream.encode())
        resp.headers["Content-Type"] = "text/event-stream"
    else:
        resp._content = b""
    if stream is None:
        resp._content_consumed = True
    if headers:
        resp.headers.update(headers)
    return resp


class FakeHttp:
    """Stands in for requests.Session; routes by (method, path)."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, response):
        self.routes.setdefault((method, path), []).append(response)

    def request(self, method, url, **kw):
        path = urlsplit(url).path
        self.calls.append({"method": method, "url": url, "path": path, **kw})
        queue = self.routes.get((method, path))
        if not queue:
            return make_response(404, {"error": f"no route {method} {path}"})
        r = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(r, Exception):
            raise r
        return r

    def calls_to(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def close(self):
        pass

def message(id, text="update", occurred_at="2025-03-01T10:00:00Z", **extra):
    m = {
        "id": id,
        "projectId": "p1",
        "category": "UPDATED",
        "message": text,
        "occurredAt": occurred_at,
        "createdAt": occurred_at,
    }
    m.update(extra)
    return m


def task(task_id, status="Requested", assignee=None, **extra):
    t = {
        "taskId": task_id,
        "title": f"Task {task_id}",
        "serviceType": "paint",
        "status": status,
    }
    if assignee:
        t["assigneeId"] = assignee
    t.update(extra)
    return t


def project(status="PendingReview", tasks=None, **extra):
    p = {
        "projectId": "p1",
        "vehicleId": "v1",
        "customerId": "c1",
        "title": "Wrap and lowering kit",
        "status": status,
        "createdAt": "2025-03-01T09:00:00Z",
        "updatedAt": "2025-03-01T09:00:00Z",
        "tasks": tasks if tasks is not None else [],
        "activity": [],
    }
    p.update(extra)
    return p
