from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass
class SseEvent:
    type: str = "message"
    data: str = ""
    id: str | None = None


def _decode(line: str | bytes) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def iter_events(lines: Iterable[str | bytes]) -> Iterator[SseEvent]:
    """Decode text/event-stream lines into events.

    Follows the EventSource processing model: a blank line dispatches,
    multi-line data is joined with newlines, comment lines are skipped and
    an event left unterminated at end of stream is dropped. An event whose
    data buffer is empty is not dispatched.
    """
    event_type = ""
    data: list[str] = []
    last_id: str | None = None

    for raw in lines:
        line = _decode(raw).rstrip("\r")
        if line == "":
            payload = "\n".join(data)
            if payload:
                yield SseEvent(type=event_type or "message", data=payload, id=last_id)
            event_type = ""
            data = []
            continue
        if line.startswith(":"):
            continue

        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if field == "event":
            event_type = value
        elif field == "data":
            data.append(value)
        elif field == "id":
            if "\0" not in value:
                last_id = value
        # retry and unknown fields are ignored
