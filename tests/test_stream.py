from servicedesk.services.stream import iter_events


def test_default_type_and_blank_line_dispatch():
    events = list(iter_events(["data: hello", "", "data: world", ""]))
    assert [(e.type, e.data) for e in events] == [("message", "hello"), ("message", "world")]


def test_named_event_multiline_data_and_id():
    lines = [b"event: connected", b"id: 7", b"data: line one", b"data:line two", b""]
    (event,) = iter_events(lines)
    assert event.type == "connected"
    assert event.data == "line one\nline two"
    assert event.id == "7"


def test_comments_and_unknown_fields_are_ignored():
    events = list(iter_events([": keep-alive", "retry: 5000", "foo: bar", "data: x", ""]))
    assert len(events) == 1
    assert events[0].data == "x"


def test_unterminated_event_is_dropped():
    assert list(iter_events(["data: partial"])) == []


def test_empty_data_block_does_not_dispatch():
    assert list(iter_events(["event: ping", ""])) == []


def test_event_type_resets_between_events():
    events = list(iter_events(["event: connected", "data: a", "", "data: b", "\r"]))
    assert [e.type for e in events] == ["connected", "message"]


def test_id_persists_across_events():
    events = list(iter_events(["id: 1", "data: a", "", "data: b", ""]))
    assert [e.id for e in events] == ["1", "1"]


def test_lone_empty_data_line_does_not_dispatch():
    events = list(iter_events(["data:", "", "data: x", ""]))
    assert [e.data for e in events] == ["x"]


def test_two_empty_data_lines_dispatch_a_newline():
    (event,) = iter_events(["data:", "data:", ""])
    assert event.data == "\n"
