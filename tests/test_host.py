import pytest
from electric_case.host import Host, TextBuffer
from electric_case.models import EditEvent, EditKind


def _recording(buffer: TextBuffer) -> list[EditEvent]:
    events: list[EditEvent] = []
    buffer.subscribe_edit_events(events.append)
    return events


def test_text_buffer_satisfies_host_protocol():
    assert isinstance(TextBuffer(), Host)


def test_typing_emits_one_event_per_character():
    buffer = TextBuffer()
    events = _recording(buffer)

    buffer.type("ab")

    assert buffer.text == "ab"
    assert buffer.cursor == 2
    assert events == [
        EditEvent(EditKind.SELF_INSERT, 0, 1, "a"),
        EditEvent(EditKind.SELF_INSERT, 1, 2, "b"),
    ]


def test_raw_edits_do_not_move_cursor():
    buffer = TextBuffer("hello", cursor=2)

    buffer.insert_text(0, ">>")

    assert buffer.text == ">>hello"
    assert buffer.cursor == 2


def test_delete_keeps_cursor_inside_buffer():
    buffer = TextBuffer("hello")

    buffer.delete_range(1, 5)

    assert buffer.text == "h"
    assert buffer.cursor == 1


def test_transaction_coalesces_notifications():
    buffer = TextBuffer("foo-bar")
    events = _recording(buffer)

    with buffer.transaction():
        buffer.delete_range(0, 7)
        buffer.insert_text(0, "fooBar")
        assert events == []

    assert events == [EditEvent(EditKind.INSERT, 0, 6, "fooBar")]


def test_typing_replaces_selection():
    buffer = TextBuffer("hello world")
    events = _recording(buffer)
    buffer.select(0, 5)

    buffer.type("J")

    assert buffer.text == "J world"
    assert buffer.cursor == 1
    assert buffer.has_active_selection is False
    assert [event.kind for event in events] == [EditKind.DELETE, EditKind.SELF_INSERT]


def test_backspace_deletes_before_cursor():
    buffer = TextBuffer("abc")

    buffer.backspace(2)

    assert buffer.text == "a"
    assert buffer.cursor == 1


def test_press_runs_binding_before_default_action():
    buffer = TextBuffer("x")
    order = []
    buffer.bind_key_to_trigger("RET", lambda: order.append(buffer.text))

    buffer.press("RET")

    assert order == ["x"]
    assert buffer.text == "x\n"
    assert buffer.cursor == 2


def test_unsubscribe_stops_notifications():
    buffer = TextBuffer()
    events = []
    unsubscribe = buffer.subscribe_edit_events(events.append)

    unsubscribe()
    buffer.type("a")

    assert events == []


def test_out_of_range_offsets_raise():
    buffer = TextBuffer("abc")

    with pytest.raises(IndexError):
        buffer.get_text(2, 9)
    with pytest.raises(IndexError):
        buffer.delete_range(2, 1)
    with pytest.raises(IndexError):
        buffer.cursor = 4
    with pytest.raises(IndexError):
        TextBuffer("abc", cursor=5)


def test_deselect_and_unbind():
    buffer = TextBuffer("hello")
    buffer.select(0, 5)
    buffer.bind_key_to_trigger("(", lambda: None)

    buffer.deselect()
    buffer.unbind_key("(")

    assert buffer.has_active_selection is False
    assert buffer.bound_keys == []
