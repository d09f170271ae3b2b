"""Host editing surface: the interface the engine talks to, and an in-memory host."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, runtime_checkable

from .models import EditEvent, EditKind

EditHandler = Callable[[EditEvent], None]
KeyHandler = Callable[[], None]


@runtime_checkable
class Host(Protocol):
    """Editing surface and visual layer consumed by the engine.

    Offsets are whatever the host uses, as long as they are consistent and
    text is sliceable by ``[start, end)``.
    """

    @property
    def length(self) -> int: ...

    @property
    def cursor(self) -> int: ...

    @cursor.setter
    def cursor(self, offset: int) -> None: ...

    @property
    def has_active_selection(self) -> bool: ...

    def get_text(self, start: int, end: int) -> str: ...

    def insert_text(self, offset: int, text: str) -> None: ...

    def delete_range(self, start: int, end: int) -> None: ...

    def transaction(self) -> AbstractContextManager[None]: ...

    def bind_key_to_trigger(self, key: str, handler: KeyHandler) -> None: ...

    def unbind_key(self, key: str) -> None: ...

    def subscribe_edit_events(self, handler: EditHandler) -> Callable[[], None]: ...

    def set_preview_mark(self, start: int, end: int) -> None: ...

    def clear_preview_marks(self) -> None: ...


class TextBuffer:
    """A complete in-memory `Host`.

    Raw edits (`insert_text`, `delete_range`) leave the cursor alone, apart from
    keeping it inside the buffer, and emit `INSERT`/`DELETE` events. `type`
    simulates keystrokes: each character is inserted at the cursor, the cursor
    advances, and a `SELF_INSERT` event is emitted. Edits made inside
    `transaction` are coalesced into one notification emitted when the
    outermost transaction closes.

    Examples:
        buffer = TextBuffer("foo-bar")
        buffer.type(";")
        buffer.text  # "foo-bar;"
    """

    def __init__(self, text: str = "", cursor: int | None = None):
        self._text = text
        self._cursor = len(text) if cursor is None else cursor
        self._check_offset(self._cursor)
        self._selection: tuple[int, int] | None = None
        self._subscribers: list[EditHandler] = []
        self._bindings: dict[str, KeyHandler] = {}
        self._marks: list[tuple[int, int]] = []
        self._transaction_depth = 0
        self._pending: list[EditEvent] = []

    # Reading

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, offset: int) -> None:
        self._check_offset(offset)
        self._cursor = offset

    @property
    def has_active_selection(self) -> bool:
        return self._selection is not None and self._selection[0] != self._selection[1]

    @property
    def selection(self) -> tuple[int, int] | None:
        return self._selection

    @property
    def preview_marks(self) -> list[tuple[int, int]]:
        return list(self._marks)

    @property
    def preview_texts(self) -> list[str]:
        return [self._text[start:end] for start, end in self._marks]

    def get_text(self, start: int, end: int) -> str:
        self._check_range(start, end)
        return self._text[start:end]

    # Raw edits

    def insert_text(self, offset: int, text: str) -> None:
        self._check_offset(offset)
        if not text:
            return
        self._text = self._text[:offset] + text + self._text[offset:]
        self._notify(EditEvent(EditKind.INSERT, offset, offset + len(text), text))

    def delete_range(self, start: int, end: int) -> None:
        self._check_range(start, end)
        if start == end:
            return
        removed = self._text[start:end]
        self._text = self._text[:start] + self._text[end:]
        self._cursor = min(self._cursor, len(self._text))
        self._notify(EditEvent(EditKind.DELETE, start, start, removed))

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group edits so subscribers see a single coalesced notification."""
        self._transaction_depth += 1
        try:
            yield
        finally:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self._flush()

    # Keystrokes

    def select(self, start: int, end: int) -> None:
        self._check_range(start, end)
        self._selection = (start, end)
        self._cursor = end

    def deselect(self) -> None:
        self._selection = None

    def type(self, text: str) -> None:
        """Type `text` one character at a time at the cursor."""
        for char in text:
            if self.has_active_selection:
                start, end = self._selection
                self._selection = None
                self.delete_range(start, end)
                self._cursor = start
            self._selection = None
            offset = self._cursor
            self._text = self._text[:offset] + char + self._text[offset:]
            self._cursor = offset + 1
            self._notify(EditEvent(EditKind.SELF_INSERT, offset, offset + 1, char))

    def backspace(self, count: int = 1) -> None:
        """Delete `count` characters before the cursor."""
        start = max(0, self._cursor - count)
        end = self._cursor
        self._cursor = start
        self.delete_range(start, end)

    def press(self, key: str) -> None:
        """Press `key`: run its trigger binding, then its default action.

        The default action of ``"RET"`` and ``"\\n"`` is a newline inserted as a
        plain `INSERT`; other keys are typed.
        """
        handler = self._bindings.get(key)
        if handler is not None:
            handler()
        if key in ("RET", "\n"):
            offset = self._cursor
            self.insert_text(offset, "\n")
            self._cursor = offset + 1
        else:
            self.type(key)

    def bind_key_to_trigger(self, key: str, handler: KeyHandler) -> None:
        self._bindings[key] = handler

    def unbind_key(self, key: str) -> None:
        self._bindings.pop(key, None)

    @property
    def bound_keys(self) -> list[str]:
        return sorted(self._bindings)

    # Events

    def subscribe_edit_events(self, handler: EditHandler) -> Callable[[], None]:
        self._subscribers.append(handler)

        def unsubscribe() -> None:
            if handler in self._subscribers:
                self._subscribers.remove(handler)

        return unsubscribe

    def _notify(self, event: EditEvent) -> None:
        if self._transaction_depth:
            self._pending.append(event)
            return
        for handler in list(self._subscribers):
            handler(event)

    def _flush(self) -> None:
        pending, self._pending = self._pending, []
        if not pending:
            return
        start = min(event.start for event in pending)
        end = max(event.end for event in pending)
        inserted = "".join(event.text for event in pending if event.kind is not EditKind.DELETE)
        self._notify(EditEvent(EditKind.INSERT, start, end, inserted))

    # Visual layer

    def set_preview_mark(self, start: int, end: int) -> None:
        self._check_range(start, end)
        self._marks.append((start, end))

    def clear_preview_marks(self) -> None:
        self._marks.clear()

    # Validation

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self._text):
            raise IndexError(f"Offset {offset} outside buffer of length {len(self._text)}")

    def _check_range(self, start: int, end: int) -> None:
        if start > end:
            raise IndexError(f"Range start {start} is after end {end}")
        self._check_offset(start)
        self._check_offset(end)
