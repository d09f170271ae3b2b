"""Transactional buffer mutation and scoped token substitution."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from .constants import HYPHEN, SUBSTITUTION_JOINER
from .exceptions import ReentrancyError, ScopedSubstitutionError
from .host import Host
from .models import Token
from .preview import PendingMarks


class Mutator:
    """Apply engine edits to the host as single atomic replacements.

    Edits made by the mutator are suppressed: while `is_suppressing` is True
    the session ignores the host's edit notifications, so engine edits are
    never mistaken for user input.
    """

    def __init__(self, host: Host, marks: PendingMarks):
        self.host = host
        self.marks = marks
        self._suppress_depth = 0
        self._substituting = False

    @property
    def is_suppressing(self) -> bool:
        return self._suppress_depth > 0

    @contextmanager
    def suppressing(self) -> Iterator[None]:
        self._suppress_depth += 1
        try:
            yield
        finally:
            self._suppress_depth -= 1

    def apply(self, start: int, end: int, new_text: str) -> bool:
        """Replace ``[start, end)`` with `new_text`.

        Nothing happens when the range already holds `new_text`: no host
        edit, no notification, no change to marks or the cursor.

        Otherwise the range is replaced in one host transaction. A cursor at
        or after `end` moves by the length difference; a cursor inside the
        range is clamped to the end of the new text. Pending marks overlapping
        the new text are dropped and marks after it are shifted.

        Args:
            start: Absolute start offset of the range.
            end: Absolute end offset of the range.
            new_text: Replacement text.

        Returns:
            bool: True when the buffer changed.

        Examples:
            mutator.apply(0, 7, "foo_bar")
        """
        if not self._replace(start, end, new_text):
            return False

        delta = len(new_text) - (end - start)
        self.marks.shift(end, delta)
        self.marks.discard_overlapping(start, start + len(new_text))
        return True

    def _replace(self, start: int, end: int, new_text: str) -> bool:
        if self.host.get_text(start, end) == new_text:
            return False

        cursor = self.host.cursor
        delta = len(new_text) - (end - start)
        with self.suppressing(), self.host.transaction():
            self.host.delete_range(start, end)
            self.host.insert_text(start, new_text)
            if cursor >= end:
                self.host.cursor = cursor + delta
            elif cursor > start:
                self.host.cursor = min(cursor, start + len(new_text))
            else:
                self.host.cursor = cursor
        return True

    @contextmanager
    def substitute(
        self, start: int, end: int, joiner: str = SUBSTITUTION_JOINER
    ) -> Iterator[Token]:
        """Temporarily replace hyphens in ``[start, end)`` for inspection.

        Yields the substituted token so the caller can read surrounding
        context as if the identifier had no hyphens. The original text is
        restored on every exit path, and neither edit is reported as user
        input. Errors raised by the caller are re-raised as
        `ScopedSubstitutionError` after the restore.

        Raises:
            ReentrancyError: If a substitution is already in progress.
            ScopedSubstitutionError: If the caller's block raised.

        Examples:
            with mutator.substitute(token.start, token.end) as plain:
                kind = syntax_at(plain.start)
        """
        if self._substituting:
            raise ReentrancyError("A scoped substitution is already in progress")

        original = self.host.get_text(start, end)
        replacement = original.replace(HYPHEN, joiner)
        self._substituting = True
        try:
            changed = self._replace(start, end, replacement)
            try:
                yield Token(start, start + len(replacement), replacement)
            except Exception as error:
                raise ScopedSubstitutionError(
                    start, end, reason=str(error) or type(error).__name__
                ) from error
            finally:
                if changed:
                    self._replace(start, start + len(replacement), original)
        finally:
            self._substituting = False
