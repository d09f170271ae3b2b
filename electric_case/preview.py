"""Advisory preview marks for tokens that are about to be converted."""

from __future__ import annotations

from collections.abc import Callable

from .config import CaseConfig
from .host import Host
from .models import EditEvent, EditKind
from .scanner import read_window


class PendingMarks:
    """Ordered token ranges flagged as conversion candidates.

    Every change is mirrored to the host's visual layer. Marks are never
    persisted and carry no behavior of their own.
    """

    def __init__(self, host: Host):
        self._host = host
        self._ranges: list[tuple[int, int]] = []

    def __iter__(self):
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    @property
    def ranges(self) -> list[tuple[int, int]]:
        return list(self._ranges)

    def add(self, start: int, end: int) -> None:
        self._ranges.append((start, end))
        self._host.set_preview_mark(start, end)

    def clear(self) -> None:
        self._ranges.clear()
        self._host.clear_preview_marks()

    def discard_overlapping(self, start: int, end: int) -> None:
        """Drop marks intersecting ``[start, end)``."""
        self._replace([(s, e) for s, e in self._ranges if e <= start or s >= end])

    def shift(self, offset: int, delta: int) -> None:
        """Move marks lying at or after `offset` by `delta`."""
        if delta == 0:
            return
        self._replace(
            [(s + delta, e + delta) if s >= offset else (s, e) for s, e in self._ranges]
        )

    def _replace(self, ranges: list[tuple[int, int]]) -> None:
        if ranges == self._ranges:
            return
        self._ranges = ranges
        self._host.clear_preview_marks()
        for start, end in ranges:
            self._host.set_preview_mark(start, end)


class PreviewMarkerManager:
    """Recompute which trailing tokens are candidates for conversion.

    Runs the scanner only: no classification and no buffer mutation, so marks
    show candidates rather than confirmed conversions.
    """

    def __init__(
        self,
        host: Host,
        marks: PendingMarks,
        config_source: Callable[[], CaseConfig],
        depth_source: Callable[[], int],
    ):
        self.host = host
        self.marks = marks
        self._config_source = config_source
        self._depth_source = depth_source

    def refresh(self, event: EditEvent) -> list[tuple[int, int]]:
        """Recompute pending marks after a plain character insertion.

        Returns:
            list[tuple[int, int]]: The ranges now marked; empty for events
                that are not plain insertions, which leave marks untouched.
        """
        if event.kind is not EditKind.SELF_INSERT:
            return []

        self.marks.clear()
        config = self._config_source()
        window = read_window(self.host, self.host.cursor, config)
        for depth in range(self._depth_source(), 0, -1):
            token = window.scan(depth - 1, config, strict=False)
            if token is not None:
                self.marks.add(token.start, token.end)
        return self.marks.ranges

    def clear(self) -> None:
        self.marks.clear()
