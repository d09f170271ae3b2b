"""Data models for electric-case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CaseStyle(Enum):
    """Target case styles a classifier can pick for a token.

    Attributes:
        CAMEL: ``fooBarBaz``.
        UPPER_CAMEL: ``FooBarBaz``.
        SNAKE: ``foo_bar_baz``.
        UPPER_SNAKE: ``FOO_BAR_BAZ``.
        NO_CONVERT: Leave the token exactly as typed.
    """

    CAMEL = auto()
    UPPER_CAMEL = auto()
    SNAKE = auto()
    UPPER_SNAKE = auto()
    NO_CONVERT = auto()

    @classmethod
    def from_name(cls, name: str) -> CaseStyle:
        """Resolve a style from its member name or short alias.

        Examples:
            CaseStyle.from_name("ucamel")  # CaseStyle.UPPER_CAMEL
            CaseStyle.from_name("upper_snake")  # CaseStyle.UPPER_SNAKE
        """
        key = name.strip().lower().replace("-", "_")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown case style: {name!r}") from None


_ALIASES = {
    "camel": CaseStyle.CAMEL,
    "ucamel": CaseStyle.UPPER_CAMEL,
    "snake": CaseStyle.SNAKE,
    "usnake": CaseStyle.UPPER_SNAKE,
    "none": CaseStyle.NO_CONVERT,
}

STYLE_NAMES = ("camel", "ucamel", "snake", "usnake", "none")


class DriverState(Enum):
    """Conversion driver states, toggled by the host."""

    DISABLED = auto()
    ENABLED = auto()


class EditKind(Enum):
    """Kinds of edit notifications emitted by the host.

    Attributes:
        SELF_INSERT: A single plain character typed by the user.
        INSERT: Any other insertion (paste, newline command, engine edits).
        DELETE: Text removed from the buffer.
    """

    SELF_INSERT = auto()
    INSERT = auto()
    DELETE = auto()


@dataclass(frozen=True)
class Token:
    """A hyphen-delimited identifier candidate in the buffer.

    Attributes:
        start: Absolute offset of the first character.
        end: Absolute offset one past the last character.
        text: The characters in ``[start, end)``.
    """

    start: int
    end: int
    text: str

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Token start {self.start} is after end {self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True)
class EditEvent:
    """A change reported by the host editing surface.

    Attributes:
        kind: What kind of edit happened.
        start: Offset where the change begins.
        end: Offset where the change ends after it was applied.
        text: Inserted text, or the removed text for deletions.
    """

    kind: EditKind
    start: int
    end: int
    text: str = ""


@dataclass(frozen=True)
class Conversion:
    """One rewrite applied by the driver during a pass."""

    token: Token
    style: CaseStyle
    replacement: str
    lookback: int
