"""Package-specific exception types."""

from __future__ import annotations


class ElectricCaseError(Exception):
    """Base class for errors raised by the conversion engine."""


class ScanBoundaryError(ElectricCaseError):
    """Raised when a token scan would run past the start of the buffer.

    Args:
        cursor: Absolute offset the scan started from.
        lookback: Number of complete tokens the scan tried to skip.
    """

    def __init__(self, cursor: int, lookback: int):
        self.cursor = cursor
        self.lookback = lookback
        super().__init__(f"No token at lookback {self.lookback} before offset {self.cursor}")


class ClassificationError(ElectricCaseError):
    """Raised when classifying or converting a single token fails.

    Args:
        start: Absolute start offset of the token.
        end: Absolute end offset of the token.
        lookback: Lookback index the token was scanned at, when known.
        reason: Short description of the underlying failure.
    """

    def __init__(self, start: int, end: int, lookback: int | None = None, reason: str = ""):
        self.start = start
        self.end = end
        self.lookback = lookback
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = f"Could not classify token [{self.start}, {self.end})"
        if self.lookback is not None:
            message = f"{message} at lookback {self.lookback}"
        if self.reason:
            message = f"{message}: {self.reason}"
        return message


class ScopedSubstitutionError(ClassificationError):
    """Raised when the caller's read fails during a temporary substitution.

    The original text has already been restored when this is raised.
    """


class ReentrancyError(ElectricCaseError):
    """Raised when a scoped substitution is requested inside another one."""


class UnknownProfileError(ElectricCaseError, KeyError):
    """Raised when activating a classification profile that was never registered.

    Args:
        name: The requested profile name.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown classification profile: {name!r}")

    def __str__(self) -> str:
        return self.args[0]
