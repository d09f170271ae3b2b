"""Token boundary detection around the cursor."""

from __future__ import annotations

from dataclasses import dataclass

from .config import CaseConfig
from .constants import HYPHEN
from .exceptions import ScanBoundaryError
from .host import Host
from .models import Token


def is_word_char(char: str, config: CaseConfig) -> bool:
    """Return True for characters that can anchor a token.

    Letters always qualify; digits only when `convert_numerals` is enabled.
    Hyphens never anchor a token on their own.
    """
    return char.isalpha() or (config.convert_numerals and char.isdigit())


def is_token_char(char: str, config: CaseConfig) -> bool:
    """Return True for characters that belong to the token alphabet."""
    return char == HYPHEN or is_word_char(char, config)


def locate_token(
    text: str, cursor: int, n: int, config: CaseConfig, *, origin: int = 0
) -> Token:
    """Locate the token `n` complete tokens before `cursor`.

    `text` is a window of the buffer beginning at absolute offset `origin`.
    Walking left from the cursor, non-word characters are skipped and then a
    whole run of token characters is consumed; this is repeated `n + 1` times.
    Leading hyphens are dropped from the start unless
    `convert_leading_hyphens` is enabled, and the end is found with
    `scan_forward`.

    Args:
        text: Buffer window to scan.
        cursor: Absolute offset to scan back from.
        n: Lookback index; 0 is the token nearest the cursor.
        config: Scan switches.
        origin: Absolute offset of ``text[0]``.

    Returns:
        Token: The located token, with absolute offsets.

    Raises:
        ScanBoundaryError: If the window start is reached before `n + 1`
            tokens were found, or the located run is empty after trimming.

    Examples:
        locate_token("foo-bar baz;", 12, 1, CaseConfig())  # Token(0, 7, "foo-bar")
    """
    if n < 0:
        raise ValueError(f"Lookback index must be non-negative, got {n}")

    pos = cursor - origin
    if pos < 0 or pos > len(text):
        raise ScanBoundaryError(cursor, n)

    for _ in range(n + 1):
        while pos > 0 and not is_word_char(text[pos - 1], config):
            pos -= 1
        if pos == 0:
            raise ScanBoundaryError(cursor, n)
        while pos > 0 and is_token_char(text[pos - 1], config):
            pos -= 1
        if pos == 0 and origin > 0:
            # The run may continue past the window
            raise ScanBoundaryError(cursor, n)

    start = pos
    if not config.convert_leading_hyphens:
        while start < len(text) and text[start] == HYPHEN:
            start += 1

    end = scan_forward(text, start + origin, config, origin=origin) - origin
    if end <= start:
        raise ScanBoundaryError(cursor, n)

    return Token(start + origin, end + origin, text[start:end])


def scan_forward(text: str, start: int, config: CaseConfig, *, origin: int = 0) -> int:
    """Find the end offset of the token beginning at `start`.

    Token characters are consumed until a non-member is found. Trailing
    hyphens are given back unless `convert_trailing_hyphens` is enabled.

    Returns:
        int: Absolute, right-exclusive end offset.

    Examples:
        scan_forward("foo-bar- x", 0, CaseConfig())  # 8
    """
    begin = start - origin
    end = begin
    while end < len(text) and is_token_char(text[end], config):
        end += 1
    if not config.convert_trailing_hyphens:
        while end > begin and text[end - 1] == HYPHEN:
            end -= 1
    return end + origin


def scan_backward(
    text: str, cursor: int, n: int, config: CaseConfig, *, origin: int = 0
) -> Token | None:
    """Return the token `n` tokens before `cursor`, or None.

    None means no earlier distinct token exists at this depth: the scan hit
    the start of the window, or the token would reach the cursor itself.

    Examples:
        scan_backward("a-symbol another-symbol;", 24, 1, CaseConfig())
        # Token(0, 8, "a-symbol")
    """
    try:
        token = locate_token(text, cursor, n, config, origin=origin)
    except ScanBoundaryError:
        return None
    if token.end >= cursor:
        return None
    return token


@dataclass(frozen=True)
class ScanWindow:
    """A bounded slice of the buffer around the cursor.

    Attributes:
        text: Buffer text from `origin` up to the end of the window.
        origin: Absolute offset of ``text[0]``.
        cursor: Absolute cursor offset the window was read for.
    """

    text: str
    origin: int
    cursor: int

    def scan(self, n: int, config: CaseConfig, *, strict: bool = True) -> Token | None:
        """Scan for the token at lookback `n` inside this window.

        With `strict`, tokens reaching the cursor are rejected as in
        `scan_backward`. Without it the token under construction at the
        cursor is returned too.
        """
        if strict:
            return scan_backward(self.text, self.cursor, n, config, origin=self.origin)
        try:
            return locate_token(self.text, self.cursor, n, config, origin=self.origin)
        except ScanBoundaryError:
            return None


def read_window(host: Host, cursor: int, config: CaseConfig) -> ScanWindow:
    """Read at most `max_scan_length` characters on each side of `cursor`."""
    start = max(0, cursor - config.max_scan_length)
    end = min(host.length, cursor + config.max_scan_length)
    return ScanWindow(host.get_text(start, end), start, cursor)
