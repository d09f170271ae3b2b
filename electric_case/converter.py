"""Case conversion for hyphen-delimited tokens."""

from __future__ import annotations

from .constants import HYPHEN, SNAKE_SEPARATOR
from .models import CaseStyle


def split_words(text: str) -> list[str]:
    """Split a token on hyphens, keeping empty segments.

    Examples:
        split_words("foo-bar")  # ["foo", "bar"]
        split_words("-foo--bar")  # ["", "foo", "", "bar"]
    """
    return text.split(HYPHEN)


def capitalize_word(word: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Unlike `str.capitalize`, the remainder keeps its casing, so ``"xmlHttp"``
    becomes ``"XmlHttp"``.
    """
    return word[:1].upper() + word[1:]


def convert(text: str, style: CaseStyle) -> str:
    """Rewrite a hyphenated token into `style`.

    Args:
        text: Token text as found in the buffer.
        style: Target case style.

    Returns:
        str: The rewritten token. `CaseStyle.NO_CONVERT` returns `text`
            verbatim.

    Examples:
        convert("foo-bar", CaseStyle.CAMEL)  # "fooBar"
        convert("foo-bar", CaseStyle.UPPER_CAMEL)  # "FooBar"
        convert("foo-bar", CaseStyle.SNAKE)  # "foo_bar"
        convert("foo-bar", CaseStyle.UPPER_SNAKE)  # "FOO_BAR"
        convert("-foo", CaseStyle.SNAKE)  # "_foo"
    """
    if style is CaseStyle.NO_CONVERT:
        return text

    words = split_words(text)
    if style is CaseStyle.SNAKE:
        return SNAKE_SEPARATOR.join(words)
    if style is CaseStyle.UPPER_SNAKE:
        return SNAKE_SEPARATOR.join(word.upper() for word in words)
    if style is CaseStyle.CAMEL:
        return words[0] + "".join(capitalize_word(word) for word in words[1:])
    if style is CaseStyle.UPPER_CAMEL:
        return "".join(capitalize_word(word) for word in words)

    raise ValueError(f"Unsupported case style: {style!r}")
