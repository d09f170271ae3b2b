import pytest
from electric_case.converter import capitalize_word, convert, split_words
from electric_case.models import CaseStyle


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (CaseStyle.CAMEL, "fooBarBaz"),
        (CaseStyle.UPPER_CAMEL, "FooBarBaz"),
        (CaseStyle.SNAKE, "foo_bar_baz"),
        (CaseStyle.UPPER_SNAKE, "FOO_BAR_BAZ"),
        (CaseStyle.NO_CONVERT, "foo-bar-baz"),
    ],
)
def test_convert_each_style(style, expected):
    assert convert("foo-bar-baz", style) == expected


def test_split_words_keeps_empty_segments():
    assert split_words("-foo--bar-") == ["", "foo", "", "bar", ""]


def test_edge_hyphens_become_separators_in_snake_styles():
    assert convert("-foo--bar-", CaseStyle.SNAKE) == "_foo__bar_"
    assert convert("-foo--bar-", CaseStyle.UPPER_SNAKE) == "_FOO__BAR_"


def test_edge_hyphens_vanish_in_camel_styles():
    assert convert("-foo--bar-", CaseStyle.CAMEL) == "FooBar"
    assert convert("-foo--bar-", CaseStyle.UPPER_CAMEL) == "FooBar"


def test_camel_keeps_first_word_and_inner_casing():
    assert convert("xml-httpRequest", CaseStyle.CAMEL) == "xmlHttpRequest"
    assert convert("Foo-bar", CaseStyle.CAMEL) == "FooBar"


def test_capitalize_word_only_touches_first_character():
    assert capitalize_word("xmlHttp") == "XmlHttp"
    assert capitalize_word("") == ""


def test_no_convert_returns_text_verbatim():
    assert convert("-weird--1-", CaseStyle.NO_CONVERT) == "-weird--1-"


def test_camel_on_converted_token_is_noop():
    once = convert("foo-bar", CaseStyle.CAMEL)
    assert convert(once, CaseStyle.CAMEL) == once


def test_digits_are_plain_word_content():
    assert convert("foo-1-bar", CaseStyle.UPPER_CAMEL) == "Foo1Bar"
    assert convert("foo-1-bar", CaseStyle.UPPER_SNAKE) == "FOO_1_BAR"
