import pytest

from clishell.split import split


@pytest.mark.parametrize(
    "text",
    ["", " ", "  ", "   ", "\t", "\t\t", " \t \t      "],
)
def test_odd_cases_give_empty_list(text):
    assert split(text) == []


def test_one_word():
    assert split("1234567890") == ["1234567890"]


def test_one_word_with_spaces():
    assert split("  foo ") == ["foo"]


def test_two_words_with_spaces():
    assert split("  foo \t \t bar \t") == ["foo", "bar"]


def test_double_quoted_cases():
    assert split('""') == []
    assert split('"foo bar"') == ["foo bar"]
    assert split('    \t\t "foo \tbar"     \t') == ["foo \tbar"]
    assert split(' first   \t\t "foo \tbar"     \t last') == [
        "first",
        "foo \tbar",
        "last",
    ]
    assert split('first"foo \tbar"') == ["first", "foo \tbar"]
    assert split("first \"'second' 'thirdh'\"") == ["first", "'second' 'thirdh'"]


def test_single_quoted_cases():
    assert split("''") == []
    assert split("'foo bar'") == ["foo bar"]
    assert split("    \t\t 'foo \tbar'     \t") == ["foo \tbar"]
    assert split(" first   \t\t 'foo \tbar'     \t last") == [
        "first",
        "foo \tbar",
        "last",
    ]
    assert split("first'foo \tbar'") == ["first", "foo \tbar"]
    assert split('first \'"second" "thirdh"\'') == ["first", '"second" "thirdh"']


def test_escaped_double_quote_outside_sentence():
    assert split(r'foo \"bar') == ["foo", '"bar']


def test_escaped_single_quotes_outside_sentence():
    assert split(r"foo \'bar\'") == ["foo", "'bar'"]


def test_escaped_quote_inside_word():
    assert split(r'foo bar f\"oo') == ["foo", "bar", 'f"oo']


def test_escaped_quotes_in_double_quoted_sentence():
    assert split(r'"foo\"bar\'foo"') == ["foo\"bar'foo"]


def test_escaped_quotes_in_single_quoted_sentence():
    assert split(r"'foo\'bar\"foo'") == ["foo'bar\"foo"]


def test_backslash_before_ordinary_char_is_kept():
    assert split(r'"foo\bar"') == [r"foo\bar"]


def test_escaped_backslash_then_escaped_quote():
    assert split(r'"foo\\\"bar"') == [r'foo\"bar']


def test_command_line_with_mixed_quotes():
    assert split(r'string_cmd "foo ' + "'bar' " + r'\"foo\\2"') == [
        "string_cmd",
        r"""foo 'bar' "foo\2""",
    ]


def test_freeform_arguments():
    assert split("cmd_printer_by_value a b 'c d e' f") == [
        "cmd_printer_by_value",
        "a",
        "b",
        "c d e",
        "f",
    ]