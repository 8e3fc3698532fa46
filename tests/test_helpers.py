from typing import Any
from unittest.mock import Mock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pratt.pratt_helpers import parse_list
from pratt.pratt_parser import Parser
from pratt.pratt_tables import ParseInfo
from tests.support.lexer import Lexer


def list_parser(lexer: Lexer) -> Parser:
    """Array and call syntax over integers: `[1, 2]`, `f(1, 2)`."""
    parser = Parser(lexer)

    def items(closer: str) -> list[Any]:
        return parser.parse_list(
            is_next_closer=lambda: lexer.peek().type == closer,
            # anything other than the closer has to be a separator
            is_next_separator=lambda: lexer.peek().type != closer,
            consume_separator=lambda: lexer.expect(","),
            consume_closer=lambda: lexer.expect(closer),
            parse_item=lambda: parser.parse([0, ",", closer]),
        )

    def call(info: ParseInfo) -> Any:
        return (info.left, items(")"))

    return parser.build(
        lambda define: define.nud("NUM", 100, lambda info: int(info.token.match))
        .nud("IDENT", 100, lambda info: info.token.match)
        .nud("[", 0, lambda info: items("]"))
        .led("(", 50, call)
        .bps({"]": 0, ")": 0, ",": 0, ";": 0})
        .binary("+", 10, lambda left, op, right: left + right)
    )


def test_empty_list_consumes_closer_once() -> None:
    consume_closer = Mock()
    parse_item = Mock()
    result = parse_list(
        is_next_closer=lambda: True,
        is_next_separator=lambda: False,
        consume_separator=Mock(),
        consume_closer=consume_closer,
        parse_item=parse_item,
    )
    assert result == []
    consume_closer.assert_called_once_with()
    parse_item.assert_not_called()


@pytest.mark.parametrize(
    "source,expected",
    [
        ("[]", []),
        ("[1]", [1]),
        ("[1, 2 + 3, 4]", [1, 5, 4]),
        ("[1, 2,]", [1, 2]),
        ("[[1], []]", [[1], []]),
    ],
)
def test_array_literals(lexer: Lexer, source: str, expected: list[Any]) -> None:
    parser = list_parser(lexer)
    lexer.source = source
    assert parser.parse() == expected
    assert lexer.peek().is_eof()


def test_call_arguments(lexer: Lexer) -> None:
    parser = list_parser(lexer)
    lexer.source = "f(1, 2 + 3)(4)"
    assert parser.parse() == (("f", [1, 5]), [4])


def test_missing_separator_error_propagates(lexer: Lexer) -> None:
    parser = list_parser(lexer)
    lexer.source = "[1; 2]"
    with pytest.raises(SyntaxError, match="Expected ',' but found ';'"):
        parser.parse()


def test_unclosed_list_error_propagates(lexer: Lexer) -> None:
    parser = list_parser(lexer)
    lexer.source = "[1, 2"
    with pytest.raises(SyntaxError, match="found end of input"):
        parser.parse()


@given(st.lists(st.integers(min_value=0, max_value=10_000), max_size=8))
def test_parses_any_integer_array(values: list[int]) -> None:
    lexer = Lexer("[" + ", ".join(str(v) for v in values) + "]")
    assert list_parser(lexer).parse() == values
