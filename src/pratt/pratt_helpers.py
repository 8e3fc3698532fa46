"""
Helpers shared by rule handlers.

Functions:
    parse_list(...) -> list[Any]:
        Parse a delimited sequence (array literals, call arguments, ...) up to and
        including its closing token.
"""

from __future__ import annotations

from typing import Any, Callable


def parse_list(
    *,
    is_next_closer: Callable[[], bool],
    is_next_separator: Callable[[], bool],
    consume_separator: Callable[[], Any],
    consume_closer: Callable[[], Any],
    parse_item: Callable[[], Any],
) -> list[Any]:
    """
    Parse items until the closer is next, then consume the closer.

    Separators are consumed whenever one follows an item. Whether a trailing
    separator is allowed, and what counts as a malformed list, is up to the
    callbacks: they usually consult the token stream and may raise.

    Args:
        is_next_closer: True when the upcoming token ends the list.
        is_next_separator: True when the upcoming token separates two items.
        consume_separator: Consumes one separator.
        consume_closer: Consumes the closer. Called exactly once.
        parse_item: Parses and returns one item.

    Returns:
        list[Any]: The parsed items in source order; empty if the closer came first.

    Example:
        >>> items = parse_list(
        ...     is_next_closer=lambda: lex.peek().type == "]",
        ...     is_next_separator=lambda: lex.peek().type == ",",
        ...     consume_separator=lambda: lex.expect(","),
        ...     consume_closer=lambda: lex.expect("]"),
        ...     parse_item=lambda: parser.parse([",", "]"]),
        ... )
    """
    items: list[Any] = []
    while not is_next_closer():
        items.append(parse_item())
        if is_next_separator():
            consume_separator()
    consume_closer()
    return items


__all__ = ["parse_list"]
