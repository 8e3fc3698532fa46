"""
Fluent rule registration for a `Parser`.

Classes:
    ParserBuilder: Chainable registration of binding powers and nud/led rules.

Functions:
    unary_rule(parser, combine): Prefix rule parsing one operand at the token's binding power.
    binary_rule(parser, combine): Left-associative infix rule.
    rassoc_rule(parser, combine): Right-associative infix rule.

The derived forms (`unary`, `binary`, `rassoc`, `either`) add no engine state; they
are plain handlers registered through the `nud`/`led` primitives.

Example:
    >>> parser = Parser(lexer).builder() \\
    ...     .nud("NUM", 100, lambda info: int(info.token.match)) \\
    ...     .unary("-", 30, lambda op, right: -right) \\
    ...     .binary("+", 10, lambda left, op, right: left + right) \\
    ...     .rassoc("^", 40, lambda left, op, right: left ** right) \\
    ...     .build()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Hashable

from pratt.pratt_precedence import PrecedenceTable
from pratt.pratt_tables import BindingPower, Handler, ParseInfo, Resolver
from pratt.pratt_tokens import TokenLike

if TYPE_CHECKING:
    from pratt.pratt_parser import Parser

log = logging.getLogger(__name__)

UnaryCombine = Callable[[TokenLike, Any], Any]
BinaryCombine = Callable[[Any, TokenLike, Any], Any]


def unary_rule(parser: Parser, combine: UnaryCombine) -> Handler:
    """Builds a nud that parses its operand with `terminals=[bp]`."""

    def rule(info: ParseInfo) -> Any:
        right = parser.parse([info.bp], context=info.context)
        return combine(info.token, right)

    return rule


def binary_rule(parser: Parser, combine: BinaryCombine) -> Handler:
    """Builds a left-associative led: the right operand is parsed with `terminals=[bp]`."""

    def rule(info: ParseInfo) -> Any:
        right = parser.parse([info.bp], context=info.context)
        return combine(info.left, info.token, right)

    return rule


def rassoc_rule(parser: Parser, combine: BinaryCombine) -> Handler:
    """Builds a right-associative led.

    The right operand is parsed with `terminals=[bp - 1]`, so an operator of the
    same binding power further right is folded into the operand.
    """

    def rule(info: ParseInfo) -> Any:
        right = parser.parse([info.bp - 1], context=info.context)
        return combine(info.left, info.token, right)

    return rule


class ParserBuilder:
    """Registers rules on a parser in place.

    Every method returns the builder itself so calls can be chained; `build()`
    hands back the parser. Several builders over one parser all write to the same
    tables.

    Attributes:
        parser (Parser): The parser whose tables are being written.
    """

    def __init__(self, parser: Parser) -> None:
        self.parser = parser

    def bp(self, type_: Hashable, bp: BindingPower | float | Resolver) -> "ParserBuilder":
        """Registers or overrides the binding power of `type_`.

        Args:
            type_: The token type.
            bp: A number, or a zero-argument callable resolved on every query.

        Raises:
            ValueError: If `type_` is the reserved end-of-input key `None`.
            TypeError: If `bp` is neither a number nor callable.
        """
        self.parser.tables.set_bp(type_, bp)
        log.debug("bp %r = %r", type_, bp)
        return self

    def bps(self, powers: dict[Hashable, BindingPower | float | Resolver]) -> "ParserBuilder":
        for type_, bp in powers.items():
            self.bp(type_, bp)
        return self

    def precedence(
        self, table: PrecedenceTable | list[Any] | dict[Any, Any]
    ) -> "ParserBuilder":
        """Registers every entry of a precedence table as a fixed binding power.

        Args:
            table: A `PrecedenceTable`, or a configuration accepted by
                `PrecedenceTable.configure`.

        Raises:
            PrecedenceError: If `table` is a configuration and it is invalid.
        """
        if not isinstance(table, PrecedenceTable):
            table = PrecedenceTable.from_config(table)
        log.debug("applying precedence table with %d type(s)", len(table.powers))
        return self.bps(table.summary())

    def nud(
        self, type_: Hashable, bp: BindingPower | float | Resolver, handler: Handler
    ) -> "ParserBuilder":
        """Registers a prefix rule for `type_` together with its binding power."""
        self.parser.tables.set_nud(type_, handler)
        log.debug("nud %r registered", type_)
        return self.bp(type_, bp)

    def led(
        self, type_: Hashable, bp: BindingPower | float | Resolver, handler: Handler
    ) -> "ParserBuilder":
        """Registers an infix/postfix rule for `type_` together with its binding power."""
        self.parser.tables.set_led(type_, handler)
        log.debug("led %r registered", type_)
        return self.bp(type_, bp)

    def either(
        self, type_: Hashable, bp: BindingPower | float | Resolver, handler: Handler
    ) -> "ParserBuilder":
        """Registers `handler` as both the nud and the led of `type_`.

        In prefix position the handler sees `info.left is NO_LEFT`.
        """
        self.parser.tables.set_nud(type_, handler)
        return self.led(type_, bp, handler)

    def unary(
        self, op: Hashable, bp: BindingPower | float | Resolver, combine: UnaryCombine
    ) -> "ParserBuilder":
        """Registers a prefix operator; `combine(op_token, right)` builds the value."""
        return self.nud(op, bp, unary_rule(self.parser, combine))

    def binary(
        self, op: Hashable, bp: BindingPower | float | Resolver, combine: BinaryCombine
    ) -> "ParserBuilder":
        """Registers a left-associative infix operator; `combine(left, op_token, right)`."""
        return self.led(op, bp, binary_rule(self.parser, combine))

    def rassoc(
        self, op: Hashable, bp: BindingPower | float | Resolver, combine: BinaryCombine
    ) -> "ParserBuilder":
        """Registers a right-associative infix operator; `combine(left, op_token, right)`."""
        return self.led(op, bp, rassoc_rule(self.parser, combine))

    def build(self) -> Parser:
        return self.parser


__all__ = [
    "BinaryCombine",
    "ParserBuilder",
    "UnaryCombine",
    "binary_rule",
    "rassoc_rule",
    "unary_rule",
]
