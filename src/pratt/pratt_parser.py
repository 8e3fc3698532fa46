"""
Pratt Parser Engine

Drives top-down operator-precedence parsing over a host-supplied token stream.

The engine knows nothing about the language being parsed. A host registers, per
token type, a binding power plus a prefix rule (nud) and/or an infix rule (led),
and the engine runs the classic loop: parse a prefix value, then keep folding in
infix operators while the next token binds tighter than the current threshold.

Handlers build whatever values they like (numbers, AST nodes, ...) and recurse
into `Parser.parse()` with a tighter terminal to capture sub-expressions:

- left-associative operators recurse with `terminals=[bp]`
- right-associative operators recurse with `terminals=[bp - 1]`

Entry Points
------------
- `parse()`: Parse one expression and return the handler-built value.
- `builder()` / `build()`: Register rules (see `pratt.pratt_builder`).
- `parse_list()`: Parse a delimited sequence from inside a handler.

Raises
------
UnexpectedToken
    When a token in prefix or infix position has no matching rule.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Hashable, NoReturn, Sequence

from pratt.pratt_builder import ParserBuilder
from pratt.pratt_errors import UnexpectedToken
from pratt.pratt_helpers import parse_list
from pratt.pratt_tables import (
    NO_LEFT,
    ParseContext,
    ParseInfo,
    RuleTables,
    StopHandle,
    Terminal,
)
from pratt.pratt_tokens import TokenLike, TokenStream

log = logging.getLogger(__name__)

DEFAULT_TERMINALS: tuple[Terminal, ...] = (0,)


def _is_threshold(terminal: Terminal) -> bool:
    return isinstance(terminal, numbers.Real) and not isinstance(terminal, bool)


def normalize_terminals(
    terminals: Sequence[Terminal] | Terminal | None,
) -> list[Terminal]:
    """Turns the `terminals` argument of `parse()` into a non-empty list.

    `None` and empty sequences fall back to the default "binding power > 0"
    condition. A bare number or token type is wrapped into a one-element list.
    """
    if terminals is None:
        return list(DEFAULT_TERMINALS)
    if isinstance(terminals, (list, tuple)):
        return list(terminals) if terminals else list(DEFAULT_TERMINALS)
    return [terminals]


class Parser:
    """
    Pratt parser over a token stream.

    Attributes
    ----------
    lexer : TokenStream
        Where tokens come from. Only `next()` and `peek()` are used.
    tables : RuleTables
        Binding powers and nud/led rules, owned by this parser.

    Methods
    -------
    bp(token_or_type) -> float
        Resolve the binding power of a token or token type.
    nud(info) -> Any
        Dispatch a token in prefix position.
    led(info) -> Any
        Dispatch a token in infix/postfix position.
    parse(terminals=None, *, context=None, stop=None) -> Any
        Parse one expression.
    parse_list(...) -> list[Any]
        Parse a delimited sequence.

    Example
    -------
    >>> parser = Parser(lexer).build(
    ...     lambda define: define.nud("NUM", 100, lambda i: int(i.token.match))
    ...     .binary("+", 10, lambda left, op, right: left + right)
    ... )
    >>> parser.parse()
    """

    def __init__(self, lexer: TokenStream) -> None:
        self.lexer = lexer
        self.tables = RuleTables()

    def builder(self) -> ParserBuilder:
        """Returns a builder that registers rules on this parser."""
        return ParserBuilder(self)

    def build(self, define: Callable[[ParserBuilder], Any]) -> "Parser":
        """Runs `define` against a fresh builder and returns this parser."""
        define(self.builder())
        return self

    def bp(self, token_or_type: TokenLike | Hashable | None) -> float:
        """
        Resolve the binding power of a token or a token type.

        Anything with an `is_eof` method is treated as a token and resolved by its
        `type`; any other value is a type key. Dynamic resolvers are called on
        every query; nothing is cached.

        Returns
        -------
        float
            `-inf` for end-of-input tokens and the `None` key, `+inf` for types
            without a registered binding power, otherwise the registered value.
        """
        if token_or_type is None:
            return -math.inf
        if hasattr(token_or_type, "is_eof"):
            if token_or_type.is_eof():
                return -math.inf
            return self.tables.resolve_bp(token_or_type.type)
        return self.tables.resolve_bp(token_or_type)

    def nud(self, info: ParseInfo) -> Any:
        handler = self.tables.nuds.get(info.token.type)
        if handler is None:
            self._unexpected(info.token, "nud")
        return handler(info)

    def led(self, info: ParseInfo) -> Any:
        handler = self.tables.leds.get(info.token.type)
        if handler is None:
            self._unexpected(info.token, "led")
        return handler(info)

    def parse(
        self,
        terminals: Sequence[Terminal] | Terminal | None = None,
        *,
        context: Any = None,
        stop: StopHandle | None = None,
    ) -> Any:
        """
        Parse one expression from the token stream.

        Parameters
        ----------
        terminals : list, optional
            Conditions that must all hold for the loop to fold in the next token.
            A number `r` holds while `r < bp(next)`; any other value is a token
            type and holds while the next token is of a different type. `None`
            entries are ignored. Defaults to `[0]`.
        context : Any, optional
            Host payload forwarded to every handler of this call.
        stop : StopHandle, optional
            Share an enclosing call's stop scope. A fresh handle is used otherwise.

        Returns
        -------
        Any
            Whatever the last nud/led handler returned, with `NO_LEFT` mapped to
            `None`.
        """
        ctx = ParseContext(
            stop=stop if stop is not None else StopHandle(),
            context=context,
            terminals=normalize_terminals(terminals),
        )
        token = self.lexer.next()
        left = self.nud(ctx.info(token, self.bp(token)))
        while not ctx.stop.triggered and self._continues(ctx, self.lexer.peek()):
            operator = self.lexer.next()
            left = self.led(ctx.info(operator, self.bp(operator), left))
        return None if left is NO_LEFT else left

    def parse_list(self, **callbacks: Callable[[], Any]) -> list[Any]:
        """Shortcut for `pratt.pratt_helpers.parse_list`."""
        return parse_list(**callbacks)

    def _continues(self, ctx: ParseContext, upcoming: TokenLike) -> bool:
        for terminal in ctx.terminals:
            if terminal is None:
                continue
            if _is_threshold(terminal):
                if not terminal < self.bp(upcoming):
                    return False
            elif upcoming.type == terminal:
                return False
        return True

    def _unexpected(self, token: TokenLike, kind: str) -> NoReturn:
        log.debug(
            "no %s rule for token type %r (%r at %s)",
            kind,
            token.type,
            token.match,
            token.span.start,
        )
        raise UnexpectedToken(token)


__all__ = ["DEFAULT_TERMINALS", "Parser", "normalize_terminals"]
