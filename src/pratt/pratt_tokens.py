"""
Token-stream contract consumed by the Pratt engine.

The engine never tokenizes anything itself. It pulls tokens from a host-supplied
stream and only needs a handful of things from each token:

Classes:
    Position: A 1-based (line, column) source location.
    Span: The start/end positions a token covers.
    TokenLike: Structural protocol every token must satisfy.
    TokenStream: Structural protocol for the `next()`/`peek()` collaborator.
    Token: A ready-made immutable token hosts may use directly.

Notes:
    The type key `None` is reserved for end-of-input. `Token.end_of_input()` builds
    such a token; its binding power is always negative infinity.

Example:
    >>> tok = Token("NUM", "42", Position(1, 1), Position(1, 3))
    >>> tok.span.start
    Position(line=1, column=1)
"""

from __future__ import annotations

from typing import Any, Hashable, NamedTuple, Protocol, runtime_checkable


class Position(NamedTuple):
    """A 1-based line/column location in the source text."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Span(NamedTuple):
    """Source range covered by a token."""

    start: Position
    end: Position


@runtime_checkable
class TokenLike(Protocol):  # pragma: no cover
    """Structural interface of a token as seen by the engine.

    Attributes:
        type (Hashable | None): Host-defined type key; `None` means end-of-input.
        match (str): The literal text the token was produced from.
        span (Span): Start and end positions of the token.
    """

    type: Hashable | None
    match: str
    span: Span

    def is_eof(self) -> bool: ...


class TokenStream(Protocol):  # pragma: no cover
    """The collaborator the engine reads tokens from.

    Methods:
        next(): Consume and return the next token.
        peek(): Return the next token without consuming it.
    """

    def next(self) -> TokenLike: ...

    def peek(self) -> TokenLike: ...


class Token:
    """An immutable token.

    Attributes:
        type (Hashable | None): The token type key (e.g. 'NUM', '+'), or `None` at end-of-input.
        match (str): The raw text matched for this token.
        span (Span): The source range the token covers.
    """

    __slots__ = ("_type", "_match", "_span")

    def __init__(
        self,
        type_: Hashable | None,
        match: str,
        start: Position = Position(0, 0),
        end: Position | None = None,
    ):
        """Initializes a new Token instance.

        Args:
            type_ (Hashable | None): The token's type key.
            match (str): The literal text of the token.
            start (Position, optional): Where the token starts.
            end (Position, optional): Where the token ends. Defaults to `start`.
        """
        self._type = type_
        self._match = match
        self._span = Span(start, end if end is not None else start)

    @classmethod
    def end_of_input(cls, position: Position = Position(0, 0)) -> "Token":
        """Builds the end-of-input token located at `position`."""
        return cls(None, "", position, position)

    @property
    def type(self) -> Hashable | None:
        return self._type

    @property
    def match(self) -> str:
        return self._match

    @property
    def span(self) -> Span:
        return self._span

    def is_eof(self) -> bool:
        """Returns True for the end-of-input token."""
        return self._type is None

    def __repr__(self) -> str:
        if self.is_eof():
            return f"Token(EOF, at {self._span.start})"
        return f"Token({self._type}, {self._match!r}, at {self._span.start})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self._type == other._type
            and self._match == other._match
            and self._span == other._span
        )

    def __hash__(self) -> int:
        return hash((self._type, self._match, self._span))


__all__ = ["Position", "Span", "Token", "TokenLike", "TokenStream"]
