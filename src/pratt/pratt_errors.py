"""
Exceptions raised by the pratt package.

Classes:
    PrattError: Base class for every error the package raises itself.
    UnexpectedToken: No prefix/infix rule exists for the token being dispatched.
    PrecedenceError: A precedence-table configuration is invalid.

Failures raised by the host's token stream or by rule handlers are never wrapped;
they reach the caller of `Parser.parse()` unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pratt.pratt_tokens import Position, TokenLike


class PrattError(Exception):
    """Base class for pratt errors."""


class UnexpectedToken(PrattError):
    """Raised when nud or led dispatch finds no rule for a token's type.

    Attributes:
        token (TokenLike): The offending token.
        position (Position): Where the offending token starts.

    Example:
        raise UnexpectedToken(tok)  # "Unexpected token: + (at 1:4)"
    """

    def __init__(self, token: TokenLike):
        self.token = token
        self.position: Position = token.span.start
        super().__init__(
            f"Unexpected token: {token.match} "
            f"(at {self.position.line}:{self.position.column})"
        )


class PrecedenceError(PrattError):
    """Raised when a precedence table is misconfigured.

    Attributes:
        conflicts (list[str]): One description per token type assigned two powers.
    """

    def __init__(self, message: str, conflicts: list[str] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


__all__ = ["PrattError", "PrecedenceError", "UnexpectedToken"]
