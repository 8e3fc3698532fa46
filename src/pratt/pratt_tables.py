"""
Rule tables and per-call parse state for the Pratt engine.

Classes:
    Fixed / Dynamic: The two shapes a binding power can take.
    RuleTables: The binding-power, prefix (nud) and infix (led) registries owned by one parser.
    StopHandle: Cooperative early-stop signal shared by the loops of one parse scope.
    ParseInfo: What a nud/led handler receives.
    ParseContext: The state one `Parser.parse()` invocation runs with.

Constants:
    NO_LEFT: Sentinel passed as `left` when an `either` rule runs in prefix position.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Union

from pratt.pratt_tokens import TokenLike

Resolver = Callable[[], float]
Handler = Callable[["ParseInfo"], Any]
Terminal = Union[float, Hashable, None]


@dataclass(frozen=True)
class Fixed:
    """A binding power known at registration time."""

    value: float

    def resolve(self) -> float:
        return self.value


@dataclass(frozen=True)
class Dynamic:
    """A binding power computed by calling `resolver` on every query."""

    resolver: Resolver

    def resolve(self) -> float:
        return self.resolver()


BindingPower = Union[Fixed, Dynamic]


def as_binding_power(value: BindingPower | float | Resolver) -> BindingPower:
    """Coerces a registration argument into a `Fixed` or `Dynamic` binding power.

    Args:
        value: A number, a zero-argument callable, or an existing binding power.

    Returns:
        The matching `BindingPower` variant.

    Raises:
        TypeError: If `value` is neither a real number nor callable.
    """
    if isinstance(value, (Fixed, Dynamic)):
        return value
    if isinstance(value, bool):
        raise TypeError("binding power must be a number or a callable, not bool")
    if isinstance(value, (int, float)):
        return Fixed(value)
    if callable(value):
        return Dynamic(value)
    raise TypeError(
        f"binding power must be a number or a callable, got {type(value).__name__}"
    )


class _NoLeft:
    """Type of the `NO_LEFT` sentinel."""

    _instance: "_NoLeft | None" = None

    def __new__(cls) -> "_NoLeft":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_LEFT"

    def __bool__(self) -> bool:
        return False


NO_LEFT = _NoLeft()


class RuleTables:
    """The three registries a parser dispatches through.

    Each map is keyed by token type. Re-registering a type overwrites the previous
    entry; there is no ordering between entries.

    Attributes:
        bps (dict): Token type to `Fixed` / `Dynamic` binding power.
        nuds (dict): Token type to prefix handler.
        leds (dict): Token type to infix/postfix handler.
    """

    def __init__(self) -> None:
        self.bps: dict[Hashable, BindingPower] = {}
        self.nuds: dict[Hashable, Handler] = {}
        self.leds: dict[Hashable, Handler] = {}

    def set_bp(self, type_: Hashable, bp: BindingPower | float | Resolver) -> None:
        if type_ is None:
            raise ValueError("the None type key is reserved for end-of-input")
        self.bps[type_] = as_binding_power(bp)

    def set_nud(self, type_: Hashable, handler: Handler) -> None:
        self.nuds[type_] = handler

    def set_led(self, type_: Hashable, handler: Handler) -> None:
        self.leds[type_] = handler

    def resolve_bp(self, type_: Hashable | None) -> float:
        """Resolves a type's binding power, calling dynamic resolvers every time.

        Returns:
            float: `-inf` for the end-of-input key, `+inf` for unregistered types.
        """
        if type_ is None:
            return -math.inf
        entry = self.bps.get(type_)
        if entry is None:
            return math.inf
        return entry.resolve()


class StopHandle:
    """Cooperative cancellation for one parse scope.

    A handler calls the handle to stop every loop that shares it. The first call
    records the stop value; later calls leave it in place. `NO_LEFT` is recorded
    and returned as `None`, so an `either` handler can `stop(info.left)` in prefix
    position.

    Attributes:
        triggered (bool): Whether `stop()` has been called.
        value (Any): The value passed to the first `stop()` call.
    """

    def __init__(self) -> None:
        self.triggered = False
        self.value: Any = None

    def __call__(self, value: Any = None) -> Any:
        if value is NO_LEFT:
            value = None
        if not self.triggered:
            self.triggered = True
            self.value = value
        return value

    def __repr__(self) -> str:
        if self.triggered:
            return f"StopHandle(triggered, value={self.value!r})"
        return "StopHandle(pending)"


@dataclass(frozen=True)
class ParseInfo:
    """Arguments handed to a nud or led handler.

    Attributes:
        token: The token being dispatched.
        bp: The token's binding power, resolved at dispatch time.
        stop: The stop handle of the current parse scope.
        context: Host payload passed to `Parser.parse(context=...)`.
        left: The value parsed so far, or `NO_LEFT` in prefix position.
    """

    token: TokenLike
    bp: float = 0
    stop: StopHandle = field(default_factory=StopHandle)
    context: Any = None
    left: Any = NO_LEFT

    @property
    def is_prefix(self) -> bool:
        return self.left is NO_LEFT


@dataclass
class ParseContext:
    """State for a single `Parser.parse()` call."""

    stop: StopHandle
    context: Any = None
    terminals: list[Terminal] = field(default_factory=lambda: [0])

    def info(self, token: TokenLike, bp: float, left: Any = NO_LEFT) -> ParseInfo:
        return ParseInfo(
            token=token, bp=bp, stop=self.stop, context=self.context, left=left
        )


__all__ = [
    "NO_LEFT",
    "BindingPower",
    "Dynamic",
    "Fixed",
    "Handler",
    "ParseContext",
    "ParseInfo",
    "Resolver",
    "RuleTables",
    "StopHandle",
    "Terminal",
    "as_binding_power",
]
