"""
Provides the `PrecedenceTable` class for declaring binding powers in bulk.

Instead of one `builder.bp(...)` call per token type, a host can describe its
operator precedence as data and apply it to a parser in one go.

Classes:
    - PrecedenceTable: Maps token types to fixed binding powers.

Features:
    - Dict mode: explicit type (or group of types) to binding power mapping
    - List mode: ordered precedence levels, lowest binding first
    - Detects types assigned two different binding powers
    - Loads dict-mode tables from JSON files
    - Produces a plain-text report of the table

Usage:
    >>> table = PrecedenceTable()
    >>> table.configure([["+", "-"], ["*", "/"], ["^"]])
    >>> table.summary()["*"]
    20
    >>> parser.builder().precedence(table)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Hashable

from pratt.pratt_errors import PrecedenceError

log = logging.getLogger(__name__)


class PrecedenceTable:
    """A token-type to binding-power table built from configuration data.

    Attributes:
        powers (dict[Hashable, int]): The configured binding power of each type.
        step (int): Distance between consecutive levels in list mode.
    """

    def __init__(self, step: int = 10) -> None:
        self.powers: dict[Hashable, int] = {}
        self.step = step

    @classmethod
    def from_config(
        cls, cfg: list[Any] | dict[Any, Any], step: int = 10
    ) -> "PrecedenceTable":
        """Builds a table and applies `cfg` to it."""
        table = cls(step)
        table.configure(cfg)
        return table

    def _extract_types(self, entry: Any) -> list[Hashable]:
        """Flattens a configuration key or level into individual token types.

        A string is always a single type, so `","` is a valid key. Containers
        are flattened recursively; dicts contribute their keys.
        """
        if entry is None:
            return []
        if isinstance(entry, str):
            return [entry]
        if isinstance(entry, (list, tuple, set, frozenset)):
            types: list[Hashable] = []
            for item in entry:
                types.extend(self._extract_types(item))
            return types
        if isinstance(entry, dict):
            return [k for k in entry.keys() if k is not None]
        return [entry]

    def configure(self, cfg: list[Any] | dict[Any, Any]) -> None:
        """
        Applies a precedence configuration to the table.

        Supports two modes:
        - Dict mode: maps a type, or a group of types, to an integer binding power.
        - List mode: each entry is one precedence level, lowest first; level `i`
          gets binding power `(i + 1) * step`.

        Args:
            cfg: The configuration object.

        Raises:
            PrecedenceError: If any of the following occur:
                - A binding power is not an integer
                - A type is given two different binding powers
                - `cfg` is neither a list nor a dict
        """
        pending: dict[Hashable, int] = {}
        conflicts: list[str] = []

        if isinstance(cfg, dict):
            pairs = list(cfg.items())
        elif isinstance(cfg, list):
            pairs = [(level, (idx + 1) * self.step) for idx, level in enumerate(cfg)]
        else:
            raise PrecedenceError("Configuration must be either a list or a dict")

        for group, power in pairs:
            if isinstance(power, bool) or not isinstance(power, int):
                raise PrecedenceError(f"Binding power must be an integer: {power!r}")
            for type_ in self._extract_types(group):
                existing = pending.get(type_, self.powers.get(type_, power))
                if existing != power:
                    conflicts.append(
                        f"{type_!r} → conflict between {existing} and {power}"
                    )
                else:
                    pending[type_] = power

        if conflicts:
            raise PrecedenceError("Binding power collision(s) detected", conflicts)

        self.powers.update(pending)
        log.debug("precedence table configured with %d type(s)", len(pending))

    def load_from_json(self, path: str) -> None:
        """
        Loads a dict-mode table from a JSON file and applies it via `configure`.

        Keys are comma-separated groups of types. A key with nothing but commas,
        such as `","`, names itself.

        Example JSON structure:
            {
                "+,-": 10,
                "*,/": 20,
                "^": 30
            }

        Args:
            path: Path to the JSON file.

        Raises:
            PrecedenceError: If the file cannot be read or the table is invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)
            if not isinstance(raw_cfg, dict):
                raise PrecedenceError("Precedence file must contain a JSON object")
            parsed_cfg: dict[tuple[str, ...], Any] = {}
            for key, value in raw_cfg.items():
                types = [part.strip() for part in key.split(",") if part.strip()]
                parsed_cfg[tuple(types) if types else (key,)] = value
            self.configure(parsed_cfg)
        except PrecedenceError:
            raise
        except (OSError, ValueError) as e:
            raise PrecedenceError(f"Failed to load precedence file: {e}") from e

    def report(self) -> str:
        """Returns one `type → power` line per entry, tightest binding first."""
        lines = [
            f"{str(type_):>12} → {power}"
            for type_, power in sorted(
                self.powers.items(), key=lambda item: (-item[1], str(item[0]))
            )
        ]
        return "\n".join(lines)

    def summary(self) -> dict[Hashable, int]:
        """Returns a copy of the table."""
        return dict(self.powers)


__all__ = ["PrecedenceTable"]
