"""Literal and call encoding — Python values to R source text.

The literal grammar is a closed set:
  number -> decimal text, text/tag -> single-quoted, bool -> TRUE/FALSE,
  sequence -> scalar collapse (length 1) or ``c(...)``, expression -> its own
  encoding.

Quotes inside text are emitted as-is. Text containing a single quote
produces an R syntax error in the generated script.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any


class RExpression(ABC):
    """A value that renders itself as R source text.

    Domain value objects and commands both derive from this class so the
    literal encoder can delegate to them.
    """

    @property
    def is_null(self) -> bool:
        """True when the expression stands for R's absent value."""
        return False

    @abstractmethod
    def encode(self) -> str:
        """Return the R source text for this expression."""


type RLiteral = bool | int | float | str | Enum | RExpression | Sequence[RLiteral]


def is_number(value: Any) -> bool:
    """Return True for ints and floats, excluding bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Return True for lists and tuples (text is never a sequence here)."""
    return isinstance(value, (list, tuple))


def _encode_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Inf" if value > 0 else "-Inf"
    return str(value)


def encode_literal(value: RLiteral) -> str:
    """Render a single value as R literal text.

    Raises:
        TypeError: *value* is outside the literal grammar (None, dicts, ...).

    Examples:
        >>> encode_literal([1, 'a', True])
        "c(1, 'a', TRUE)"
        >>> encode_literal([2.5])
        '2.5'
    """
    if isinstance(value, RExpression):
        return value.encode()
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if is_number(value):
        return _encode_number(value)
    if isinstance(value, Enum):
        return f"'{value.value}'"
    if isinstance(value, str):
        return f"'{value}'"
    if is_sequence(value):
        if len(value) == 1:
            return encode_literal(value[0])
        return f"c({', '.join(encode_literal(item) for item in value)})"
    msg = f"Cannot encode {type(value).__name__} as an R literal: {value!r}"
    raise TypeError(msg)


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, RExpression) and value.is_null)


def encode_call(
    name: str,
    positionals: Sequence[RLiteral] = (),
    named: Mapping[str, RLiteral | None] | None = None,
) -> str:
    """Render ``name(p0, p1, ..., k0=v0, k1=v1, ...)``.

    Named arguments whose value is None (or an expression standing for
    null) are skipped entirely.
    """
    parts = [encode_literal(arg) for arg in positionals]
    for key, value in (named or {}).items():
        if _is_absent(value):
            continue
        parts.append(f"{key}={encode_literal(value)}")
    return f"{name}({', '.join(parts)})"
