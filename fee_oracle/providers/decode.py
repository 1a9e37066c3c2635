"""Shared helpers for decoding provider JSON bodies."""
from __future__ import annotations

import math
from typing import Any

from ..errors import ParseFailure


def field(obj: Any, key: str | int, where: str) -> Any:
    """Return ``obj[key]`` or raise ParseFailure naming the missing path."""
    try:
        value = obj[key]
    except (KeyError, IndexError, TypeError):
        raise ParseFailure(f"missing {where}") from None
    if value is None:
        raise ParseFailure(f"{where} is null")
    return value


def to_price(value: Any, where: str, *, allow_str: bool = False) -> float:
    """Coerce a JSON value to a finite float.

    Booleans are rejected even though they are ints. Strings are accepted
    only when ``allow_str`` is set.
    """
    if isinstance(value, bool):
        raise ParseFailure(f"{where} is not numeric: {value!r}")
    if isinstance(value, (int, float)):
        price = float(value)
    elif allow_str and isinstance(value, str):
        try:
            price = float(value)
        except ValueError:
            raise ParseFailure(f"{where} is not numeric: {value!r}") from None
    else:
        raise ParseFailure(f"{where} is not numeric: {value!r}")
    if not math.isfinite(price):
        raise ParseFailure(f"{where} is not finite: {value!r}")
    return price
