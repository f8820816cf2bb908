"""Evaluated CMake values, confidence levels and value conversion helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Union

Value = Union[str, bool, float, List[str]]

_FALSE_STRINGS = frozenset({"0", "OFF", "NO", "FALSE", "N", "IGNORE", "NOTFOUND"})
_TRUE_STRINGS = frozenset({"1", "ON", "YES", "TRUE", "Y"})
_C_WHITESPACE = " \t\n\v\f\r"


class Confidence(IntEnum):
    """How sure the evaluator is about a value; higher means more certain."""

    UNKNOWN = 0
    UNCERTAIN = 1
    LIKELY = 2
    CERTAIN = 3


@dataclass
class EvaluatedValue:
    """A value produced by evaluation together with its confidence."""

    value: Value
    confidence: Confidence = Confidence.CERTAIN

    def is_certain(self) -> bool:
        return self.confidence == Confidence.CERTAIN


def _format_number(number: float) -> str:
    # Six significant digits, trailing zeros dropped.
    return format(float(number), "g")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_string(value: Value) -> str:
    """Render a value as CMake would see it; lists are joined with ';'."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if _is_number(value):
        return _format_number(value)
    if isinstance(value, list):
        return ";".join(value)
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def is_truthy(value: Value) -> bool:
    """Apply CMake's rules for whether a value counts as true."""
    if isinstance(value, str):
        return (
            bool(value)
            and value not in _FALSE_STRINGS
            and not value.endswith("-NOTFOUND")
        )
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0.0
    if isinstance(value, list):
        return bool(value)
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def to_bool(value: Value) -> Optional[bool]:
    """Convert to a boolean, or None when a string is not a boolean constant."""
    if isinstance(value, str):
        if value in _TRUE_STRINGS:
            return True
        if not value or value in _FALSE_STRINGS or value.endswith("-NOTFOUND"):
            return False
        return None
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0.0
    if isinstance(value, list):
        return bool(value)
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def _parse_double(text: str) -> Optional[float]:
    body = text.lstrip(_C_WHITESPACE)
    if not body or body[-1] in _C_WHITESPACE or "_" in body:
        return None
    try:
        result = float(body)
    except ValueError:
        unsigned = body.lstrip("+-")
        if not unsigned.lower().startswith("0x"):
            return None
        try:
            result = float.fromhex(body)
        except ValueError:
            return None
    if math.isinf(result) and "inf" not in body.lower():
        # Out of range for a double.
        return None
    return result


def to_double(value: Value) -> Optional[float]:
    """Convert to a float, or None when that is not possible."""
    if isinstance(value, str):
        return _parse_double(value)
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if _is_number(value):
        return float(value)
    if isinstance(value, list):
        return None
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def to_list(value: Value) -> List[str]:
    """Convert to a CMake list, splitting strings on ';'."""
    if isinstance(value, str):
        if not value:
            return []
        if ";" in value:
            items = value.split(";")
            if items[-1] == "":
                items.pop()
            return items
        return [value]
    if isinstance(value, bool):
        return ["TRUE" if value else "FALSE"]
    if _is_number(value):
        return [_format_number(value)]
    if isinstance(value, list):
        return list(value)
    raise TypeError(f"unsupported value type: {type(value).__name__}")