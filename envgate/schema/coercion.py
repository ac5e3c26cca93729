from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional


BOOL_TYPES = {"bool", "boolean"}
INTEGER_TYPES = {"int", "integer"}
FLOAT_TYPES = {"float", "double", "number"}

NUMERIC_TYPES = INTEGER_TYPES | FLOAT_TYPES

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def normalize_type_name(type_name: Any) -> Optional[str]:
    if type_name is None:
        return None
    if isinstance(type_name, str):
        return type_name.strip().lower()
    return str(type_name).strip().lower()


def is_numeric_type(type_name: Optional[str]) -> bool:
    return bool(type_name) and type_name in NUMERIC_TYPES


def is_integer_type(type_name: Optional[str]) -> bool:
    return bool(type_name) and type_name in INTEGER_TYPES


def is_boolean_type(type_name: Optional[str]) -> bool:
    return bool(type_name) and type_name in BOOL_TYPES


def coerce_numeric_value(value: Any, type_name: Optional[str]) -> Any:
    """Coerce numeric strings to numbers for numeric types.

    Raises ValueError if the value cannot be coerced.
    """
    if value is None or not is_numeric_type(type_name):
        return value

    if isinstance(value, bool):
        raise ValueError(f"Expected {type_name}, received boolean")

    if isinstance(value, (int, float)):
        if is_integer_type(type_name):
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(f"Expected integer, received non-integral number '{value}'")
            return int(value)
        return float(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"Expected {type_name}, received empty string")
        try:
            dec = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"Expected {type_name}, received '{value}'") from exc
        if not dec.is_finite():
            raise ValueError(f"Expected finite {type_name}, received '{value}'")
        if is_integer_type(type_name):
            if dec != dec.to_integral_value():
                raise ValueError(f"Expected integer, received non-integral number '{value}'")
            return int(dec)
        return float(dec)

    raise ValueError(f"Expected {type_name}, received {type(value).__name__}")


def coerce_boolean_value(value: Any) -> Any:
    """Coerce the usual env spellings of true/false to bool.

    Raises ValueError for anything else.
    """
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, int) and value in (0, 1):
        return bool(value)

    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False

    raise ValueError(f"Expected boolean, received '{value}'")


def coerce_to_type(value: Any, type_name: Any) -> Any:
    """Best-effort coercion by type name; values that do not coerce are returned as-is.

    A list of type names (JSON Schema union types such as ``["integer", "null"]``)
    is tried in order and the first type the value coerces to wins.
    """
    if isinstance(type_name, (list, tuple)):
        for member in type_name:
            name = normalize_type_name(member)
            if name == "null":
                continue
            if name == "string" and isinstance(value, str):
                return value
            coerced = coerce_to_type(value, name)
            if coerced is not value:
                return coerced
        return value

    name = normalize_type_name(type_name)
    try:
        if is_numeric_type(name):
            return coerce_numeric_value(value, name)
        if is_boolean_type(name):
            return coerce_boolean_value(value)
    except ValueError:
        return value
    return value
