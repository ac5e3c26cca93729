from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

SCALAR_KINDS = ("string", "integer", "number", "boolean", "url", "any")


@dataclass(frozen=True)
class ScalarSpec:
    kind: str
    coerce: bool = True
    choices: Optional[Tuple[Any, ...]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None

    is_record = False


@dataclass(frozen=True)
class ListSpec:
    item: "SchemaSpec"
    separator: Optional[str] = ","
    min_items: Optional[int] = None

    is_record = False


@dataclass(frozen=True)
class UnionSpec:
    options: Tuple["SchemaSpec", ...]

    is_record = False


@dataclass(frozen=True)
class TransformSpec:
    inner: "SchemaSpec"
    func: Callable[[Any], Any]

    is_record = False


@dataclass(frozen=True)
class RefineSpec:
    inner: "SchemaSpec"
    check: Callable[[Any], bool]
    message: str = "Invalid value"

    is_record = False


@dataclass(frozen=True)
class FieldSpec:
    spec: "SchemaSpec"
    required: bool = True
    default: Any = MISSING
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True)
class ObjectSpec:
    """Fixed-shape record of named fields.

    Undeclared input keys are dropped from the result, or reported when
    ``allow_extra`` is false.
    """

    fields: Dict[str, FieldSpec] = dc_field(default_factory=dict)
    allow_extra: bool = True

    is_record = True

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.fields)

    def strict(self) -> "ObjectSpec":
        return dataclasses.replace(self, allow_extra=False)


SchemaSpec = Union[ScalarSpec, ListSpec, UnionSpec, TransformSpec, RefineSpec, ObjectSpec]


# -------------------------
# Builders
# -------------------------

def string(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    coerce: bool = True,
) -> ScalarSpec:
    return ScalarSpec("string", coerce=coerce, min_length=min_length, max_length=max_length, pattern=pattern)


def integer(*, minimum: Optional[int] = None, maximum: Optional[int] = None, coerce: bool = True) -> ScalarSpec:
    return ScalarSpec("integer", coerce=coerce, minimum=minimum, maximum=maximum)


def number(*, minimum: Optional[float] = None, maximum: Optional[float] = None, coerce: bool = True) -> ScalarSpec:
    return ScalarSpec("number", coerce=coerce, minimum=minimum, maximum=maximum)


def boolean(*, coerce: bool = True) -> ScalarSpec:
    return ScalarSpec("boolean", coerce=coerce)


def url() -> ScalarSpec:
    return ScalarSpec("url")


def enum(*choices: Any) -> ScalarSpec:
    if not choices:
        raise ValueError("enum() needs at least one choice")
    return ScalarSpec("string", choices=tuple(choices))


def any_value() -> ScalarSpec:
    return ScalarSpec("any")


def list_of(item: SchemaSpec, *, separator: Optional[str] = ",", min_items: Optional[int] = None) -> ListSpec:
    return ListSpec(item=item, separator=separator, min_items=min_items)


def union(*options: SchemaSpec) -> UnionSpec:
    if not options:
        raise ValueError("union() needs at least one option")
    return UnionSpec(options=tuple(options))


def transform(inner: SchemaSpec, func: Callable[[Any], Any]) -> TransformSpec:
    return TransformSpec(inner=inner, func=func)


def refine(inner: SchemaSpec, check: Callable[[Any], bool], message: str = "Invalid value") -> RefineSpec:
    return RefineSpec(inner=inner, check=check, message=message)


def field(spec: SchemaSpec, *, default: Any = MISSING, description: Optional[str] = None) -> FieldSpec:
    return FieldSpec(spec=spec, required=True, default=default, description=description)


def optional(spec: SchemaSpec, *, description: Optional[str] = None) -> FieldSpec:
    return FieldSpec(spec=spec, required=False, description=description)


def env_object(fields: Mapping[str, Union[FieldSpec, SchemaSpec]], *, allow_extra: bool = True) -> ObjectSpec:
    """Build a record schema; bare specs become required fields."""
    normalized: Dict[str, FieldSpec] = {}
    for name, value in fields.items():
        normalized[name] = value if isinstance(value, FieldSpec) else FieldSpec(spec=value)
    return ObjectSpec(fields=normalized, allow_extra=allow_extra)
