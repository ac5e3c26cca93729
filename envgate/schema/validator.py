from __future__ import annotations

import re
from typing import Any, List, Mapping, Tuple
from urllib.parse import urlparse

from ..exceptions import SchemaDefinitionError
from .coercion import coerce_boolean_value, coerce_numeric_value
from .issues import PathElement, SchemaIssue, ValidationResult
from .json_schema import JsonSchemaSpec, validate_json_schema
from .specs import (
    SCALAR_KINDS,
    FieldSpec,
    ListSpec,
    ObjectSpec,
    RefineSpec,
    ScalarSpec,
    TransformSpec,
    UnionSpec,
)


Path = Tuple[PathElement, ...]
Parsed = Tuple[Any, List[SchemaIssue]]


def validate(schema: Any, data: Any) -> ValidationResult:
    """Validate data against a schema and return the parsed value or all issues."""
    if isinstance(schema, JsonSchemaSpec):
        return validate_json_schema(schema, data)

    value, issues = _parse_spec(schema, data, path=())
    if issues:
        return ValidationResult(value=None, issues=tuple(issues))
    return ValidationResult(value=value)


def _issue(message: str, path: Path) -> List[SchemaIssue]:
    return [SchemaIssue(message=message, path=path)]


def _type_label(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _parse_spec(spec: Any, value: Any, *, path: Path) -> Parsed:
    if isinstance(spec, ScalarSpec):
        return _parse_scalar(spec, value, path=path)

    if isinstance(spec, ObjectSpec):
        return _parse_object(spec, value, path=path)

    if isinstance(spec, ListSpec):
        return _parse_list(spec, value, path=path)

    if isinstance(spec, UnionSpec):
        # Accept the first option that validates with no issues.
        for opt in spec.options:
            parsed, errs = _parse_spec(opt, value, path=path)
            if not errs:
                return parsed, []
        return None, _issue("Value does not match any allowed schema", path)

    if isinstance(spec, TransformSpec):
        parsed, errs = _parse_spec(spec.inner, value, path=path)
        if errs:
            return None, errs
        try:
            return spec.func(parsed), []
        except (ValueError, TypeError) as exc:
            return None, _issue(str(exc) or "Transform failed", path)

    if isinstance(spec, RefineSpec):
        parsed, errs = _parse_spec(spec.inner, value, path=path)
        if errs:
            return None, errs
        if not spec.check(parsed):
            return None, _issue(spec.message, path)
        return parsed, []

    if isinstance(spec, JsonSchemaSpec):
        result = validate_json_schema(spec, value)
        return result.value, [i.prefixed(*path) for i in result.issues]

    raise SchemaDefinitionError(f"Unknown schema spec: {type(spec).__name__}")


def _parse_scalar(spec: ScalarSpec, value: Any, *, path: Path) -> Parsed:
    kind = spec.kind
    if kind not in SCALAR_KINDS:
        raise SchemaDefinitionError(f"Unknown scalar kind '{kind}'. Valid kinds: {SCALAR_KINDS}")

    if kind == "any":
        return value, []

    if value is None:
        return None, _issue(f"Expected {kind}, received None", path)

    if kind in ("integer", "number"):
        if not spec.coerce and (isinstance(value, bool) or not isinstance(value, (int, float))):
            return None, _issue(f"Expected {kind}, received {_type_label(value)}", path)
        try:
            value = coerce_numeric_value(value, kind)
        except ValueError as exc:
            return None, _issue(str(exc), path)
        if spec.minimum is not None and value < spec.minimum:
            return None, _issue(f"Number must be greater than or equal to {spec.minimum}", path)
        if spec.maximum is not None and value > spec.maximum:
            return None, _issue(f"Number must be less than or equal to {spec.maximum}", path)

    elif kind == "boolean":
        if not spec.coerce and not isinstance(value, bool):
            return None, _issue(f"Expected boolean, received {_type_label(value)}", path)
        try:
            value = coerce_boolean_value(value)
        except ValueError as exc:
            return None, _issue(str(exc), path)

    else:
        if spec.coerce and isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            return None, _issue(f"Expected string, received {_type_label(value)}", path)
        if spec.min_length is not None and len(value) < spec.min_length:
            return None, _issue(f"String must contain at least {spec.min_length} character(s)", path)
        if spec.max_length is not None and len(value) > spec.max_length:
            return None, _issue(f"String must contain at most {spec.max_length} character(s)", path)
        if spec.pattern is not None and re.search(spec.pattern, value) is None:
            return None, _issue(f"String does not match pattern '{spec.pattern}'", path)
        if kind == "url":
            parsed_url = urlparse(value)
            if not parsed_url.scheme or not parsed_url.netloc:
                return None, _issue("Invalid url", path)

    if spec.choices is not None and value not in spec.choices:
        expected = " | ".join(f"'{c}'" for c in spec.choices)
        return None, _issue(f"Invalid enum value. Expected {expected}, received '{value}'", path)

    return value, []


def _parse_list(spec: ListSpec, value: Any, *, path: Path) -> Parsed:
    if isinstance(value, str) and spec.separator is not None:
        value = [part.strip() for part in value.split(spec.separator) if part.strip()]
    if not isinstance(value, (list, tuple)):
        return None, _issue(f"Expected list, received {_type_label(value)}", path)
    if spec.min_items is not None and len(value) < spec.min_items:
        return None, _issue(f"List must contain at least {spec.min_items} item(s)", path)

    items: List[Any] = []
    issues: List[SchemaIssue] = []
    for idx, item in enumerate(value):
        parsed, errs = _parse_spec(spec.item, item, path=path + (idx,))
        issues.extend(errs)
        items.append(parsed)
    if issues:
        return None, issues
    return items, []


def _parse_field(name: str, field_spec: FieldSpec, value: Any, *, path: Path) -> Parsed:
    field_path = path + (name,)
    if value is None:
        if field_spec.has_default:
            return _parse_spec(field_spec.spec, field_spec.default, path=field_path)
        if not field_spec.required:
            return None, []
        return None, _issue("Required", field_path)
    return _parse_spec(field_spec.spec, value, path=field_path)


def _parse_object(spec: ObjectSpec, value: Any, *, path: Path) -> Parsed:
    if not isinstance(value, Mapping):
        return None, _issue(f"Expected object, received {_type_label(value)}", path)

    result = {}
    issues: List[SchemaIssue] = []
    for name, field_spec in spec.fields.items():
        parsed, errs = _parse_field(name, field_spec, value.get(name), path=path)
        issues.extend(errs)
        result[name] = parsed

    if not spec.allow_extra:
        for key in value:
            if key not in spec.fields:
                issues.append(SchemaIssue(message=f"Unrecognized key '{key}'", path=path + (key,)))

    if issues:
        return None, issues
    return result, []
