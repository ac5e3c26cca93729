# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema support: schemas authored as JSON/YAML documents."""

from __future__ import annotations

import copy
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

import jsonschema
import yaml
from jsonschema.exceptions import SchemaError

from ..exceptions import SchemaDefinitionError
from .coercion import coerce_to_type
from .issues import SchemaIssue, ValidationResult


logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass(frozen=True)
class JsonSchemaSpec:
    """A JSON Schema document used as an environment schema.

    Env values are strings, so with ``coerce`` enabled string values are
    converted according to the declared ``type`` of each top-level property
    before validation.
    """

    schema: Dict[str, Any]
    coerce: bool = True

    @property
    def is_record(self) -> bool:
        return self.schema.get("type") == "object" and isinstance(self.schema.get("properties"), Mapping)

    @property
    def properties(self) -> Dict[str, Any]:
        props = self.schema.get("properties")
        return dict(props) if isinstance(props, Mapping) else {}

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self.schema.get("required") or ())

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.properties)

    def strict(self) -> "JsonSchemaSpec":
        strict_schema = copy.deepcopy(self.schema)
        strict_schema["additionalProperties"] = False
        return JsonSchemaSpec(schema=strict_schema, coerce=self.coerce)


def _validator_for(schema: Dict[str, Any]):
    validator_cls = jsonschema.validators.validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaDefinitionError(f"Invalid JSON Schema: {e.message}") from e
    return validator_cls(schema)


def _prepare_record(spec: JsonSchemaSpec, data: Mapping[str, Any]) -> Dict[str, Any]:
    # None means "unset"; dropping it lets "required" report the key.
    prepared = {k: v for k, v in data.items() if v is not None}
    for name, prop in spec.properties.items():
        if not isinstance(prop, Mapping):
            continue
        if name not in prepared and "default" in prop:
            prepared[name] = copy.deepcopy(prop["default"])
        elif name in prepared and spec.coerce and isinstance(prepared[name], str):
            prepared[name] = coerce_to_type(prepared[name], prop.get("type"))
    return prepared


def _unexpected_keys(error) -> List[str]:
    instance = error.instance
    declared = error.schema.get("properties") or {}
    patterns = list(error.schema.get("patternProperties") or {})
    return [
        key
        for key in instance
        if key not in declared and not any(re.search(pattern, key) for pattern in patterns)
    ]


def _error_issues(error) -> List[SchemaIssue]:
    """Split object-level errors so every offending key gets its own path."""
    path = tuple(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, Mapping):
        return [
            SchemaIssue(message="Required", path=path + (name,))
            for name in error.validator_value
            if name not in error.instance
        ]
    if (
        error.validator == "additionalProperties"
        and error.validator_value is False
        and isinstance(error.instance, Mapping)
    ):
        return [
            SchemaIssue(message=f"Unrecognized key '{key}'", path=path + (key,))
            for key in _unexpected_keys(error)
        ]
    return [SchemaIssue(message=error.message, path=path)]


def validate_json_schema(spec: JsonSchemaSpec, data: Any) -> ValidationResult:
    """Validate data and collect every error, sorted by path."""
    validator = _validator_for(spec.schema)

    instance = data
    if spec.is_record and isinstance(data, Mapping):
        instance = _prepare_record(spec, data)

    issues: List[SchemaIssue] = []
    for error in validator.iter_errors(instance):
        # Each missing property raises its own "required" error.
        for issue in _error_issues(error):
            if issue not in issues:
                issues.append(issue)
    issues.sort(key=lambda issue: [str(p) for p in issue.path])

    if issues:
        return ValidationResult(value=None, issues=tuple(issues))

    if spec.is_record and isinstance(instance, Mapping):
        declared = spec.properties
        value = {name: instance.get(name) for name in declared}
        return ValidationResult(value=value)
    return ValidationResult(value=instance)


def load_schema_file(path: Union[str, Path], *, coerce: bool = True) -> JsonSchemaSpec:
    """Load a JSON Schema document from a ``.json``, ``.yaml`` or ``.yml`` file.

    Args:
        path: Schema file path
        coerce: Whether string env values are coerced by declared type

    Returns:
        JsonSchemaSpec wrapping the document

    Raises:
        SchemaDefinitionError: If the file is missing, unparsable or not a valid schema
    """
    schema_path = Path(path)
    if schema_path.suffix.lower() not in SCHEMA_SUFFIXES:
        raise SchemaDefinitionError(
            f"Unsupported schema file type '{schema_path.suffix}'. Expected one of: {', '.join(SCHEMA_SUFFIXES)}"
        )
    if not schema_path.is_file():
        raise SchemaDefinitionError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            if schema_path.suffix.lower() == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaDefinitionError(f"Failed to parse schema file {schema_path}: {e}") from e

    if not isinstance(document, dict):
        raise SchemaDefinitionError(f"Schema root must be a mapping/object: {schema_path}")

    _validator_for(document)
    logger.debug("Loaded schema %s with %d properties", schema_path, len(document.get("properties") or {}))
    return JsonSchemaSpec(schema=document, coerce=coerce)
