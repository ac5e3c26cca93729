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

"""Generate ``.env.example`` files from record schemas."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..exceptions import SchemaDefinitionError
from ..schema import (
    JsonSchemaSpec,
    ListSpec,
    ObjectSpec,
    RefineSpec,
    ScalarSpec,
    TransformSpec,
    UnionSpec,
)
from .renderer import TemplateRenderer


ENV_EXAMPLE_TEMPLATE = "env.example.jinja2"


@dataclass(frozen=True)
class EnvVariableDoc:
    name: str
    type: str
    required: bool
    has_default: bool = False
    default: str = ""
    description: Optional[str] = None


def format_default(value: Any) -> str:
    """Render a default the way it would be written in a .env file."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(format_default(v) for v in value)
    if isinstance(value, Mapping):
        return json.dumps(value)
    return str(value)


def describe_spec(spec: Any) -> str:
    if isinstance(spec, ScalarSpec):
        if spec.choices is not None:
            return "one of " + " | ".join(str(c) for c in spec.choices)
        return spec.kind
    if isinstance(spec, ListSpec):
        sep = f" separated by '{spec.separator}'" if spec.separator else ""
        return f"list of {describe_spec(spec.item)}{sep}"
    if isinstance(spec, UnionSpec):
        return " | ".join(describe_spec(opt) for opt in spec.options)
    if isinstance(spec, (TransformSpec, RefineSpec)):
        return describe_spec(spec.inner)
    return type(spec).__name__


def _describe_json_property(prop: Mapping[str, Any]) -> str:
    if "enum" in prop:
        return "one of " + " | ".join(str(c) for c in prop["enum"])
    prop_type = prop.get("type", "any")
    if isinstance(prop_type, list):
        return " | ".join(str(t) for t in prop_type)
    if prop.get("format"):
        return f"{prop_type} ({prop['format']})"
    return str(prop_type)


def collect_variables(schema: Any) -> List[EnvVariableDoc]:
    """Collect one documentation entry per declared variable.

    Raises:
        SchemaDefinitionError: If the schema is not a record schema
    """
    variables: List[EnvVariableDoc] = []

    if isinstance(schema, ObjectSpec):
        for name, field_spec in schema.fields.items():
            variables.append(
                EnvVariableDoc(
                    name=name,
                    type=describe_spec(field_spec.spec),
                    required=field_spec.required and not field_spec.has_default,
                    has_default=field_spec.has_default,
                    default=format_default(field_spec.default) if field_spec.has_default else "",
                    description=field_spec.description,
                )
            )
        return variables

    if isinstance(schema, JsonSchemaSpec) and schema.is_record:
        required = set(schema.required)
        for name, prop in schema.properties.items():
            prop = prop if isinstance(prop, Mapping) else {}
            has_default = "default" in prop
            variables.append(
                EnvVariableDoc(
                    name=name,
                    type=_describe_json_property(prop),
                    required=name in required and not has_default,
                    has_default=has_default,
                    default=format_default(prop.get("default")) if has_default else "",
                    description=prop.get("description"),
                )
            )
        return variables

    raise SchemaDefinitionError(f"Cannot generate an env example from a non-record schema: {type(schema).__name__}")


def render_env_example(schema: Any, *, source_name: str = "schema", renderer: Optional[TemplateRenderer] = None) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render_template(
        ENV_EXAMPLE_TEMPLATE,
        source_name=source_name,
        variables=collect_variables(schema),
    )


def write_env_example(schema: Any, output_path: str, *, source_name: str = "schema") -> None:
    TemplateRenderer().render_template_to_file(
        ENV_EXAMPLE_TEMPLATE,
        output_path,
        source_name=source_name,
        variables=collect_variables(schema),
    )
