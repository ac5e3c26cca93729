"""Schema definitions and validation.

This package intentionally avoids depending on the env gating modules so that
schemas can be validated on their own.
"""

from .issues import (
    ROOT_MARKER,
    SchemaIssue,
    ValidationResult,
    format_issues,
)
from .json_schema import JsonSchemaSpec, load_schema_file
from .specs import (
    MISSING,
    FieldSpec,
    ListSpec,
    ObjectSpec,
    RefineSpec,
    ScalarSpec,
    TransformSpec,
    UnionSpec,
    any_value,
    boolean,
    enum,
    env_object,
    field,
    integer,
    list_of,
    number,
    optional,
    refine,
    string,
    transform,
    union,
    url,
)
from .strictness import adapt_strictness, is_record_schema
from .validator import validate
