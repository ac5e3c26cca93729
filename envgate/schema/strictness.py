"""Strict variants of record schemas."""

import logging
from typing import Any


logger = logging.getLogger(__name__)


def is_record_schema(schema: Any) -> bool:
    """Return whether the schema describes a fixed-shape record."""
    return bool(getattr(schema, "is_record", False))


def adapt_strictness(schema: Any, strict: bool) -> Any:
    """Return a variant that rejects undeclared keys when strict and record-shaped.

    Schemas that are not records (scalars, lists, unions, transforms) are
    returned unchanged.
    """
    if strict and is_record_schema(schema):
        return schema.strict()
    if strict:
        logger.debug("Strict mode ignored for non-record schema %s", type(schema).__name__)
    return schema
