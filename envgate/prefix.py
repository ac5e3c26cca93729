"""Client prefix filtering of env sources."""

import logging
from typing import Any, Mapping, Optional

from .context import ExecutionContext


logger = logging.getLogger(__name__)


def should_filter(client_prefix: Optional[str], context: ExecutionContext, is_server: Optional[bool]) -> bool:
    """Filtering applies on the client, or when the caller declared itself non-server."""
    if not client_prefix:
        return False
    return context is ExecutionContext.CLIENT or is_server is False


def filter_by_prefix(source: Mapping[str, Any], prefix: Optional[str], should_apply: bool) -> Mapping[str, Any]:
    """Return only the entries whose key starts with ``prefix``.

    When ``should_apply`` is false the source itself is returned.
    """
    if not should_apply or not prefix:
        return source

    filtered = {key: value for key, value in source.items() if key.startswith(prefix)}
    logger.debug("Prefix '%s' kept %d of %d variables", prefix, len(filtered), len(source))
    return filtered
