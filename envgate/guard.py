"""Server-only access guard."""

from typing import Optional

from .context import ExecutionContext
from .exceptions import SecurityViolationError


SERVER_ONLY_ON_CLIENT_MESSAGE = (
    "Attempted to access server-only environment variables on the client. "
    "This is a security risk. Make sure server env is not imported in client code."
)


def ensure_server_access(is_server: Optional[bool], context: ExecutionContext) -> None:
    """Raise SecurityViolationError when server-only config is requested on the client."""
    if is_server is True and context is ExecutionContext.CLIENT:
        raise SecurityViolationError(SERVER_ONLY_ON_CLIENT_MESSAGE)
