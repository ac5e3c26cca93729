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

"""Validated, immutable environment configuration.

``create_env`` validates one schema; ``create_split_env`` validates a server
schema and a client schema against one shared source and only exposes the
client half when running in a client context.
"""

import logging
from typing import Any, Callable, Mapping, NoReturn, Optional, Sequence

from .context import ContextProbe, ExecutionContext, current_context
from .exceptions import EnvConfigurationError, EnvValidationError
from .frozen import FrozenEnv, freeze
from .guard import ensure_server_access
from .prefix import filter_by_prefix, should_filter
from .schema import SchemaIssue, adapt_strictness, format_issues, is_record_schema, validate
from .source import get_default_env_source


logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Sequence[SchemaIssue]], NoReturn]

INVALID_ENV_HEADER = "Invalid environment variables:"


def format_validation_error(issues: Sequence[SchemaIssue]) -> str:
    return f"{INVALID_ENV_HEADER}\n{format_issues(issues)}"


def create_env(
    schema: Any,
    *,
    runtime_env: Optional[Mapping[str, Any]] = None,
    env_source: Optional[Mapping[str, Any]] = None,
    strict: bool = True,
    skip_validation: bool = False,
    on_error: Optional[ErrorHandler] = None,
    client_prefix: Optional[str] = None,
    is_server: Optional[bool] = None,
    context_probe: Optional[ContextProbe] = None,
) -> Any:
    """Validate environment variables against a schema.

    Args:
        schema: Schema spec the variables must satisfy
        runtime_env: Explicit variables to validate
        env_source: Mapping to read from when ``runtime_env`` is not given;
            defaults to the process environment
        strict: Reject keys the schema does not declare (record schemas only)
        skip_validation: Return the (filtered) raw mapping without validating
        on_error: Called with every issue on failure; must raise or exit
        client_prefix: Only keys with this prefix are visible on the client
        is_server: ``True`` marks the config server-only, ``False`` marks it
            client-visible
        context_probe: Returns whether the code runs in a client context

    Returns:
        The validated value, frozen (a FrozenEnv for record schemas)

    Raises:
        SecurityViolationError: If server-only config is read on the client
        EnvValidationError: If validation fails and no ``on_error`` is given
    """
    context = current_context(context_probe)
    ensure_server_access(is_server, context)

    if runtime_env is not None:
        source = runtime_env
    elif env_source is not None:
        source = env_source
    else:
        source = get_default_env_source()

    filtered_env = filter_by_prefix(source, client_prefix, should_filter(client_prefix, context, is_server))

    if skip_validation:
        logger.warning("Skipping environment validation; returning %d raw variables", len(filtered_env))
        return filtered_env

    final_schema = adapt_strictness(schema, strict)
    result = validate(final_schema, filtered_env)

    if not result.ok:
        logger.warning(
            "Environment validation failed for: %s",
            ", ".join(issue.dotted_path for issue in result.issues),
        )
        if on_error is not None:
            on_error(result.issues)
            logger.warning("on_error handler returned normally; raising the default error")
        raise EnvValidationError(format_validation_error(result.issues), result.issues)

    return freeze(result.value)


def create_split_env(
    *,
    server: Any,
    client: Any,
    runtime_env: Mapping[str, Any],
    client_prefix: str,
    skip_validation: bool = False,
    on_error: Optional[ErrorHandler] = None,
    context_probe: Optional[ContextProbe] = None,
) -> Any:
    """Validate separate server and client schemas against one shared source.

    In a client context only the client schema is validated and only client
    variables are returned. On the server both are validated, issues from
    both halves are reported together, and the results are merged with client
    keys winning on collision.

    Raises:
        EnvConfigurationError: If the prefix is empty or a schema is not a record
    """
    if not client_prefix:
        raise EnvConfigurationError("create_split_env requires a non-empty client_prefix")
    for role, schema in (("server", server), ("client", client)):
        if not is_record_schema(schema):
            raise EnvConfigurationError(
                f"create_split_env requires a record schema for '{role}', got {type(schema).__name__}"
            )

    context = current_context(context_probe)

    if context is ExecutionContext.CLIENT:
        return create_env(
            client,
            runtime_env=runtime_env,
            client_prefix=client_prefix,
            skip_validation=skip_validation,
            on_error=on_error,
            is_server=False,
            context_probe=context_probe,
        )

    # Keys only the client declares belong to the client half of the shared source.
    client_only_keys = set(client.field_names) - set(server.field_names)
    server_source = {key: value for key, value in runtime_env.items() if key not in client_only_keys}

    server_env, server_issues = _validate_half(
        server,
        runtime_env=server_source,
        skip_validation=skip_validation,
        is_server=True,
        context_probe=context_probe,
    )
    client_env, client_issues = _validate_half(
        client,
        runtime_env=runtime_env,
        client_prefix=client_prefix,
        skip_validation=skip_validation,
        is_server=False,
        context_probe=context_probe,
    )

    issues = server_issues + client_issues
    if issues:
        if on_error is not None:
            on_error(issues)
            logger.warning("on_error handler returned normally; raising the default error")
        raise EnvValidationError(format_validation_error(issues), issues)

    return FrozenEnv({**server_env, **client_env})


def _validate_half(schema: Any, **kwargs: Any):
    """Run one half of a split validation, returning its issues instead of raising."""
    try:
        return create_env(schema, **kwargs), ()
    except EnvValidationError as e:
        return None, e.issues
