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

"""Typed, immutable environment configuration with a server/client boundary."""

__version__ = "0.1.0"

from .context import ExecutionContext, current_context, is_client_side
from .core import create_env, create_split_env, format_validation_error
from .exceptions import (
    EnvConfigurationError,
    EnvGateError,
    EnvValidationError,
    SchemaDefinitionError,
    SecurityViolationError,
)
from .frozen import FrozenEnv, freeze
from .source import get_default_env_source, load_env_file

__all__ = [
    "__version__",
    "create_env",
    "create_split_env",
    "format_validation_error",
    "ExecutionContext",
    "current_context",
    "is_client_side",
    "FrozenEnv",
    "freeze",
    "get_default_env_source",
    "load_env_file",
    "EnvGateError",
    "EnvConfigurationError",
    "EnvValidationError",
    "SchemaDefinitionError",
    "SecurityViolationError",
]
