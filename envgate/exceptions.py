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

"""Custom exceptions for envgate."""

from typing import Sequence, Tuple


class EnvGateError(Exception):
    """Base exception for envgate related errors."""
    pass


class SecurityViolationError(EnvGateError):
    """Exception raised when server-only variables are read from a client context."""
    pass


class EnvConfigurationError(EnvGateError):
    """Exception raised for invalid validator arguments."""
    pass


class SchemaDefinitionError(EnvGateError):
    """Exception raised when a schema itself is malformed."""
    pass


class EnvValidationError(EnvGateError):
    """Exception raised when the environment does not satisfy its schema.

    Carries every failing field, not only the first one.
    """

    def __init__(self, message: str, issues: Sequence = ()):
        super().__init__(message)
        self.issues: Tuple = tuple(issues)
