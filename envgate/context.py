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

"""Execution context detection (server vs. browser client)."""

import builtins
import sys
from enum import Enum
from typing import Callable, Optional


ContextProbe = Callable[[], bool]


class ExecutionContext(str, Enum):
    SERVER = "server"
    CLIENT = "client"


def is_client_side() -> bool:
    """Probe for a browser-like ``window`` global.

    Checks a ``window`` builtin first, then the Pyodide ``js`` bridge when
    running on the emscripten platform. Reads state only; nothing is imported.
    """
    if getattr(builtins, "window", None) is not None:
        return True
    if sys.platform == "emscripten":
        js = sys.modules.get("js")
        return js is not None and getattr(js, "window", None) is not None
    return False


def current_context(probe: Optional[ContextProbe] = None) -> ExecutionContext:
    """Evaluate the probe now and map it to an ExecutionContext."""
    probe = probe or is_client_side
    return ExecutionContext.CLIENT if probe() else ExecutionContext.SERVER
