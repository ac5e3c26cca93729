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

"""Check reports for the CLI."""

import json
from typing import Any, Dict, Iterable, List

from ..schema import SchemaIssue


REPORT_FORMATS = ("human", "json", "github-actions")


class CheckReport:
    """Container for the result of checking one env source."""

    def __init__(self, source_name: str):
        """Initialize check report.

        Args:
            source_name: Env file path, or a label for the process environment
        """
        self.source_name = source_name
        self.errors: List[Dict[str, Any]] = []
        self.variable_count = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_issues(self, issues: Iterable[SchemaIssue]) -> None:
        for issue in issues:
            self.errors.append({"path": issue.dotted_path, "message": issue.message})

    def render(self, output_format: str = "human") -> str:
        if output_format == "json":
            return json.dumps(
                {
                    "source": self.source_name,
                    "valid": self.ok,
                    "variables": self.variable_count,
                    "errors": self.errors,
                },
                indent=2,
            )
        if output_format == "github-actions":
            return "\n".join(
                f"::error file={self.source_name}::{error['path']}: {error['message']}" for error in self.errors
            )

        if self.ok:
            return f"{self.source_name}: environment is valid ({self.variable_count} variables)."
        lines = [f"{self.source_name}:"]
        lines.extend(f"  ERROR {error['path']}: {error['message']}" for error in self.errors)
        return "\n".join(lines)
