from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple, Union


PathElement = Union[str, int]
ROOT_MARKER = "(root)"


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    path: Tuple[PathElement, ...] = ()

    @property
    def dotted_path(self) -> str:
        if not self.path:
            return ROOT_MARKER
        return ".".join(str(p) for p in self.path)

    def prefixed(self, *parents: PathElement) -> "SchemaIssue":
        return SchemaIssue(message=self.message, path=tuple(parents) + self.path)


@dataclass(frozen=True)
class ValidationResult:
    value: Any
    issues: Tuple[SchemaIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues


def format_issues(issues: Iterable[SchemaIssue]) -> str:
    """One ``path: message`` line per issue."""
    return "\n".join(f"{i.dotted_path}: {i.message}" for i in issues)
