"""Immutable configuration objects."""

from dataclasses import FrozenInstanceError
from types import MappingProxyType
from typing import Any, Iterator, Mapping


class FrozenEnv(Mapping):
    """Read-only mapping of validated env values with attribute access.

    ``env.PORT`` and ``env["PORT"]`` both work; assignment and deletion of
    either form fail. Variables named after Mapping methods (``keys``,
    ``get``, ``items``, ``values``) are only reachable by item access.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] = ()):
        object.__setattr__(self, "_data", MappingProxyType(dict(data)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' has no variable '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenInstanceError(f"cannot assign to field '{name}'")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field '{name}'")

    def __reduce__(self):
        return (type(self), (dict(self._data),))

    def __dir__(self):
        return list(super().__dir__()) + list(self._data)

    def __repr__(self) -> str:
        # Values may be secrets.
        return f"{type(self).__name__}({', '.join(self._data)})"


def freeze(value: Any) -> Any:
    """Recursively convert dicts to FrozenEnv and lists to tuples."""
    if isinstance(value, FrozenEnv):
        return value
    if isinstance(value, Mapping):
        return FrozenEnv({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value
