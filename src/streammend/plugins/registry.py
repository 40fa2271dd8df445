from __future__ import annotations

from typing import Dict, Generic, Iterator, List, Tuple, TypeVar


T = TypeVar("T")


class PluginRegistry(Generic[T]):
    """Name-keyed factories, looked up once when a pipeline or renderer is built."""

    def __init__(self, kind: str = "Plugin") -> None:
        self._kind = kind
        self._entries: Dict[str, T] = {}

    def register(self, name: str, factory: T) -> None:
        if name in self._entries:
            raise ValueError(f"{self._kind} '{name}' is already registered.")
        self._entries[name] = factory

    def unregister(self, name: str) -> None:
        if self._entries.pop(name, None) is None:
            raise KeyError(f"{self._kind} '{name}' is not registered.")

    def get(self, name: str) -> T:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise KeyError(f"{self._kind} '{name}' is not registered.") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def items(self) -> Iterator[Tuple[str, T]]:
        return iter(list(self._entries.items()))

    def names(self) -> List[str]:
        return sorted(self._entries)
