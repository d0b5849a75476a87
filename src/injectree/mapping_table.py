"""Storage of mappings by identifier.

A mapping table backs a single injector. It holds both declared mappings and
the constant entries written when a singleton is first resolved, and carries
the lock that makes that write atomic.
"""
import threading
from typing import Iterable, Optional, Union

from injectree.domain import Mapping
from injectree.errors import NotFoundError

__all__ = ["MappingTable"]


class MappingTable:
    """Mutable collection of mappings keyed by identifier.

    Each identifier has at most one mapping; setting an identifier that is
    already present replaces its mapping.

    Attributes:
        lock: Re-entrant lock guarding read-then-write sequences on this table.

    Example:
        >>> table = MappingTable({"greeting": lambda injector, _id: "hello"})
        >>> table.exists("greeting")  # True
        >>> table.get("farewell")     # Raises NotFoundError
    """

    def __init__(self, mappings: Optional[dict[str, Mapping]] = None):
        self._mappings: dict[str, Mapping] = dict(mappings or {})
        self.lock = threading.RLock()

    def exists(self, identifier: str) -> bool:
        return identifier in self._mappings

    def get(self, identifier: str) -> Mapping:
        """Return the mapping for an identifier.

        Raises:
            NotFoundError: If the table has no mapping for the identifier.
        """
        try:
            return self._mappings[identifier]
        except KeyError:
            raise NotFoundError(identifier) from None

    def set(self, identifier: str, mapping: Mapping):
        with self.lock:
            self._mappings[identifier] = mapping

    def update(self, other: Union["MappingTable", dict[str, Mapping]]):
        """Copy every entry of another table (or dict) into this one."""
        with self.lock:
            self._mappings.update(other.items())

    def items(self) -> Iterable[tuple[str, Mapping]]:
        return list(self._mappings.items())

    def identifiers(self) -> list[str]:
        return sorted(self._mappings)

    def copy(self) -> "MappingTable":
        return MappingTable(self._mappings)

    def __contains__(self, identifier: str) -> bool:
        return self.exists(identifier)

    def __len__(self) -> int:
        return len(self._mappings)

    def __repr__(self) -> str:
        return f"MappingTable({self.identifiers()})"
