"""
Hierarchical resolution of identifiers to values.

An :class:`Injector` owns a :class:`~injectree.mapping_table.MappingTable` and
an optional parent. A request is resolved against the injector's own table,
first by exact identifier and then by wildcard identifier, before being
passed up the parent chain. Whichever mapping matches is called with the
injector on which resolution began, so singleton caching and self lookups
always act on the requester rather than on the ancestor that owned the match.

Injectors form a tree: a child is built from an existing parent and can never
be re-parented, so the chain is acyclic and can be read without locking.
"""

import logging
import uuid
from typing import Any, Callable, Iterator, Optional, Union, get_type_hints

from injectree.domain import Mapping
from injectree.errors import (
    InjectionError,
    NotFoundError,
    ReservedIdentifierError,
    UnresolvedIdentifierError,
)
from injectree.identifiers import SELF_IDENTIFIER, identifier_for, wildcard_of
from injectree.mapping_table import MappingTable
from injectree.mappings import autowire, constant, prefer_parent, singleton

__all__ = ["Injector"]

logger = logging.getLogger(__name__)

InitialMappings = Union[MappingTable, dict[str, Mapping]]


def _requesting_injector(injector: "Injector", identifier: str) -> "Injector":
    return injector


class Injector:
    """
    A node in a tree of mapping tables.

    Attributes:
        name: Label used in diagnostics; generated when not supplied.
        table: The mappings owned by this injector.

    Example:
        >>> root = Injector(mappings={"greeting": constant("hello")}, name="root")
        >>> request = root.child(name="request")
        >>> request.resolve("greeting")           # "hello", found on root
        >>> request.resolve("greeting formal")    # "hello", wildcard match
        >>> request.try_resolve("farewell", "bye")  # "bye"
    """

    def __init__(
        self,
        parent: Optional["Injector"] = None,
        mappings: Optional[InitialMappings] = None,
        name: Optional[str] = None,
    ):
        self._parent = parent
        self.name = name or f"injector-{uuid.uuid4().hex[:8]}"
        self.table = MappingTable()
        if mappings:
            self.table.update(mappings)
        self.table.set(SELF_IDENTIFIER, _requesting_injector)

    @property
    def parent(self) -> Optional["Injector"]:
        return self._parent

    def ancestors(self) -> Iterator["Injector"]:
        """Yield the parent, the parent's parent, and so on up to the root."""
        injector = self._parent
        while injector is not None:
            yield injector
            injector = injector._parent

    def child(
        self, mappings: Optional[InitialMappings] = None, name: Optional[str] = None
    ) -> "Injector":
        return Injector(self, mappings, name)

    def resolve(self, identifier: str, requesting: Optional["Injector"] = None) -> Any:
        """Resolve an identifier to a value.

        Precedence, first match wins:

        1. an exact mapping in this injector's table;
        2. a mapping for the wildcard identifier in this injector's table,
           called with the wildcard identifier;
        3. the same resolution on the parent, with the same requester.

        Args:
            identifier: The identifier to resolve.
            requesting: The injector on which resolution began. Defaults to
                this injector.

        Returns:
            Whatever the matching mapping returns.

        Raises:
            UnresolvedIdentifierError: If no injector in the chain maps the
                identifier or its wildcard.
        """
        if requesting is None:
            requesting = self

        found = self._find(identifier)
        if found is None:
            raise UnresolvedIdentifierError(identifier, requesting.name)

        owner, mapping, matched = found
        logger.debug(
            "Resolving '%s' for injector '%s' via '%s' on injector '%s'",
            identifier, requesting.name, matched, owner.name,
        )
        return mapping(requesting, matched)

    def try_resolve(self, identifier: str, fallback: Any = None) -> Any:
        """Resolve an identifier, returning ``fallback`` if nothing maps it.

        Only the absence of a mapping is recovered from. An exception raised
        by the matching mapping itself propagates to the caller.
        """
        found = self._find(identifier)
        if found is None:
            logger.debug("No mapping for '%s' on injector '%s', using fallback", identifier, self.name)
            return fallback

        _owner, mapping, matched = found
        return mapping(self, matched)

    def can_resolve(self, identifier: str) -> bool:
        return self._find(identifier) is not None

    def resolve_preferring_parent(
        self,
        identifier: str,
        fallback: Mapping,
        requesting: Optional["Injector"] = None,
    ) -> Any:
        """Resolve from the nearest ancestor that maps an identifier, else a default.

        This injector's own table is never consulted, and only exact
        identifiers are matched.

        Args:
            identifier: The identifier to look up among the ancestors.
            fallback: Mapping called when no ancestor maps the identifier.
            requesting: The injector passed to whichever mapping is called.
                Defaults to this injector.
        """
        if requesting is None:
            requesting = self

        for ancestor in self.ancestors():
            mapping = _lookup(ancestor.table, identifier)
            if mapping is not None:
                logger.debug("Resolving '%s' from ancestor '%s'", identifier, ancestor.name)
                return mapping(requesting, identifier)

        logger.debug("No ancestor of '%s' maps '%s', using local default", self.name, identifier)
        return fallback(requesting, identifier)

    def register_mapping(self, identifier: str, factory: Mapping):
        self._register(identifier, factory)

    def register_singleton(self, identifier: str, factory: Mapping):
        """Register a factory whose result is cached on each requesting injector."""
        self._register(identifier, singleton(factory))

    def register_value(self, identifier: str, value: Any):
        self._register(identifier, constant(value))

    def register_parent_preferring(self, identifier: str, fallback: Mapping):
        """Register a mapping that defers to any ancestor mapping the identifier.

        When resolved, the ancestors of this injector are searched for
        ``identifier``; ``fallback`` is used only if none of them maps it.
        """
        self._register(identifier, prefer_parent(self, fallback))

    def provides(self, identifier: Optional[str] = None, singleton: bool = False) -> Callable:
        """Decorator to register a function or class as an autowired mapping.

        Args:
            identifier: Identifier to register under. Defaults to the
                identifier of the decorated class, or of the decorated
                function's return annotation.
            singleton: If True, cache the result per requesting injector.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Raises:
            InjectionError: If no identifier is given and none can be derived.

        Example:
            @injector.provides(singleton=True)
            def make_database(settings: Settings) -> Database:
                return Database(settings.url)
        """
        def decorator(target):
            provided_identifier = identifier or _provided_identifier(target)
            factory = autowire(target)
            if singleton:
                self.register_singleton(provided_identifier, factory)
            else:
                self.register_mapping(provided_identifier, factory)
            return target

        return decorator

    def _register(self, identifier: str, mapping: Mapping):
        if identifier == SELF_IDENTIFIER:
            raise ReservedIdentifierError(
                f"'{SELF_IDENTIFIER}' is reserved for the injector itself"
            )
        self.table.set(identifier, mapping)
        logger.debug("Registered '%s' on injector '%s'", identifier, self.name)

    def _find(self, identifier: str) -> Optional[tuple["Injector", Mapping, str]]:
        wildcard = wildcard_of(identifier)
        injector = self
        while injector is not None:
            mapping = _lookup(injector.table, identifier)
            if mapping is not None:
                return injector, mapping, identifier
            if wildcard != identifier:
                mapping = _lookup(injector.table, wildcard)
                if mapping is not None:
                    return injector, mapping, wildcard
            injector = injector._parent
        return None

    def __getitem__(self, identifier: str) -> Any:
        return self.resolve(identifier)

    def __contains__(self, identifier: str) -> bool:
        return self.can_resolve(identifier)

    def __repr__(self) -> str:
        parent_name = self._parent.name if self._parent else None
        return f"Injector(name={self.name!r}, parent={parent_name!r})"


def _lookup(table: MappingTable, identifier: str) -> Optional[Mapping]:
    try:
        return table.get(identifier)
    except NotFoundError:
        return None


def _provided_identifier(target: Any) -> str:
    """Derive the identifier a decorated class or function provides.

    Raises:
        InjectionError: If the target is a function with no return annotation.
    """
    if isinstance(target, type):
        return identifier_for(target)

    return_type = get_type_hints(target, include_extras=True).get("return", None)
    if return_type is None:
        raise InjectionError(
            f"Function {target.__name__} is registered without an identifier "
            "but does not have an annotated return type"
        )
    return identifier_for(return_type)
