"""High level entry points for constructing injectors."""

from typing import Any, Optional

from injectree.domain import Mapping
from injectree.injector import Injector
from injectree.mapping_table import MappingTable

__all__ = ["make_injector", "make_child"]


def make_injector(
    mappings: Optional[dict[str, Mapping]] = None,
    values: Optional[dict[str, Any]] = None,
    singletons: Optional[dict[str, Mapping]] = None,
    name: Optional[str] = None,
) -> Injector:
    """Construct a root :class:`Injector`.

    Args:
        mappings: Plain mappings, called on every resolution.
        values: Fixed values, registered as constant mappings.
        singletons: Factories cached per requesting injector on first use.
        name: Optional label used in diagnostics.

    Returns:
        An injector with no parent holding the given registrations.

    Raises:
        ReservedIdentifierError: If any registration uses the injector's own
            identifier.

    Example:
        >>> injector = make_injector(
        ...     values={"app.Settings": settings},
        ...     singletons={"app.Database": lambda injector, _id: Database()},
        ... )
    """
    return make_child(None, mappings, values, singletons, name)


def make_child(
    parent: Optional[Injector],
    mappings: Optional[dict[str, Mapping]] = None,
    values: Optional[dict[str, Any]] = None,
    singletons: Optional[dict[str, Mapping]] = None,
    name: Optional[str] = None,
) -> Injector:
    """Construct an :class:`Injector` below ``parent``.

    Takes the same registrations as :func:`make_injector`. Identifiers the
    child does not map are resolved through ``parent``.
    """
    injector = Injector(parent, MappingTable(), name)
    for identifier, mapping in (mappings or {}).items():
        injector.register_mapping(identifier, mapping)
    for identifier, value in (values or {}).items():
        injector.register_value(identifier, value)
    for identifier, factory in (singletons or {}).items():
        injector.register_singleton(identifier, factory)
    return injector
