"""Constructors for the mappings an injector stores.

Every mapping is a callable taking the requesting injector and the matched
identifier. The helpers here cover the common shapes: a fixed value, a
factory cached per requesting injector, a mapping that defers to ancestors,
and a callable whose parameters are resolved from the injector.
"""

import functools
import inspect
import logging
import weakref
from typing import Any, Callable, TYPE_CHECKING, get_type_hints

from injectree.domain import ConstantMapping, Mapping
from injectree.errors import InjectionError
from injectree.identifiers import identifier_for

if TYPE_CHECKING:
    from injectree.injector import Injector

__all__ = [
    "constant",
    "singleton",
    "prefer_parent",
    "autowire",
    "SingletonMapping",
]

logger = logging.getLogger(__name__)


def constant(value: Any) -> ConstantMapping:
    return ConstantMapping(value)


class SingletonMapping:
    """Invoke a factory once per requesting injector and cache the result there.

    The first call for an identifier on a given requesting injector runs the
    factory and overwrites that injector's entry for the identifier with a
    :class:`~injectree.domain.ConstantMapping`. The mapping that defined the
    singleton (possibly on an ancestor) is left untouched, so each subtree
    that resolves it gets its own instance.

    An entry counts as cached only if this mapping wrote it. A constant
    registered on the requesting injector for the same identifier is not a
    cache hit: the factory runs and its result replaces that entry.

    The check and the write happen under the requesting table's lock, so
    concurrent first resolutions on the same injector invoke the factory once.
    The lock is held while the factory runs, so a factory that resolves
    singletons on a different injector can deadlock against another thread
    taking the two tables' locks in the opposite order.
    """

    def __init__(self, factory: Mapping):
        self._factory = factory
        self._written: "weakref.WeakKeyDictionary[Any, dict[str, ConstantMapping]]" = (
            weakref.WeakKeyDictionary()
        )

    def __call__(self, injector: "Injector", identifier: str) -> Any:
        table = injector.table
        with table.lock:
            written = self._written.setdefault(table, {})
            cached = written.get(identifier)
            if cached is not None and table.exists(identifier) and table.get(identifier) is cached:
                return cached.value

            value = self._factory(injector, identifier)
            cached = ConstantMapping(value)
            table.set(identifier, cached)
            written[identifier] = cached
            logger.debug("Cached singleton '%s' on injector '%s'", identifier, injector.name)
            return value

    def __repr__(self) -> str:
        return f"SingletonMapping({self._factory!r})"


def singleton(factory: Mapping) -> SingletonMapping:
    return SingletonMapping(factory)


def prefer_parent(owner: "Injector", fallback: Mapping) -> Mapping:
    """Bind parent-preferring resolution to the injector that registers it.

    The returned mapping ignores whatever the owner itself maps and asks the
    owner's ancestors first, using ``fallback`` only when none of them has an
    entry. The requesting injector is passed through to whichever mapping is
    finally called.

    Args:
        owner: The injector on which the mapping is registered.
        fallback: Mapping used when no ancestor maps the identifier.
    """

    def resolve_from_ancestors(injector: "Injector", identifier: str) -> Any:
        return owner.resolve_preferring_parent(identifier, fallback, injector)

    return resolve_from_ancestors


def autowire(target: Callable) -> Mapping:
    """Wrap a function or class so its parameters are resolved from the injector.

    Each parameter is resolved by the identifier derived from its annotation
    (see :func:`~injectree.identifiers.identifier_for`). ``Annotated[T, "q"]``
    requests the qualified identifier ``identifier_for(T, "q")``. Parameters
    with a default value and no annotation keep their default.

    Args:
        target: The function or class to call.

    Returns:
        A mapping calling ``target`` with its resolved parameters.

    Raises:
        InjectionError: If a parameter without a default is not annotated.

    Example:
        >>> def make_service(db: Database, cache: Annotated[Cache, "redis"]) -> Service:
        ...     return Service(db, cache)
        >>> injector.register_mapping(identifier_for(Service), autowire(make_service))
    """
    parameters = _parameter_identifiers(target)

    def build(injector: "Injector", identifier: str) -> Any:
        return target(**{
            parameter_name: injector.resolve(parameter_identifier)
            for parameter_name, parameter_identifier in parameters.items()
        })

    functools.update_wrapper(build, target, updated=())
    return build


def _parameter_identifiers(target: Callable) -> dict[str, str]:
    sig = inspect.signature(target)
    hints = get_type_hints(
        target.__init__ if inspect.isclass(target) else target, include_extras=True
    )

    identifiers = {}
    for name, parameter in sig.parameters.items():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        annotation = hints.get(name)
        if annotation is None:
            if parameter.default is not parameter.empty:
                continue
            raise InjectionError(
                f"Dependency '{name}' of {target.__qualname__} is not annotated"
            )
        identifiers[name] = identifier_for(annotation)
    return identifiers
