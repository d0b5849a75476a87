"""Identifier conventions shared by producers and consumers of mappings.

An identifier is an opaque string. It may carry a qualifier after a single
space (``"myapp.Database replica"``); the text before the first space is the
wildcard identifier, consulted when no mapping exists for the full string.
"""

import inspect
from typing import Any, Annotated, Optional, get_args, get_origin

__all__ = ["SELF_IDENTIFIER", "wildcard_of", "identifier_for"]


SELF_IDENTIFIER = "injectree.injector.Injector"
"""Reserved identifier under which every injector maps itself.

Equal to ``identifier_for(Injector)``, so an autowired parameter annotated
with :class:`~injectree.injector.Injector` receives the requesting injector.
"""


def wildcard_of(identifier: str) -> str:
    """Return the part of an identifier before its first space.

    Example:
        >>> wildcard_of("myapp.Database replica")  # Returns "myapp.Database"
        >>> wildcard_of("myapp.Database")          # Returns "myapp.Database"
    """
    return identifier.split(" ", 1)[0]


def identifier_for(target: Any, qualifier: Optional[str] = None) -> str:
    """Derive the identifier for a class, function or typing construct.

    Classes and functions are named by module and qualified name. Other typing
    constructs (``Callable[[str], str]``, ``list[int]``) use their string form
    with whitespace removed, so that the only space in an identifier is the
    one introducing the qualifier. ``Annotated[T, "q"]`` is treated as
    ``identifier_for(T, "q")``.

    Args:
        target: The type or callable the identifier stands for.
        qualifier: Optional qualifier distinguishing several mappings of the
            same target.

    Returns:
        The same string every time for the same target and qualifier.

    Example:
        >>> identifier_for(Database)             # "myapp.db.Database"
        >>> identifier_for(Database, "replica")  # "myapp.db.Database replica"
    """
    if get_origin(target) is Annotated:
        base_type, *metadata = get_args(target)
        annotated_qualifier = next((m for m in metadata if isinstance(m, str)), None)
        return identifier_for(base_type, qualifier or annotated_qualifier)

    if get_origin(target) is None and (inspect.isclass(target) or inspect.isroutine(target)):
        base = f"{target.__module__}.{target.__qualname__}"
    else:
        base = "".join(str(target).split())

    if qualifier:
        return f"{base} {qualifier}"
    return base
