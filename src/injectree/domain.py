"""Domain models used throughout the injector."""

from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from injectree.injector import Injector

__all__ = ["Mapping", "ConstantMapping"]


Mapping = Callable[["Injector", str], Any]
"""A factory bound to an identifier.

Called with the injector on which resolution began and the identifier that
matched (the wildcard identifier when the match was a wildcard match). The
returned value is opaque: callers cast it to whatever shape they expect.
"""


@dataclass(frozen=True)
class ConstantMapping:
    """A mapping that always returns the same value.

    Written both by :meth:`~injectree.injector.Injector.register_value` and by
    the singleton cache, so a cached singleton compares equal to a value
    mapping holding the same object.

    Attributes:
        value: The value returned on every call.
    """

    value: Any

    def __call__(self, injector: "Injector", identifier: str) -> Any:
        return self.value
