"""Exceptions raised by the injector hierarchy."""

__all__ = [
    "InjectionError",
    "NotFoundError",
    "UnresolvedIdentifierError",
    "ReservedIdentifierError",
]


class InjectionError(Exception):
    """Raised when a mapping cannot be registered or a factory is misannotated."""

    pass


class NotFoundError(InjectionError, KeyError):
    """Raised by a single mapping table when it holds no entry for an identifier.

    The resolution chain recovers from this locally; callers of
    :meth:`~injectree.injector.Injector.resolve` never see it.
    """

    def __init__(self, identifier: str):
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"No mapping for '{self.identifier}'"


class UnresolvedIdentifierError(InjectionError, LookupError):
    """Raised when no injector in the parent chain maps an identifier.

    Attributes:
        identifier: The identifier that was requested.
        injector_name: Name of the injector on which resolution began.
    """

    def __init__(self, identifier: str, injector_name: str):
        super().__init__(identifier, injector_name)
        self.identifier = identifier
        self.injector_name = injector_name

    def __str__(self) -> str:
        return (
            f"No mapping found for '{self.identifier}' "
            f"requested from injector '{self.injector_name}'"
        )


class ReservedIdentifierError(InjectionError):
    """Raised when registering a mapping under the injector's own identifier."""

    pass
