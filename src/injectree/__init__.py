"""Injectree hierarchical dependency resolution.

Injectree maps string identifiers to factories and resolves them through a
tree of injectors. Each injector consults its own mappings, then a wildcard
form of the identifier, then its parent, so request or session scopes can be
layered over an application-wide root while sharing its definitions.

Key Features:
    - Exact and wildcard (``"base qualifier"``) identifier matching
    - Parent-chain delegation with the requesting injector threaded through
    - Singletons cached per requesting injector
    - Parent-preferring mappings that defer to ancestors
    - Autowiring of functions and classes from their type hints

Basic Usage:
    >>> from injectree.builders import make_injector
    >>> from injectree.identifiers import identifier_for
    >>>
    >>> root = make_injector(name="root")
    >>>
    >>> @root.provides(singleton=True)
    >>> def make_database() -> Database:
    ...     return Database()
    >>>
    >>> request = root.child(name="request")
    >>> db = request.resolve(identifier_for(Database))

The package consists of:
    - injector: the resolution engine
    - mapping_table: per-injector storage of mappings
    - mappings: constructors for constant, singleton, parent-preferring and autowired mappings
    - identifiers: wildcard splitting and identifier derivation
    - builders: high-level injector construction functions
    - domain: the Mapping type and constant mappings
    - errors: package-specific exceptions
"""
