"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold the rules that span aggregates or need a repository; the
    entities themselves stay plain immutable data.
    """

    pass
