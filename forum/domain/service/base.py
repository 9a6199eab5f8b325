"""Base class for domain services."""


class Service:
    """Marker base for the comment engine's stateful services.

    Pure tree operations live as module functions next to the services
    that use them.
    """
