"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span repositories, such as
    path allocation or the anti-abuse gate.
    """

    pass
