"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InsufficientDataError(DomainException):
    """Not enough transaction history to build a forecast"""

    pass


class InvalidForecastRequestError(DomainException):
    """Forecast horizon or parameters are unusable"""

    pass
