"""Domain-specific exceptions

Analytics functions never raise for messy data; these cover the I/O boundary only.
"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BankAPIError(DomainException):
    """Bank data service returned an error, is unavailable, or sent malformed records"""

    pass
