"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Fee amount or payload is malformed (non-numeric, non-finite, negative in strict mode)"""

    pass
