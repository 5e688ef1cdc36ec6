"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NoDataError(DomainException):
    """No recorded results to compute statistics from"""

    pass


class InvalidGradeError(DomainException, ValueError):
    """Grade is outside the 1.0 - 6.0 scale or not a number"""

    pass
