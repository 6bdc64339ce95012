"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLoanParameters(DomainException):
    """Loan principal or term is non-positive, or the rate is negative"""

    pass


class InvalidProjectionHorizon(DomainException):
    """Projection requested for a negative number of months"""

    pass


class AdvisorServiceError(DomainException):
    """Advice service returned an error, is unavailable, or sent a malformed reply"""

    pass
