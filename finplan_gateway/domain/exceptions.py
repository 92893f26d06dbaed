"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnreachableGoalError(DomainException):
    """Savings target can never be met with the given contribution and rate"""

    pass


class InvalidGoalParametersError(DomainException):
    """Savings goal parameters are outside the domain of the growth formula"""

    pass
