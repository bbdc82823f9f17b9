"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTierLadderError(DomainException):
    """Tier thresholds are empty or not strictly increasing"""

    pass


class UnknownRecordKindError(DomainException):
    """Record collection other than debts or bills was requested"""

    pass


class UnknownExportError(DomainException):
    """Export name does not match any known CSV layout"""

    pass
