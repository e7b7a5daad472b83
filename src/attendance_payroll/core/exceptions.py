class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the stable error name the boundary layer maps to a response.
    """

    kind = "DomainError"


class NotFoundError(DomainError):
    kind = "NotFound"


class InactiveEmployeeError(DomainError):
    kind = "InactiveEmployee"


class AlreadyCheckedInError(DomainError):
    kind = "AlreadyCheckedIn"


class NotCheckedInError(DomainError):
    kind = "NotCheckedIn"


class AlreadyCheckedOutError(DomainError):
    kind = "AlreadyCheckedOut"


class BreakInProgressError(DomainError):
    kind = "BreakInProgress"


class NoOpenBreakError(DomainError):
    kind = "NoOpenBreak"


class InvalidPeriodError(DomainError):
    kind = "InvalidPeriod"


class MissingSalaryConfigError(DomainError):
    kind = "MissingSalaryConfig"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "InvalidInput"


class StorageFailure(DomainError):
    """Unexpected fault while reading or writing employee records."""

    kind = "StorageFailure"


class ConcurrentUpdateError(DomainError):
    """The stored employee changed between load and save."""

    kind = "ConcurrentUpdate"
