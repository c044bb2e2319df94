"""Custom exception classes"""
from typing import Any, Optional


class AppException(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "AppError",
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation error exception"""

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        error_type: str = "ValidationError"
    ):
        super().__init__(
            message=message,
            status_code=400,
            error_type=error_type,
            details=details
        )


class ConflictError(AppException):
    """Resource conflict exception (e.g., editing a stale version)"""

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[Any] = None,
        error_type: str = "ConflictError"
    ):
        super().__init__(
            message=message,
            status_code=409,
            error_type=error_type,
            details=details
        )


class InvalidAmount(ValidationError):
    """Malformed, non-finite or over-precision monetary value"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidAmount")


class InvalidCurrency(ValidationError):
    """Currency code missing from the currency table"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidCurrency")


class InvalidParticipants(ValidationError):
    """Participant list is empty or otherwise unusable"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidParticipants")


class MissingSplits(ValidationError):
    """Splits are required by the split type but were not supplied"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="MissingSplits")


class InvalidSplitUser(ValidationError):
    """A split references a user who is not a participant"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidSplitUser")


class DuplicateSplitUser(ValidationError):
    """The same participant appears more than once"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="DuplicateSplitUser")


class InvalidSplitTotal(ValidationError):
    """Split amounts do not add up to the expense total"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidSplitTotal")


class InvalidPercentageTotal(ValidationError):
    """Split percentages are out of range or do not add up to 100"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidPercentageTotal")


class PayerNotParticipant(ValidationError):
    """Expense payer is not one of the participants"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="PayerNotParticipant")


class InvalidSettlement(ValidationError):
    """Settlement is structurally invalid (e.g., payer pays themselves)"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="InvalidSettlement")


class DepartedParticipant(ValidationError):
    """A write references a user who is no longer an active member"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_type="DepartedParticipant")


class TransactionLocked(ConflictError):
    """Attempt to change a transaction that references a departed member"""

    def __init__(
        self,
        message: str = "Transaction is locked",
        details: Optional[Any] = None
    ):
        super().__init__(message, details=details, error_type="TransactionLocked")


class BalanceConservationViolation(AppException):
    """Net balances of a currency do not sum to zero (internal defect)"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_type="BalanceConservationViolation",
            details=details
        )
