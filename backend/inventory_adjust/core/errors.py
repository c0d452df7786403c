from __future__ import annotations


class AdjustmentError(Exception):
    """Base class for failures that end an adjustment request as ``failed``."""

    title = "Adjustment error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(AdjustmentError):
    title = "Invalid request"


class NotFoundError(AdjustmentError):
    title = "Record not found"

    def __init__(self, category: str, name: str) -> None:
        super().__init__(f"No {category} found with name '{name}'")
        self.category = category
        self.name = name


class TransactionRejectedError(AdjustmentError):
    title = "Transaction rejected"


class StoreUnavailableError(AdjustmentError):
    title = "Record store unavailable"
