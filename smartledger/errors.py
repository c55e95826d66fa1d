"""Error taxonomy shared by the stores, the reporting core and the HTTP layer."""


class SmartLedgerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SmartLedgerError):
    """Malformed input: bad month token, bad date range, non-numeric amount, unknown category."""
    status_code = 400


class NotFoundError(SmartLedgerError):
    status_code = 404


class ConflictError(SmartLedgerError):
    """A unique key already exists; callers may retry with an update instead."""
    status_code = 409


class StoreError(SmartLedgerError):
    """Underlying persistence failure, surfaced with an opaque message."""

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
