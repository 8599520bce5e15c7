# backend/app/errors.py


class FinanceTrackerError(Exception):
    """Base class for errors translated into an HTTP response at the request boundary."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(FinanceTrackerError):
    # missing or malformed required field
    status_code = 400


class NotFoundError(FinanceTrackerError):
    status_code = 404


class StoreError(FinanceTrackerError):
    status_code = 500


class UpstreamError(FinanceTrackerError):
    # generation API answered with a non-success status or an unreadable body
    status_code = 500
