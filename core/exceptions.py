class CanteenServiceError(Exception):
    """Base class for errors raised by the rating and favorite services."""

    default_message = "Canteen service error."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CanteenServiceError):
    default_message = "Invalid input."


class NotFoundError(CanteenServiceError):
    default_message = "Not found."


class ConflictError(CanteenServiceError):
    default_message = "Already exists."


class AggregateRecomputeError(CanteenServiceError):
    """
    The review was stored but refreshing its subject's rating failed.

    Callers should retry the recompute for `subject`, never re-submit the review.
    """

    default_message = "Review saved but the rating could not be refreshed."

    def __init__(self, review, subject, message=None):
        self.review = review
        self.subject = subject
        super().__init__(message)
