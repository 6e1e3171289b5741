# app/utils/errors.py
"""Failure kinds raised by the mentor services.

Each error carries the HTTP status and the message the caller is allowed to
see. Internal detail travels only through the exception chain and the logs.
"""


class MentorError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnconfiguredServiceError(MentorError):
    """No completion-service credential is present."""
    status_code = 500
    message = "AI service not configured"


class NotFoundError(MentorError):
    status_code = 404
    message = "Not found"


class ForbiddenError(MentorError):
    status_code = 403
    message = "Not authorized"


class UpstreamError(MentorError):
    """The completion service call failed."""
    status_code = 500
    message = "Failed to get AI response"


class PersistenceError(MentorError):
    status_code = 500
    message = "Failed to save interaction"
