"""
Application error taxonomy.

Every error carries the HTTP status it maps to; the handler registered in
careerquest.main renders them as {"error": message}.
"""


class CareerQuestError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class UpstreamError(CareerQuestError):
    """Non-success answer from the O*NET catalog (or an error embedded in its payload)."""

    status_code = 502


class AuthError(CareerQuestError):
    """Missing or invalid user identity."""

    status_code = 401


class ValidationError(CareerQuestError):
    """Missing or malformed request fields."""

    status_code = 400


class ConflictError(CareerQuestError):
    """A concurrent save created the same (user, career) record first."""

    status_code = 409


class NotFoundError(CareerQuestError):
    """Record does not exist or belongs to another user."""

    status_code = 404


class GenerationError(CareerQuestError):
    """The generative backend returned a malformed envelope or an unparsable roadmap."""

    status_code = 502


class NetworkError(UpstreamError):
    """Transport-level failure reaching the O*NET catalog (no upstream status)."""

    status_code = 500
