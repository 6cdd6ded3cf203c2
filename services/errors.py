"""Error taxonomy shared by services and route handlers.

Services raise these; `create_app` registers a handler that turns any
`ApiError` into a `{"error": message}` JSON body with the matching status.
"""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ApiError):
    """Malformed date, time, enum, password or body."""
    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


class AuthorizationError(ApiError):
    """Entity exists but belongs to another user."""
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class UpstreamError(ApiError):
    """Database or mail failure surfaced as a generic 500."""
    status_code = 500
