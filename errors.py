"""Domain errors raised by the services.

Each error carries the HTTP status the API answers with; ``app.py`` turns
them into ``{"detail": ...}`` responses.
"""


class RestaurantError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(RestaurantError):
    """Missing or malformed input."""
    status_code = 400


class NotFoundError(RestaurantError):
    status_code = 404


class SlotConflictError(RestaurantError):
    """A confirmed reservation already holds the table at that date and time."""
    status_code = 409


class AuthorizationError(RestaurantError):
    status_code = 403
