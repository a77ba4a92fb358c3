"""Error kinds raised by the services and rendered by the API."""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Invalid credentials"


class InvalidRecordError(ServiceError):
    status_code = 422
    default_message = "Invalid record"


class InternalServerError(ServiceError):
    """Storage or unexpected failure. The message never carries the cause."""
