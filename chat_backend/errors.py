class ServiceError(Exception):
    """Base for errors the gateway turns into a fixed status + message pair."""

    kind = "internal"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    kind = "validation"
    status_code = 400
    default_message = "Missing or malformed fields"


class ConflictError(ServiceError):
    kind = "conflict"
    status_code = 409
    default_message = "User already exists"


class AuthError(ServiceError):
    # same message for unknown email and wrong password
    kind = "auth"
    status_code = 401
    default_message = "Invalid email or password"
