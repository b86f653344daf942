class NoctoonError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFound(NoctoonError):
    status_code = 404
    message = "Not found"


class ValidationError(NoctoonError):
    status_code = 400
    message = "Invalid data"


class Unauthenticated(NoctoonError):
    status_code = 401
    message = "Invalid credentials"


class Conflict(NoctoonError):
    # duplicate usernames answer 400, not 409
    status_code = 400
    message = "Already exists"
