class TodoError(Exception):
    """Base class for domain errors. The message is shown to the user as a flash."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TodoError):
    default_message = "Invalid input"


class NotFound(TodoError):
    default_message = "Not found"


class DuplicateUsername(TodoError):
    default_message = "Username already exists"


class InvalidCredentials(TodoError):
    default_message = "Invalid username or password"


class AccessDenied(TodoError):
    default_message = "Access denied"


class DateParseFailure(TodoError):
    default_message = "Could not parse date"

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Could not parse date: {raw!r}")


class LoginRequired(TodoError):
    default_message = "Please log in"
