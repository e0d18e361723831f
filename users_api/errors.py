"""Application errors translated to HTTP responses by the app's exception handlers."""


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, http_status: int = 500) -> None:
        self.message = message
        self.http_status = http_status
        super().__init__(message)


class UserNotFoundError(AppError):
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__("User not found", 404)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__("Email already registered", 409)
