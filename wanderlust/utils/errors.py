class AppError(Exception):
    """Failure carrying the status code and message shown on the error page"""

    status_code = 500
    message = "Something went wrong"

    def __init__(self, message=None, status_code=None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid input"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class StoreError(AppError):
    status_code = 500
    message = "Database operation failed"


class RouteNotFoundError(AppError):
    status_code = 404
    message = "Page Not Found"
