"""
RecipeBox Application Errors
Error taxonomy shared by services, dependencies and route handlers
"""

from typing import Any


class AppError(Exception):
    """Base error carrying the HTTP status it maps to at the API boundary"""

    status_code: int = 500

    def __init__(self, message: Any = "Internal server error", status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    """Malformed or duplicate input"""
    status_code = 400

    def __init__(self, message: Any = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(AppError):
    """Missing or invalid credentials"""
    status_code = 401

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(UnauthorizedError):
    """Valid identity without sufficient rights"""
    status_code = 403

    def __init__(self, message: Any = "Forbidden"):
        super().__init__(message)


class NotFoundError(AppError):
    """Referenced entity does not exist"""
    status_code = 404

    def __init__(self, message: Any = "Not Found"):
        super().__init__(message)


class RecipeGatewayError(AppError):
    """The external recipe catalog could not be reached or answered with an error"""
    status_code = 502

    def __init__(self, message: Any = "Recipe service unavailable"):
        super().__init__(message)
