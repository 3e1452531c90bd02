"""
NutriPlan API - Custom Exception Classes.

Exception hierarchy for application error handling.
"""

from typing import Any, Optional


class NutriPlanException(Exception):
    """
    Base exception class for NutriPlan application.

    All custom exceptions should inherit from this class. Instances are
    turned into JSON responses by the handler registered in ``main.py``.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details (string or JSON-serializable dict).
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[Any] = None
    ):
        """
        Initialize NutriPlanException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 500).
            detail: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class AuthenticationError(NutriPlanException):
    """
    Exception raised for authentication failures.

    Used when:
    - Invalid credentials
    - Expired or revoked tokens
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=401,
            detail=detail
        )


class NotFoundError(NutriPlanException):
    """
    Exception raised when a resource is not found.

    Used when:
    - User not found
    - Plan, food item or quiz card does not exist
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            detail=detail
        )


class ValidationError(NutriPlanException):
    """
    Exception raised for input validation failures.

    Used when:
    - Invalid input format
    - Missing required fields
    - Business rule violations
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            detail=detail
        )


class ForbiddenError(NutriPlanException):
    """
    Exception raised for authorization failures.

    Used when a user touches a plan or food item owned by someone else.
    """

    def __init__(
        self,
        message: str = "Forbidden",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=403,
            detail=detail
        )


class AIServiceError(NutriPlanException):
    """
    Exception raised when the generative model cannot be reached or
    returns something unusable.
    """

    def __init__(
        self,
        message: str = "AI service unavailable",
        detail: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=502,
            detail=detail
        )
