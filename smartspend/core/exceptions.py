"""Application exceptions, translated to JSON responses in main.py."""


class SmartSpendException(Exception):
    """Base exception for all SmartSpend errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(SmartSpendException):
    """Raised when a token or credentials are rejected."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class NotFoundError(SmartSpendException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class StorageError(SmartSpendException):
    """Raised when the expense store cannot be written."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, status_code=500)


class AIServiceError(SmartSpendException):
    """Raised when the Gemini service is unavailable or returns garbage."""

    def __init__(self, message: str = "AI service request failed"):
        super().__init__(message, status_code=502)
