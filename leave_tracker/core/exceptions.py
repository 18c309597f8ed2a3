from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AppException):
    """User input rejected by a form-level check."""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR"
        )

class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class InsufficientBalanceError(AppException):
    def __init__(self, leave_type: str, available: float, requested: float):
        super().__init__(
            message=(
                f"Not enough {leave_type} leave. Available: {available:.1f} days, "
                f"requested: {requested:.1f} days."
            ),
            status_code=400,
            error_code="INSUFFICIENT_BALANCE",
            details={"leave_type": leave_type, "available": available, "requested": requested}
        )

class SheetProxyError(AppException):
    """Rendered as a bare ``{"error": message}`` body by the sheet proxy handler."""
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code="SHEET_PROXY_ERROR"
        )
