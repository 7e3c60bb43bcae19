"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Drop
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 3xxx: Drop ---

class DropNotFoundError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3001, f"Product {product_id} not found", 404)


class DropAlreadySoldError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3002, f"Product {product_id} is already sold", 409)


class DropLockedByOtherError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(
            3003, f"Product {product_id} is currently locked by another user", 409
        )


class InvalidDropConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3004, f"Invalid drop config: {detail}", 422)


# --- 9xxx: System ---

class ResetNotAllowedError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Reset is disabled in this environment", 403)


class DropBusyError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(9004, f"Product {product_id} is busy, retry shortly", 503)
