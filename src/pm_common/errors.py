"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  7xxx: Ledger / PQS
  9xxx: System

Infrastructure failures (store unreachable, timeout) and precondition failures
(required singleton contract missing) both surface as HTTP 500, but carry
distinct codes so they stay separable in logs.
"""


class AppError(Exception):
    """Base application error."""

    is_precondition = False

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


# --- 1xxx: Auth ---

class AuthenticationError(AppError):
    def __init__(self, detail: str = "Missing or invalid credentials") -> None:
        super().__init__(1001, detail, 401)


# --- 7xxx: Ledger / PQS ---

class LedgerStoreUnavailableError(AppError):
    def __init__(self, operation: str, code: int = 7001, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(
            code,
            message or f"Ledger projection store unavailable during {operation}",
            500,
        )


class LedgerStoreTimeoutError(LedgerStoreUnavailableError):
    def __init__(self, operation: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            operation,
            7002,
            f"Ledger projection store timed out after {timeout_seconds}s during {operation}",
        )


class ExchangeNotFoundError(AppError):
    is_precondition = True

    def __init__(self) -> None:
        super().__init__(7101, "No active Exchange contract found", 500)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
