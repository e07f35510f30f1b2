"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth / CAPTCHA
  2xxx: Request parameters
  5xxx: Stored ledger data
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


# --- 1xxx: Auth / CAPTCHA ---

class InvalidApiTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Unauthorized", 401)


class InvalidAdminPasswordError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid password", 401)


class AdminSessionRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Admin session missing or expired", 401)


class CaptchaTokenMissingError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Verification token is required", 400)


class CaptchaRejectedError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Verification failed", 400)


class CaptchaUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1006, f"Verification service unavailable: {detail}", 502)


# --- 2xxx: Request parameters ---

class DomainRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Domain parameter is required", 400)


# --- 5xxx: Stored ledger data ---

class CorruptLedgerDataError(AppError):
    def __init__(self, key: str, detail: str) -> None:
        super().__init__(5001, f"Corrupt ledger data at {key}: {detail}", 500)


# --- 9xxx: System ---

class CapabilityNotSupportedError(AppError):
    def __init__(self, capability: str) -> None:
        super().__init__(
            9001, f"Configured ledger backend does not support {capability}", 501
        )


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class StorageUnavailableError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Storage backend unavailable", 503)
