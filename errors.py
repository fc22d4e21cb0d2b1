"""
Error hierarchy for reCAPTCHA verification.

AppError is the base for all typed errors. Only caller defects and transport
failures are exceptions; a CAPTCHA the visitor got wrong (or left blank) is an
ordinary VerificationResult with is_valid=False.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from schemas.verification import VerificationResult


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(AppError):
    """Missing secret, public key or remote address. Not retryable."""

    error_code = "configuration_error"


class TransportError(AppError):
    """The verification service could not be reached or gave no verdict.

    Raised for connection failures, timeouts, non-2xx answers and empty
    bodies. Callers decide whether to fail open, fail closed or let the
    visitor retry; ``to_result()`` gives the fail-closed outcome.
    """

    error_code = "recaptcha-not-reachable"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload

    def to_result(self) -> "VerificationResult":
        from schemas.verification import VerificationResult

        return VerificationResult.invalid(self.error_code)
