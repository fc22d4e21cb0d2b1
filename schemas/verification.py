"""
Verification request/result models.

VerificationRequest: what the caller collected from the submitted form
VerificationResult:  pass/fail outcome with a machine-readable error code

Both are frozen: a result handed back to the caller cannot be flipped later.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

# Form fields the challenge widget posts back with the page.
CHALLENGE_FIELD = "recaptcha_challenge_field"
RESPONSE_FIELD = "recaptcha_response_field"

# Error codes. The first one is produced locally, the rest come from the service.
ERROR_MISSING_INPUT = "missing-input-response"
ERROR_INCORRECT_SOLUTION = "incorrect-captcha-sol"
ERROR_INVALID_PUBLIC_KEY = "invalid-site-public-key"
ERROR_INVALID_PRIVATE_KEY = "invalid-site-private-key"
ERROR_INVALID_REQUEST_COOKIE = "invalid-request-cookie"
ERROR_VERIFY_PARAMS_INCORRECT = "verify-params-incorrect"
ERROR_INVALID_REFERRER = "invalid-referrer"
ERROR_NOT_REACHABLE = "recaptcha-not-reachable"
ERROR_UNKNOWN = "unknown-error"


class VerificationRequest(BaseModel):
    """A challenge/response pair plus the credentials needed to check it.

    Emptiness is checked by the verifier, not here, so that a missing secret
    surfaces as a ConfigurationError instead of a pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    secret: str
    remote_address: str
    challenge: str = ""
    response: str = ""

    @property
    def has_input(self) -> bool:
        return bool(self.challenge) and bool(self.response)


class VerificationResult(BaseModel):
    """Outcome of one verification. error_code is "" when valid."""

    model_config = ConfigDict(frozen=True)

    # Forced success for the administrative bypass; assigned below.
    VALID: ClassVar["VerificationResult"]

    is_valid: bool
    error_code: str = ""

    @classmethod
    def invalid(cls, error_code: str) -> "VerificationResult":
        return cls(is_valid=False, error_code=error_code)

    def __bool__(self) -> bool:
        return self.is_valid


VerificationResult.VALID = VerificationResult(is_valid=True, error_code="")
