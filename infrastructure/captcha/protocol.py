"""CaptchaVerifier protocol: callers depend on this, not the concrete implementation."""

from typing import Protocol

from schemas.verification import VerificationRequest, VerificationResult


class CaptchaVerifier(Protocol):
    def build_request(
        self, remote_address: str, challenge: str, response: str
    ) -> VerificationRequest: ...

    def validate(self, request: VerificationRequest) -> VerificationResult: ...
