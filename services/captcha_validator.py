"""
Form-level validator hook around a CaptchaVerifier.

A host that processes form submissions keeps a list of FormValidator objects
and asks each one is_valid. CaptchaValidator is the CAPTCHA member of that
list: it verifies lazily, at most once per submission, and honours the
administrative skip flag.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from infrastructure.captcha.protocol import CaptchaVerifier
from schemas.verification import (
    CHALLENGE_FIELD,
    RESPONSE_FIELD,
    VerificationResult,
)
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "The verification words are incorrect."


class FormValidator(Protocol):
    @property
    def is_valid(self) -> bool: ...

    @property
    def error_message(self) -> str: ...


class CaptchaValidator:
    def __init__(
        self,
        verifier: CaptchaVerifier,
        remote_address: Optional[str],
        challenge: Optional[str],
        response: Optional[str],
        *,
        skip_validation: bool = False,
        error_message: Optional[str] = None,
    ) -> None:
        self._verifier = verifier
        self._remote_address = remote_address or ""
        self._challenge = challenge or ""
        self._response = response or ""
        self._skip = skip_validation
        self._error_message = error_message
        self._result: Optional[VerificationResult] = None

    @classmethod
    def from_form(
        cls,
        verifier: CaptchaVerifier,
        remote_address: Optional[str],
        form: dict,
        **kwargs,
    ) -> "CaptchaValidator":
        """Build from submitted form values keyed by the widget's field names."""
        return cls(
            verifier,
            remote_address,
            form.get(CHALLENGE_FIELD),
            form.get(RESPONSE_FIELD),
            **kwargs,
        )

    @property
    def result(self) -> Optional[VerificationResult]:
        return self._result

    @property
    def error_message(self) -> str:
        return self._error_message or DEFAULT_ERROR_MESSAGE

    @property
    def is_valid(self) -> bool:
        return self.validate().is_valid

    def validate(self) -> VerificationResult:
        """Verify the submission, reusing the earlier result if there is one.

        TransportError propagates; the host decides whether that fails open
        or closed.
        """
        if self._result is not None:
            return self._result

        if self._skip:
            log.warning(
                "recaptcha_verification_skipped",
                remote_ip=hash_ip(self._remote_address),
            )
            self._result = VerificationResult.VALID
            return self._result

        request = self._verifier.build_request(
            self._remote_address, self._challenge, self._response
        )
        self._result = self._verifier.validate(request)
        return self._result


def validate_all(validators: Iterable[FormValidator]) -> bool:
    """True when every validator passes. All of them are evaluated."""
    results = [validator.is_valid for validator in validators]
    return all(results)
