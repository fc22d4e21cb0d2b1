"""reCAPTCHA implementation of CaptchaVerifier.

One POST per submission to the verify endpoint:
- form fields privatekey / remoteip / challenge / response
- plain-text answer, line 1 "true"|"false", line 2 the error code when false
- blank challenge or response short-circuits to an invalid result, no call
- network failures, timeouts, non-2xx answers and answers without a verdict
  raise TransportError
"""

from typing import Optional

import httpx

from config import CaptchaSettings
from errors import ConfigurationError, TransportError
from infrastructure.http_client import AsyncHttpClient, HttpClient
from schemas.verification import (
    ERROR_MISSING_INPUT,
    ERROR_UNKNOWN,
    VerificationRequest,
    VerificationResult,
)
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

VERIFY_URL = "http://api-verify.recaptcha.net/verify"
VERIFY_URL_SECURE = "https://api-verify.recaptcha.net/verify"

_USER_AGENT = "recaptcha-verify/python"


def parse_verify_response(body: str) -> VerificationResult:
    """Interpret the verify endpoint's line-oriented answer.

    Raises TransportError for an empty body or a first line that is neither
    "true" nor "false", since neither carries a verdict.
    """
    lines = [line.strip() for line in body.strip().splitlines()]
    if not lines or not lines[0]:
        raise TransportError("reCAPTCHA verify endpoint returned an empty body")

    if lines[0].lower() == "true":
        return VerificationResult.VALID

    if lines[0].lower() != "false":
        raise TransportError(
            "Unrecognised reCAPTCHA verify response",
            details={"first_line": lines[0][:100]},
        )

    error_code = lines[1] if len(lines) > 1 and lines[1] else ERROR_UNKNOWN
    return VerificationResult.invalid(error_code)


def check_request(request: VerificationRequest) -> Optional[VerificationResult]:
    """Validate a request before it goes out.

    Raises ConfigurationError for caller defects. Returns the missing-input
    result when there is nothing to verify, None when the call should be made.
    """
    if not request.secret:
        raise ConfigurationError(
            "reCAPTCHA private key must be set", field="secret"
        )
    if not request.remote_address:
        raise ConfigurationError(
            "Remote address must be set", field="remote_address"
        )
    if not request.has_input:
        log.info("recaptcha_missing_input", remote_ip=hash_ip(request.remote_address))
        return VerificationResult.invalid(ERROR_MISSING_INPUT)
    return None


def _form_data(request: VerificationRequest) -> dict[str, str]:
    return {
        "privatekey": request.secret,
        "remoteip": request.remote_address,
        "challenge": request.challenge,
        "response": request.response,
    }


def _interpret(
    response: httpx.Response, request: VerificationRequest
) -> VerificationResult:
    if not response.is_success:
        log.error(
            "recaptcha_api_error",
            status_code=response.status_code,
            response_text=response.text[:200],
        )
        raise TransportError(
            f"reCAPTCHA verify endpoint answered HTTP {response.status_code}",
            status_code=response.status_code,
        )

    result = parse_verify_response(response.text)
    if result.is_valid:
        log.info("recaptcha_verified", remote_ip=hash_ip(request.remote_address))
    else:
        log.warning(
            "recaptcha_verification_failed",
            error_code=result.error_code,
            remote_ip=hash_ip(request.remote_address),
        )
    return result


def _request_failed(e: httpx.HTTPError) -> TransportError:
    log.error(
        "recaptcha_request_failed", error=str(e), error_type=type(e).__name__
    )
    if isinstance(e, httpx.TimeoutException):
        return TransportError("reCAPTCHA verify endpoint timed out")
    return TransportError(f"Could not reach reCAPTCHA verify endpoint: {e}")


class _BaseVerifier:
    def __init__(
        self,
        secret: str,
        *,
        use_ssl: bool = True,
        verify_url: Optional[str] = None,
    ) -> None:
        self._secret = secret
        self.verify_url = verify_url or (VERIFY_URL_SECURE if use_ssl else VERIFY_URL)
        if not secret:
            log.warning("recaptcha_secret_not_configured")

    def build_request(
        self, remote_address: str, challenge: str, response: str
    ) -> VerificationRequest:
        """Pair a submitted challenge/response with this verifier's secret."""
        return VerificationRequest(
            secret=self._secret,
            remote_address=remote_address,
            challenge=challenge,
            response=response,
        )


class RecaptchaVerifier(_BaseVerifier):
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        *,
        use_ssl: bool = True,
        verify_url: Optional[str] = None,
    ) -> None:
        super().__init__(secret, use_ssl=use_ssl, verify_url=verify_url)
        self._http = http_client
        self._owns_http = False

    @classmethod
    def from_settings(cls, settings: CaptchaSettings) -> "RecaptchaVerifier":
        settings.require_keys()
        verifier = cls(
            settings.recaptcha_private_key,
            HttpClient(timeout=settings.recaptcha_timeout_seconds),
            use_ssl=settings.recaptcha_use_ssl,
            verify_url=settings.recaptcha_verify_url,
        )
        verifier._owns_http = True
        return verifier

    def validate(self, request: VerificationRequest) -> VerificationResult:
        short_circuit = check_request(request)
        if short_circuit is not None:
            return short_circuit
        try:
            response = self._http.post(
                self.verify_url,
                data=_form_data(request),
                headers={"User-Agent": _USER_AGENT},
            )
        except httpx.HTTPError as e:
            raise _request_failed(e) from e
        return _interpret(response, request)

    def close(self) -> None:
        """Close the HTTP client if this verifier created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "RecaptchaVerifier":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class AsyncRecaptchaVerifier(_BaseVerifier):
    def __init__(
        self,
        secret: str,
        http_client: AsyncHttpClient,
        *,
        use_ssl: bool = True,
        verify_url: Optional[str] = None,
    ) -> None:
        super().__init__(secret, use_ssl=use_ssl, verify_url=verify_url)
        self._http = http_client
        self._owns_http = False

    @classmethod
    def from_settings(cls, settings: CaptchaSettings) -> "AsyncRecaptchaVerifier":
        settings.require_keys()
        verifier = cls(
            settings.recaptcha_private_key,
            AsyncHttpClient(timeout=settings.recaptcha_timeout_seconds),
            use_ssl=settings.recaptcha_use_ssl,
            verify_url=settings.recaptcha_verify_url,
        )
        verifier._owns_http = True
        return verifier

    async def validate(self, request: VerificationRequest) -> VerificationResult:
        short_circuit = check_request(request)
        if short_circuit is not None:
            return short_circuit
        try:
            response = await self._http.post(
                self.verify_url,
                data=_form_data(request),
                headers={"User-Agent": _USER_AGENT},
            )
        except httpx.HTTPError as e:
            raise _request_failed(e) from e
        return _interpret(response, request)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AsyncRecaptchaVerifier":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
