"""Unit tests for VerificationRequest / VerificationResult."""

import pydantic
import pytest

from schemas.verification import VerificationRequest, VerificationResult


class TestVerificationResult:
    def test_valid_constant(self):
        assert VerificationResult.VALID.is_valid is True
        assert VerificationResult.VALID.error_code == ""

    def test_valid_constant_is_shared(self):
        assert VerificationResult.VALID is VerificationResult.VALID
        assert VerificationResult(is_valid=True) == VerificationResult.VALID

    def test_invalid(self):
        result = VerificationResult.invalid("incorrect-captcha-sol")
        assert result.is_valid is False
        assert result.error_code == "incorrect-captcha-sol"

    def test_truthiness_follows_is_valid(self):
        assert VerificationResult.VALID
        assert not VerificationResult.invalid("x")

    def test_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            VerificationResult.VALID.is_valid = False


class TestVerificationRequest:
    def test_empty_fields_allowed_at_construction(self):
        req = VerificationRequest(secret="", remote_address="")
        assert req.challenge == ""
        assert req.response == ""

    @pytest.mark.parametrize(
        "challenge, response, expected",
        [("c", "r", True), ("", "r", False), ("c", "", False), ("", "", False)],
    )
    def test_has_input(self, challenge, response, expected):
        req = VerificationRequest(
            secret="s", remote_address="ip", challenge=challenge, response=response
        )
        assert req.has_input is expected

    def test_frozen(self):
        req = VerificationRequest(secret="s", remote_address="ip")
        with pytest.raises(pydantic.ValidationError):
            req.secret = "other"
