"""Unit tests for AppError hierarchy."""

import pytest

from errors import AppError, ConfigurationError, TransportError
from schemas.verification import ERROR_NOT_REACHABLE


class TestAppErrorSubclasses:
    def test_configuration_error(self):
        e = ConfigurationError("no key", field="secret")
        assert isinstance(e, AppError)
        assert e.error_code == "configuration_error"
        assert e.message == "no key"
        assert e.field == "secret"

    def test_transport_error(self):
        e = TransportError("down", status_code=503)
        assert isinstance(e, AppError)
        assert e.error_code == ERROR_NOT_REACHABLE
        assert e.status_code == 503

    def test_transport_error_to_result_fails_closed(self):
        result = TransportError("down").to_result()
        assert result.is_valid is False
        assert result.error_code == ERROR_NOT_REACHABLE


class TestAppErrorToDict:
    def test_basic(self):
        e = ConfigurationError("missing key")
        assert e.to_dict() == {"error": "missing key", "code": "configuration_error"}

    @pytest.mark.parametrize(
        "kwargs, key, value",
        [
            ({"field": "secret"}, "field", "secret"),
            ({"details": {"setting": "RECAPTCHA_PRIVATE_KEY"}}, "details", {"setting": "RECAPTCHA_PRIVATE_KEY"}),
        ],
        ids=["with_field", "with_details"],
    )
    def test_optional_key_present(self, kwargs, key, value):
        e = ConfigurationError("invalid", **kwargs)
        assert e.to_dict()[key] == value

    def test_no_optional_keys_when_absent(self):
        d = ConfigurationError("missing").to_dict()
        assert "field" not in d
        assert "details" not in d

    def test_transport_status_code_included(self):
        assert TransportError("bad", status_code=500).to_dict()["status_code"] == 500
        assert "status_code" not in TransportError("bad").to_dict()
