"""
Response Handler Unit Tests
"""

from unittest.mock import MagicMock, PropertyMock

import pytest
import requests

from kafka_connect_client.client.response_handler import RestResponse, RestResponseHandler


class TestRestResponseHandler:
    """Tests for RestResponseHandler"""

    def test_reads_status_and_body(self, make_response):
        """Should package the status code and body text"""
        result = RestResponseHandler()(make_response(201, '{"name":"x"}'))
        assert result == RestResponse(201, '{"name":"x"}')

    def test_non_2xx_not_raised(self, make_response):
        """Should leave error statuses to the caller"""
        result = RestResponseHandler()(make_response(500, "boom"))
        assert result.status_code == 500
        assert result.is_success is False

    def test_empty_body(self, make_response):
        """Should return an empty string for empty bodies"""
        assert RestResponseHandler()(make_response(204, "")).body == ""

    def test_fallback_encoding(self, make_response):
        """Should decode with the configured encoding when none is declared"""
        response = make_response(200, "", encoding=None)
        response._content = "naïve".encode("latin-1")

        assert RestResponseHandler("latin-1")(response).body == "naïve"

    def test_declared_encoding_wins(self, make_response):
        """Should keep the charset declared by the server"""
        response = make_response(200, "ünïcode", encoding="utf-8")
        assert RestResponseHandler("latin-1")(response).body == "ünïcode"

    def test_response_closed_on_error(self):
        """Should release the response when reading fails"""
        response = MagicMock()
        type(response).text = PropertyMock(side_effect=requests.exceptions.ChunkedEncodingError())

        with pytest.raises(requests.exceptions.ChunkedEncodingError):
            RestResponseHandler()(response)

        response.__exit__.assert_called_once()


class TestRestResponse:
    """Tests for RestResponse"""

    @pytest.mark.parametrize("status_code, expected", [
        (200, True),
        (204, True),
        (299, True),
        (199, False),
        (301, False),
        (409, False),
    ])
    def test_is_success(self, status_code: int, expected: bool):
        """Should treat 2xx as success"""
        assert RestResponse(status_code, "").is_success is expected
