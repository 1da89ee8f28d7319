"""Turns raw HTTP responses into RestResponse values"""

from dataclasses import dataclass

import requests

from kafka_connect_client.config.connect_config import ConfigDefaults


@dataclass(frozen=True)
class RestResponse:
    """Status code and body text of a completed exchange"""
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class RestResponseHandler:
    """
    Reads the status code and full body of a response

    The response is always closed before returning or raising. Non-2xx
    status codes are returned as-is for the caller to interpret.
    """

    def __init__(self, encoding: str = ConfigDefaults.ENCODING) -> None:
        self.encoding = encoding

    def __call__(self, response: requests.Response) -> RestResponse:
        with response:
            if response.encoding is None:
                response.encoding = self.encoding
            return RestResponse(status_code=response.status_code, body=response.text)
