"""
Shared fixtures for unit tests
"""

import socket
from typing import Callable, Optional

import pytest
import requests


def build_response(
    status_code: int = 200,
    body: str = "",
    encoding: Optional[str] = "utf-8",
    url: str = "http://localhost:8083/",
) -> requests.Response:
    """Build a fully read requests.Response"""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode(encoding or "utf-8")
    response._content_consumed = True
    response.encoding = encoding
    response.url = url
    return response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture
def closed_port() -> int:
    """A local port with nothing listening on it"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
