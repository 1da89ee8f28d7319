"""
Request abstraction shared by every endpoint definition

A Request names its HTTP method and endpoint path, optionally carries a
body, and knows how to parse a successful response body. The transport
never looks inside the body or the response.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Generic, Type, TypeVar

from pydantic import TypeAdapter

from kafka_connect_client.exceptions import ValidationError
from kafka_connect_client.utils.url import escape_path


T = TypeVar("T")


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Request(ABC, Generic[T]):
    """Base class for Kafka Connect REST requests"""

    method: ClassVar[HttpMethod]

    @property
    @abstractmethod
    def api_endpoint(self) -> str:
        """Endpoint path starting with '/', query string included"""

    @property
    def request_body(self) -> Any:
        """Object serialized as the JSON entity, or None"""
        return None

    @abstractmethod
    def parse_response(self, body: str) -> T:
        """Parse the body of a 2xx response"""


def parse_json(body: str, type_: Type[T]) -> T:
    """Validate a JSON document against a type"""
    return TypeAdapter(type_).validate_json(body)


def connector_path(connector_name: str, *suffix: str) -> str:
    """Build /connectors/{name}[/suffix...] with the name escaped"""
    if not connector_name:
        raise ValidationError("connector_name is required", field="connector_name")
    return "/".join(("/connectors", escape_path(connector_name)) + suffix)


class AcceptedRequest(Request[bool]):
    """Request whose successful response carries no useful body"""

    def parse_response(self, body: str) -> bool:
        return True
