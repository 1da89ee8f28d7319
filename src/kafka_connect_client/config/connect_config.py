"""
Kafka Connect client configuration types and schema
Type-safe, immutable configuration for the REST transport
"""

import codecs
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ConfigDefaults:
    """Default configuration values"""
    REQUEST_TIMEOUT_IN_SECONDS = 300
    CONNECTION_TIME_TO_LIVE_IN_SECONDS = 300
    ENCODING = "utf-8"
    PROXY_SCHEME = "http"


# Environment variable mapping
ENV_VAR_MAPPING = {
    "KAFKA_CONNECT_HOST": "api_host",
    "KAFKA_CONNECT_REQUEST_TIMEOUT": "request_timeout_in_seconds",
    "KAFKA_CONNECT_CONNECTION_TTL": "connection_time_to_live_in_seconds",
    "KAFKA_CONNECT_ENCODING": "encoding",
    "KAFKA_CONNECT_PROXY_HOST": "proxy_host",
    "KAFKA_CONNECT_PROXY_PORT": "proxy_port",
    "KAFKA_CONNECT_PROXY_SCHEME": "proxy_scheme",
    "KAFKA_CONNECT_PROXY_USERNAME": "proxy_username",
    "KAFKA_CONNECT_PROXY_PASSWORD": "proxy_password",
    "KAFKA_CONNECT_USERNAME": "basic_auth_username",
    "KAFKA_CONNECT_PASSWORD": "basic_auth_password",
    "KAFKA_CONNECT_IGNORE_INVALID_SSL": "ignore_invalid_ssl_certificates",
    "KAFKA_CONNECT_TRUST_STORE": "trust_store_file",
    "KAFKA_CONNECT_CLIENT_CERT": "client_certificate_file",
    "KAFKA_CONNECT_CLIENT_KEY": "client_key_file",
}


def normalize_api_host(api_host: str) -> str:
    """Prefix a bare host with http:// and strip a trailing slash"""
    host = api_host.strip()
    scheme, separator, rest = host.partition("://")
    if separator and scheme.lower() in ("http", "https"):
        host = f"{scheme.lower()}://{rest}"
    else:
        host = f"http://{host}"
    if host.endswith("/"):
        host = host[:-1]
    return host


class Configuration(BaseModel):
    """
    Kafka Connect client configuration

    Holds the API host, transport timeouts, payload encoding and the
    optional proxy, basic-auth and TLS settings. Instances are frozen;
    the ``with_*`` helpers return validated copies.

    Example:
        >>> config = Configuration(api_host="localhost:8083")
        >>> config.api_host
        'http://localhost:8083'
        >>> secured = config.with_basic_auth("user", "secret")
    """

    api_host: str = Field(
        ...,
        description="Kafka Connect REST endpoint, scheme://host:port",
        min_length=1,
    )
    request_timeout_in_seconds: int = Field(
        default=ConfigDefaults.REQUEST_TIMEOUT_IN_SECONDS,
        description="Connect timeout in seconds",
        gt=0,
    )
    connection_time_to_live_in_seconds: int = Field(
        default=ConfigDefaults.CONNECTION_TIME_TO_LIVE_IN_SECONDS,
        description="Lifetime of pooled connections in seconds, <= 0 disables",
    )
    encoding: str = Field(
        default=ConfigDefaults.ENCODING,
        description="Text encoding used for request payloads",
    )

    # Optional - Proxy
    proxy_host: Optional[str] = Field(default=None, description="Proxy host")
    proxy_port: Optional[int] = Field(
        default=None, description="Proxy port", gt=0, le=65535
    )
    proxy_scheme: str = Field(
        default=ConfigDefaults.PROXY_SCHEME,
        description="Scheme used to talk to the proxy",
    )
    proxy_username: Optional[str] = Field(default=None)
    proxy_password: Optional[str] = Field(default=None, repr=False)

    # Optional - Basic auth against the Kafka Connect host
    basic_auth_username: Optional[str] = Field(default=None)
    basic_auth_password: Optional[str] = Field(default=None, repr=False)

    # Optional - TLS
    ignore_invalid_ssl_certificates: bool = Field(
        default=False,
        description="Skip certificate verification (testing only)",
    )
    trust_store_file: Optional[str] = Field(
        default=None, description="PEM bundle of trusted CA certificates"
    )
    client_certificate_file: Optional[str] = Field(
        default=None, description="PEM client certificate for mutual TLS"
    )
    client_key_file: Optional[str] = Field(
        default=None, description="PEM private key for the client certificate"
    )

    model_config = {
        "str_strip_whitespace": True,
        "frozen": True,
    }

    @field_validator("api_host")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Normalize the host so endpoint paths can be appended verbatim"""
        host = normalize_api_host(v)
        if host in ("http:/", "https:/", "http://", "https://"):
            raise ValueError("api_host must include a host name")
        return host

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate encoding is known to the codec registry"""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @field_validator("proxy_scheme")
    @classmethod
    def validate_proxy_scheme(cls, v: str) -> str:
        """Proxy scheme must be http or https"""
        scheme = v.lower()
        if scheme not in ("http", "https"):
            raise ValueError("proxy_scheme must be 'http' or 'https'")
        return scheme

    @model_validator(mode="after")
    def validate_pairs(self) -> "Configuration":
        """Validate settings that only make sense together"""
        if self.proxy_host and self.proxy_port is None:
            raise ValueError("proxy_port is required when proxy_host is set")
        if self.proxy_username is not None and not self.proxy_host:
            raise ValueError("proxy_username requires proxy_host")
        if self.basic_auth_password is not None and self.basic_auth_username is None:
            raise ValueError("basic_auth_password requires basic_auth_username")
        if self.client_key_file and not self.client_certificate_file:
            raise ValueError("client_key_file requires client_certificate_file")
        return self

    def _copy_with(self, **changes: Any) -> "Configuration":
        """Return a validated copy with the given fields replaced"""
        data = self.model_dump()
        data.update(changes)
        return self.__class__(**data)

    def with_basic_auth(self, username: str, password: str) -> "Configuration":
        """Authenticate against the Kafka Connect host with basic auth"""
        return self._copy_with(
            basic_auth_username=username, basic_auth_password=password
        )

    def with_proxy(
        self, host: str, port: int, scheme: str = ConfigDefaults.PROXY_SCHEME
    ) -> "Configuration":
        """Route requests through a proxy"""
        return self._copy_with(proxy_host=host, proxy_port=port, proxy_scheme=scheme)

    def with_proxy_authentication(
        self, username: str, password: str
    ) -> "Configuration":
        """Authenticate against the configured proxy"""
        return self._copy_with(proxy_username=username, proxy_password=password)

    def with_request_timeout(self, seconds: int) -> "Configuration":
        return self._copy_with(request_timeout_in_seconds=seconds)

    def with_connection_time_to_live(self, seconds: int) -> "Configuration":
        return self._copy_with(connection_time_to_live_in_seconds=seconds)

    def with_ignore_invalid_ssl_certificates(self) -> "Configuration":
        return self._copy_with(ignore_invalid_ssl_certificates=True)

    def with_trust_store(self, path: str) -> "Configuration":
        return self._copy_with(trust_store_file=path)

    def with_client_certificate(
        self, certificate_file: str, key_file: Optional[str] = None
    ) -> "Configuration":
        """Present a client certificate during the TLS handshake"""
        return self._copy_with(
            client_certificate_file=certificate_file, client_key_file=key_file
        )

    @property
    def has_proxy(self) -> bool:
        return bool(self.proxy_host)

    @property
    def has_basic_auth(self) -> bool:
        return self.basic_auth_username is not None
