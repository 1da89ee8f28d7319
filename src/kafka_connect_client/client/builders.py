"""
Builder values used to assemble the REST transport

ClientBuilder and RequestConfig are frozen dataclasses: every ``with_*``
call returns a new value, so the transport's init threads one explicit
builder through each step instead of mutating shared state.
"""

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from kafka_connect_client.client.auth import CredentialStore, HttpHost
from kafka_connect_client.config.connect_config import Configuration
from kafka_connect_client.exceptions import ConfigurationError

# Logger for this module
logger = logging.getLogger(__name__)


# Timeout value accepted by requests: seconds, (connect, read) or None
RequestTimeout = Optional[Union[float, Tuple[Optional[float], Optional[float]]]]


@dataclass(frozen=True)
class HttpsContext:
    """TLS settings applied to the session"""
    verify: Union[bool, str] = True
    cert: Optional[Union[str, Tuple[str, str]]] = None


class HttpsContextBuilder:
    """
    Builds the TLS context from configuration

    Example:
        >>> context = HttpsContextBuilder(config).build()
        >>> context.verify
        True
    """

    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration

    def build(self) -> HttpsContext:
        """
        Create the HttpsContext

        Raises:
            ConfigurationError: If a configured trust store or client
                certificate file does not exist
        """
        config = self.configuration
        verify: Union[bool, str] = True

        if config.ignore_invalid_ssl_certificates:
            logger.warning(
                "TLS certificate verification is disabled for %s", config.api_host
            )
            verify = False
        elif config.trust_store_file:
            verify = self._require_file(config.trust_store_file, "trust_store_file")

        cert: Optional[Union[str, Tuple[str, str]]] = None
        if config.client_certificate_file:
            cert_file = self._require_file(
                config.client_certificate_file, "client_certificate_file"
            )
            if config.client_key_file:
                key_file = self._require_file(config.client_key_file, "client_key_file")
                cert = (cert_file, key_file)
            else:
                cert = cert_file

        return HttpsContext(verify=verify, cert=cert)

    @staticmethod
    def _require_file(path: str, field_name: str) -> str:
        if not Path(path).is_file():
            raise ConfigurationError(
                f"{field_name} does not exist: {path}",
                code="CONFIG_FILE_NOT_FOUND",
            )
        return path


@dataclass(frozen=True)
class RequestConfig:
    """Per-request defaults: timeouts in milliseconds and an optional proxy"""
    connect_timeout_ms: Optional[int] = None
    socket_timeout_ms: Optional[int] = None
    proxy: Optional[HttpHost] = None

    def with_connect_timeout(self, milliseconds: Optional[int]) -> "RequestConfig":
        return replace(self, connect_timeout_ms=milliseconds)

    def with_socket_timeout(self, milliseconds: Optional[int]) -> "RequestConfig":
        return replace(self, socket_timeout_ms=milliseconds)

    def with_proxy(self, proxy: Optional[HttpHost]) -> "RequestConfig":
        return replace(self, proxy=proxy)

    @property
    def timeout(self) -> RequestTimeout:
        """Timeout in the form requests expects"""
        if self.connect_timeout_ms is None and self.socket_timeout_ms is None:
            return None
        return (
            _to_seconds(self.connect_timeout_ms),
            _to_seconds(self.socket_timeout_ms),
        )


def _to_seconds(milliseconds: Optional[int]) -> Optional[float]:
    if milliseconds is None:
        return None
    return milliseconds / 1000.0


class TimeToLiveAdapter(HTTPAdapter):
    """
    HTTPAdapter whose connection pools are recycled after a time-to-live

    Once the pools are older than ``time_to_live`` seconds they are
    cleared before the next request, so no pooled connection is reused
    past its lifetime. A time-to-live of None or <= 0 keeps pools forever.
    """

    def __init__(self, time_to_live: Optional[float] = None, **kwargs: Any) -> None:
        self.time_to_live = time_to_live
        self._pools_created_at = time.monotonic()
        self._ttl_lock = threading.Lock()
        super().__init__(**kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self._expire_pools()
        return super().send(request, **kwargs)

    def _expire_pools(self) -> None:
        if not self.time_to_live or self.time_to_live <= 0:
            return

        now = time.monotonic()
        with self._ttl_lock:
            if now - self._pools_created_at < self.time_to_live:
                return
            self._pools_created_at = now

        logger.debug("Recycling connection pools after %ss", self.time_to_live)
        self.poolmanager.clear()
        for proxy_manager in self.proxy_manager.values():
            proxy_manager.clear()


@dataclass(frozen=True)
class ClientBuilder:
    """
    Everything needed to build the underlying requests.Session

    Example:
        >>> builder = ClientBuilder().with_connection_time_to_live(300)
        >>> session = builder.build()
    """
    connection_time_to_live: Optional[int] = None
    https_context: Optional[HttpsContext] = None
    credential_store: Optional[CredentialStore] = field(default=None, compare=False)
    default_request_config: Optional[RequestConfig] = None
    pool_connections: int = 10
    pool_maxsize: int = 10
    user_agent: Optional[str] = None

    def with_connection_time_to_live(self, seconds: Optional[int]) -> "ClientBuilder":
        return replace(self, connection_time_to_live=seconds)

    def with_https_context(self, context: Optional[HttpsContext]) -> "ClientBuilder":
        return replace(self, https_context=context)

    def with_credential_store(self, store: Optional[CredentialStore]) -> "ClientBuilder":
        return replace(self, credential_store=store)

    def with_default_request_config(
        self, request_config: Optional[RequestConfig]
    ) -> "ClientBuilder":
        return replace(self, default_request_config=request_config)

    def with_pool_size(self, pool_connections: int, pool_maxsize: int) -> "ClientBuilder":
        return replace(
            self, pool_connections=pool_connections, pool_maxsize=pool_maxsize
        )

    def with_user_agent(self, user_agent: Optional[str]) -> "ClientBuilder":
        return replace(self, user_agent=user_agent)

    def build(self) -> requests.Session:
        """Create a session with pooling, TLS and proxy settings applied"""
        session = requests.Session()

        # Settings come from configuration only, never from env or .netrc
        session.trust_env = False

        if self.user_agent:
            session.headers["User-Agent"] = self.user_agent

        # Retries are the caller's responsibility
        adapter = TimeToLiveAdapter(
            time_to_live=self.connection_time_to_live,
            pool_connections=self.pool_connections,
            pool_maxsize=self.pool_maxsize,
            max_retries=Retry(total=0, read=False),
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        if self.https_context is not None:
            session.verify = self.https_context.verify
            session.cert = self.https_context.cert

        proxy = self.default_request_config.proxy if self.default_request_config else None
        if proxy is not None:
            proxy_url = self._proxy_url(proxy)
            session.proxies = {"http": proxy_url, "https": proxy_url}

        return session

    def _proxy_url(self, proxy: HttpHost) -> str:
        """Proxy URL with credentials embedded when the store has them"""
        credentials = None
        if self.credential_store is not None:
            credentials = self.credential_store.find(proxy.host, proxy.port)

        if credentials is None:
            return proxy.to_uri()

        userinfo = quote(credentials.username, safe="")
        if credentials.password is not None:
            userinfo = f"{userinfo}:{quote(credentials.password, safe='')}"
        return f"{proxy.scheme}://{userinfo}@{proxy.host}:{proxy.port}"

    def describe(self) -> Dict[str, Any]:
        """Summary safe for logging"""
        request_config = self.default_request_config
        return {
            "connection_time_to_live": self.connection_time_to_live,
            "verify": self.https_context.verify if self.https_context else True,
            "proxy": (
                request_config.proxy.to_uri()
                if request_config and request_config.proxy
                else None
            ),
            "credential_scopes": len(self.credential_store) if self.credential_store else 0,
        }
