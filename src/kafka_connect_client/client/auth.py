"""
Authentication state shared by the REST transport

The credential store and the preemptive auth cache are populated once while
the transport is initialized. Each request then gets its own
ExecutionContext wrapping the same store and cache, which decides how the
request authenticates.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple
from urllib.parse import urlsplit

import requests
from requests.auth import AuthBase, HTTPBasicAuth

# Logger for this module
logger = logging.getLogger(__name__)


DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

# Auth scheme marker stored in the auth cache
BASIC_SCHEME = "basic"


@dataclass(frozen=True)
class HttpHost:
    """A (host, port, scheme) triple identifying a server or proxy"""
    host: str
    port: int
    scheme: str = "http"

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", self.host.lower())
        object.__setattr__(self, "scheme", self.scheme.lower())

    @classmethod
    def from_url(cls, url: str) -> "HttpHost":
        """
        Parse scheme, host and port out of a URL

        A missing port resolves to the scheme's default port.

        Raises:
            ValueError: If the URL has no host, an unsupported scheme
                or an invalid port
        """
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if scheme not in DEFAULT_PORTS:
            raise ValueError(f"Unsupported URL scheme in {url!r}")
        if not parts.hostname:
            raise ValueError(f"No host name in {url!r}")
        # .port raises ValueError for out of range or non-numeric ports
        port = parts.port
        if port is None:
            port = DEFAULT_PORTS[scheme]
        return cls(parts.hostname, port, scheme)

    @property
    def scope(self) -> "AuthScope":
        return AuthScope(self.host, self.port)

    def to_uri(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


@dataclass(frozen=True)
class AuthScope:
    """Where a set of credentials applies; port None matches any port"""
    host: str
    port: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", self.host.lower())

    def matches(self, host: str, port: int) -> bool:
        if self.host != host.lower():
            return False
        return self.port is None or self.port == port


@dataclass(frozen=True)
class Credentials:
    """Username and password pair"""
    username: str
    password: Optional[str] = field(default=None, repr=False)


class CredentialStore:
    """
    Credentials keyed by AuthScope

    Not thread-safe for writes: it is only mutated while the transport is
    initialized, before requests are submitted.
    """

    def __init__(self) -> None:
        self._credentials: Dict[AuthScope, Credentials] = {}

    def set_credentials(self, scope: AuthScope, credentials: Credentials) -> None:
        """Register credentials for a scope, replacing any previous entry"""
        self._credentials[scope] = credentials

    def get_credentials(self, scope: AuthScope) -> Optional[Credentials]:
        """
        Find credentials for a scope

        An exact match wins; otherwise an entry registered for any port
        on the same host is returned.
        """
        exact = self._credentials.get(scope)
        if exact is not None:
            return exact
        if scope.port is None:
            return None
        return self._credentials.get(AuthScope(scope.host))

    def find(self, host: str, port: int) -> Optional[Credentials]:
        return self.get_credentials(AuthScope(host, port))

    def remove(self, scope: AuthScope) -> None:
        self._credentials.pop(scope, None)

    def clear(self) -> None:
        self._credentials.clear()

    def __contains__(self, scope: object) -> bool:
        return scope in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)

    def __iter__(self) -> Iterator[Tuple[AuthScope, Credentials]]:
        return iter(list(self._credentials.items()))

    def __repr__(self) -> str:
        scopes = ", ".join(
            f"{scope.host}:{scope.port if scope.port is not None else '*'}"
            for scope in self._credentials
        )
        return f"CredentialStore([{scopes}])"


class AuthCache:
    """
    Hosts for which basic auth is sent preemptively

    Seeding an entry means the first request to that host carries an
    Authorization header instead of waiting for a 401 challenge.
    """

    def __init__(self) -> None:
        self._schemes: Dict[HttpHost, str] = {}

    def put(self, host: HttpHost, scheme: str = BASIC_SCHEME) -> None:
        self._schemes[host] = scheme

    def get(self, host: HttpHost) -> Optional[str]:
        return self._schemes.get(host)

    def remove(self, host: HttpHost) -> None:
        self._schemes.pop(host, None)

    def clear(self) -> None:
        self._schemes.clear()

    def __contains__(self, host: object) -> bool:
        return host in self._schemes

    def __len__(self) -> int:
        return len(self._schemes)

    def __iter__(self) -> Iterator[HttpHost]:
        return iter(list(self._schemes))

    def __repr__(self) -> str:
        hosts = ", ".join(host.to_uri() for host in self._schemes)
        return f"AuthCache([{hosts}])"


class ChallengeBasicAuth(AuthBase):
    """
    Basic auth sent only after the server asks for it

    Follows the handle_401 flow of requests' HTTPDigestAuth: on a 401 with
    a Basic challenge the request is replayed once with credentials.
    """

    def __init__(self, username: str, password: Optional[str]) -> None:
        self.username = username
        self.password = password

    def handle_401(self, r: requests.Response, **kwargs: Any) -> requests.Response:
        if r.status_code != 401:
            return r

        challenge = r.headers.get("www-authenticate", "")
        if "basic" not in challenge.lower():
            logger.warning(
                "Cannot answer %s challenge from %s", challenge or "empty", r.url
            )
            return r

        if r.request.headers.get("Authorization"):
            # Credentials were already sent and rejected
            return r

        # Consume content and release the original connection
        r.content
        r.close()
        prep = r.request.copy()
        HTTPBasicAuth(self.username, self.password or "")(prep)

        _r = r.connection.send(prep, **kwargs)
        _r.history.append(r)
        _r.request = prep
        return _r

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.register_hook("response", self.handle_401)
        return r

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ChallengeBasicAuth)
            and self.username == other.username
            and self.password == other.password
        )

    def __ne__(self, other: object) -> bool:
        return not self == other


class ExecutionContext:
    """
    Per-request view of the shared auth state

    A fresh context is built for every request so per-call attributes do
    not leak between concurrent requests, while the credential store and
    auth cache are shared.
    """

    def __init__(self) -> None:
        self.auth_cache: Optional[AuthCache] = None
        self.credential_store: Optional[CredentialStore] = None
        self.attributes: Dict[str, Any] = {}

    def resolve_auth(self, url: str) -> Optional[AuthBase]:
        """
        Decide how a request to ``url`` authenticates

        Returns:
            HTTPBasicAuth when credentials exist and the host is in the auth
            cache, ChallengeBasicAuth when only credentials exist, and None
            when no credentials apply
        """
        if self.credential_store is None:
            return None

        try:
            target = HttpHost.from_url(url)
        except ValueError:
            return None

        credentials = self.credential_store.find(target.host, target.port)
        if credentials is None:
            return None

        if self.auth_cache is not None and self.auth_cache.get(target) == BASIC_SCHEME:
            return HTTPBasicAuth(credentials.username, credentials.password or "")
        return ChallengeBasicAuth(credentials.username, credentials.password)
