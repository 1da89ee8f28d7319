"""
Construction hooks for the REST transport

RestClient asks its hooks for every artifact it assembles during init.
Each artifact has a ``create_*`` method, which produces the starting value,
and a ``modify_*`` method, which runs after the transport has applied its
own settings. Replace a create hook to swap an artifact wholesale; replace
a modify hook to tweak the default.

Example:
    >>> class LongReads(DefaultHttpClientConfigHooks):
    ...     def modify_request_config(self, configuration, request_config):
    ...         return request_config.with_socket_timeout(120_000)
    >>> client = RestClient(hooks=LongReads())
"""

from abc import ABC, abstractmethod

from kafka_connect_client.client.auth import AuthCache, CredentialStore, ExecutionContext
from kafka_connect_client.client.builders import (
    ClientBuilder,
    HttpsContextBuilder,
    RequestConfig,
)
from kafka_connect_client.config.connect_config import Configuration


class HttpClientConfigHooks(ABC):
    """Interface for creating and modifying the transport's building blocks"""

    @abstractmethod
    def create_https_context_builder(
        self, configuration: Configuration
    ) -> HttpsContextBuilder:
        """Create the builder for the TLS context"""

    @abstractmethod
    def create_client_builder(self, configuration: Configuration) -> ClientBuilder:
        """Create the builder for the underlying session"""

    @abstractmethod
    def modify_client_builder(
        self, configuration: Configuration, client_builder: ClientBuilder
    ) -> ClientBuilder:
        """Adjust the session builder right before the session is built"""

    @abstractmethod
    def create_request_config(self, configuration: Configuration) -> RequestConfig:
        """Create the per-request defaults"""

    @abstractmethod
    def modify_request_config(
        self, configuration: Configuration, request_config: RequestConfig
    ) -> RequestConfig:
        """Adjust the per-request defaults after timeouts and proxy are set"""

    @abstractmethod
    def create_credential_store(self, configuration: Configuration) -> CredentialStore:
        """Create the credential store"""

    @abstractmethod
    def modify_credential_store(
        self, configuration: Configuration, credential_store: CredentialStore
    ) -> CredentialStore:
        """Adjust the credential store after configured credentials are added"""

    @abstractmethod
    def create_auth_cache(self, configuration: Configuration) -> AuthCache:
        """Create the preemptive auth cache"""

    @abstractmethod
    def modify_auth_cache(
        self, configuration: Configuration, auth_cache: AuthCache
    ) -> AuthCache:
        """Adjust the auth cache after configured hosts are seeded"""

    @abstractmethod
    def create_execution_context(self, configuration: Configuration) -> ExecutionContext:
        """Create the context for a single request"""

    @abstractmethod
    def modify_execution_context(
        self, configuration: Configuration, context: ExecutionContext
    ) -> ExecutionContext:
        """Adjust a request's context after the shared auth state is attached"""


class DefaultHttpClientConfigHooks(HttpClientConfigHooks):
    """Fresh defaults for every create hook; modify hooks change nothing"""

    def create_https_context_builder(
        self, configuration: Configuration
    ) -> HttpsContextBuilder:
        return HttpsContextBuilder(configuration)

    def create_client_builder(self, configuration: Configuration) -> ClientBuilder:
        return ClientBuilder()

    def modify_client_builder(
        self, configuration: Configuration, client_builder: ClientBuilder
    ) -> ClientBuilder:
        return client_builder

    def create_request_config(self, configuration: Configuration) -> RequestConfig:
        return RequestConfig()

    def modify_request_config(
        self, configuration: Configuration, request_config: RequestConfig
    ) -> RequestConfig:
        return request_config

    def create_credential_store(self, configuration: Configuration) -> CredentialStore:
        return CredentialStore()

    def modify_credential_store(
        self, configuration: Configuration, credential_store: CredentialStore
    ) -> CredentialStore:
        return credential_store

    def create_auth_cache(self, configuration: Configuration) -> AuthCache:
        return AuthCache()

    def modify_auth_cache(
        self, configuration: Configuration, auth_cache: AuthCache
    ) -> AuthCache:
        return auth_cache

    def create_execution_context(self, configuration: Configuration) -> ExecutionContext:
        return ExecutionContext()

    def modify_execution_context(
        self, configuration: Configuration, context: ExecutionContext
    ) -> ExecutionContext:
        return context
