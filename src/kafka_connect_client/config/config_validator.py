"""
Configuration Validator
Validates Kafka Connect client configuration with clear error messages
"""

import codecs
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Reports every problem in a raw configuration dictionary at once,
    before it is turned into a Configuration
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_required(config)
        self._validate_formats(config)
        self._validate_ranges(config)
        self._validate_proxy(config)
        self._validate_credentials(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from kafka_connect_client.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
            )

    def _validate_required(self, config: Dict[str, Any]) -> None:
        """Validate required fields are present and non-empty"""
        value = config.get("api_host")
        if value is None:
            self._errors.append(ValidationErrorDetail(
                field="api_host",
                message="api_host is required"
            ))
        elif isinstance(value, str) and value.strip() == "":
            self._errors.append(ValidationErrorDetail(
                field="api_host",
                message="api_host cannot be empty",
                value=value
            ))

    def _validate_formats(self, config: Dict[str, Any]) -> None:
        """Validate field formats"""
        api_host = config.get("api_host")
        if isinstance(api_host, str) and "://" in api_host:
            if not api_host.lower().startswith(("http://", "https://")):
                self._errors.append(ValidationErrorDetail(
                    field="api_host",
                    message="api_host must be a valid HTTP/HTTPS URL",
                    value=api_host
                ))

        encoding = config.get("encoding")
        if encoding is not None:
            try:
                codecs.lookup(str(encoding))
            except LookupError:
                self._errors.append(ValidationErrorDetail(
                    field="encoding",
                    message="encoding must be a known text encoding",
                    value=encoding
                ))

        for path_field in [
            "trust_store_file",
            "client_certificate_file",
            "client_key_file",
        ]:
            path_value = config.get(path_field)
            if path_value is not None and path_value != "":
                if not isinstance(path_value, str):
                    self._errors.append(ValidationErrorDetail(
                        field=path_field,
                        message=f"{path_field} must be a string",
                        value=path_value
                    ))

    def _validate_ranges(self, config: Dict[str, Any]) -> None:
        """Validate numeric ranges"""
        timeout = config.get("request_timeout_in_seconds")
        if timeout is not None:
            if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="request_timeout_in_seconds",
                    message="request_timeout_in_seconds must be a positive integer",
                    value=timeout
                ))

        ttl = config.get("connection_time_to_live_in_seconds")
        if ttl is not None:
            if not isinstance(ttl, int) or isinstance(ttl, bool):
                self._errors.append(ValidationErrorDetail(
                    field="connection_time_to_live_in_seconds",
                    message="connection_time_to_live_in_seconds must be an integer",
                    value=ttl
                ))

    def _validate_proxy(self, config: Dict[str, Any]) -> None:
        """Validate proxy settings"""
        proxy_host = config.get("proxy_host")
        proxy_port = config.get("proxy_port")

        if proxy_host and proxy_port is None:
            self._errors.append(ValidationErrorDetail(
                field="proxy_port",
                message="proxy_port is required when proxy_host is set"
            ))

        if proxy_port is not None:
            if (
                not isinstance(proxy_port, int)
                or isinstance(proxy_port, bool)
                or not 0 < proxy_port <= 65535
            ):
                self._errors.append(ValidationErrorDetail(
                    field="proxy_port",
                    message="proxy_port must be between 1 and 65535",
                    value=proxy_port
                ))

        proxy_scheme = config.get("proxy_scheme")
        if proxy_scheme is not None and str(proxy_scheme).lower() not in ("http", "https"):
            self._errors.append(ValidationErrorDetail(
                field="proxy_scheme",
                message="proxy_scheme must be one of: http, https",
                value=proxy_scheme
            ))

        if config.get("proxy_username") is not None and not proxy_host:
            self._errors.append(ValidationErrorDetail(
                field="proxy_username",
                message="proxy_username requires proxy_host"
            ))

    def _validate_credentials(self, config: Dict[str, Any]) -> None:
        """Validate basic auth and client certificate pairs"""
        if (
            config.get("basic_auth_password") is not None
            and config.get("basic_auth_username") is None
        ):
            self._errors.append(ValidationErrorDetail(
                field="basic_auth_username",
                message="basic_auth_username is required with basic_auth_password",
                value="[REDACTED]"
            ))

        if config.get("client_key_file") and not config.get("client_certificate_file"):
            self._errors.append(ValidationErrorDetail(
                field="client_certificate_file",
                message="client_certificate_file is required with client_key_file"
            ))
