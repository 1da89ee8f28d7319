"""
Configuration Loader
Builds a Kafka Connect client Configuration from a JSON file, KAFKA_CONNECT_*
environment variables and programmatic overrides
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from kafka_connect_client.config.config_validator import ConfigValidator
from kafka_connect_client.config.connect_config import (
    ConfigDefaults,
    Configuration,
    ENV_VAR_MAPPING,
)
from kafka_connect_client.exceptions import ConfigurationError


def _parse_flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_int(value: str) -> Union[int, str]:
    # Left as text so the validator reports the field by name
    try:
        return int(value)
    except ValueError:
        return value


# Converters for environment values that are not plain strings
_ENV_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "ignore_invalid_ssl_certificates": _parse_flag,
    "request_timeout_in_seconds": _parse_int,
    "connection_time_to_live_in_seconds": _parse_int,
    "proxy_port": _parse_int,
}

# PEM files handed to requests for TLS
_TLS_PATH_FIELDS = (
    "trust_store_file",
    "client_certificate_file",
    "client_key_file",
)

# Written by create_template; blank credentials are dropped again on load
_TEMPLATE: Dict[str, Any] = {
    "api_host": "http://localhost:8083",
    "request_timeout_in_seconds": ConfigDefaults.REQUEST_TIMEOUT_IN_SECONDS,
    "connection_time_to_live_in_seconds": ConfigDefaults.CONNECTION_TIME_TO_LIVE_IN_SECONDS,
    "encoding": ConfigDefaults.ENCODING,
    "basic_auth_username": "",
    "basic_auth_password": "",
    "proxy_host": "",
    "proxy_port": 3128,
    "proxy_scheme": ConfigDefaults.PROXY_SCHEME,
    "ignore_invalid_ssl_certificates": False,
    "trust_store_file": "./certs/ca.pem",
}


class ConfigLoader:
    """
    Layered loader for the REST client configuration

    Sources are plain dictionaries until resolve(), which validates the
    merged result and builds the frozen Configuration.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load(file="connect.json", config={"proxy_port": 3128})
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read settings from a JSON object on disk

        Relative trust store, client certificate and client key paths are
        anchored to the directory holding the file.

        Raises:
            ConfigurationError: If the file is missing or is not a JSON object
        """
        file_path = Path(path).resolve()
        if not file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND"
            )

        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {file_path}",
                code="CONFIG_PARSE_ERROR",
                cause=e,
            ) from e

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Configuration file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )
        return self._anchor_tls_paths(raw, file_path.parent)

    def from_environment(self) -> Dict[str, Any]:
        """Read the KAFKA_CONNECT_* variables that are set and not blank"""
        settings: Dict[str, Any] = {}
        for env_var, field_name in ENV_VAR_MAPPING.items():
            raw = os.environ.get(env_var, "")
            if raw:
                convert = _ENV_CONVERTERS.get(field_name, str)
                settings[field_name] = convert(raw)
        return settings

    def from_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow copy of programmatic settings"""
        return dict(config)

    def merge(self, *sources: Dict[str, Any]) -> Dict[str, Any]:
        """
        Layer settings dictionaries on top of each other

        Later sources win. None and empty-string values never override an
        earlier value.

        Args:
            sources: Dictionaries from lowest to highest priority

        Returns:
            Combined settings
        """
        merged: Dict[str, Any] = {}
        for source in sources:
            merged.update(
                (name, value) for name, value in source.items() if self._is_set(value)
            )
        return merged

    def resolve(self, config: Dict[str, Any]) -> Configuration:
        """
        Validate merged settings and build the Configuration

        Raises:
            ValidationError: With every problem found, before the model is built
        """
        self._validator.validate_or_raise(config)
        return Configuration(**config)

    def load(
        self,
        file: Optional[Union[str, Path]] = None,
        env: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> Configuration:
        """
        Build a Configuration from every requested source

        Priority is programmatic config, then environment, then file.

        Args:
            file: JSON settings file
            env: Whether KAFKA_CONNECT_* variables are read
            config: Programmatic settings

        Returns:
            Validated Configuration
        """
        layers = []
        if file is not None:
            layers.append(self.from_file(file))
        if env:
            layers.append(self.from_environment())
        if config is not None:
            layers.append(self.from_dict(config))

        return self.resolve(self.merge(*layers))

    def create_template(self, path: Union[str, Path]) -> None:
        """Write a starter JSON settings file, creating parent directories"""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(_TEMPLATE, indent=2), encoding="utf-8")

    @staticmethod
    def _is_set(value: Any) -> bool:
        return value is not None and value != ""

    @staticmethod
    def _anchor_tls_paths(config: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
        anchored = dict(config)
        for field_name in _TLS_PATH_FIELDS:
            value = anchored.get(field_name)
            if isinstance(value, str) and value and not Path(value).is_absolute():
                anchored[field_name] = str(base_dir / value)
        return anchored
