"""Typed runtime settings with dotenv support and startup validation."""

import re

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from info_server import __version__

DEFAULT_PORT = 8080
MIN_PORT = 1
MAX_PORT = 65535

PORT_PARSE_ERROR_MESSAGE = "ERROR: CONFIG ENV PORT should contain a valid integer."
PORT_RANGE_ERROR_MESSAGE = "ERROR: CONFIG ENV PORT should contain an integer between 1 and 65535"
DECIMAL_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class ConfigError(RuntimeError):
    """Raised when startup configuration cannot be loaded or validated.

    Attributes:
        message: Human-readable description of the configuration problem.
        cause: Underlying error that triggered the failure.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.message} : {self.cause}"


class AppSettings(BaseSettings):
    """Application settings for the diagnostic HTTP server.

    Environment variable names map directly to field names in uppercase.
    Example: `wait_seconds` reads from `WAIT_SECONDS`. The listen port is
    resolved separately by `config_resolve_listen_address`.

    Attributes:
        application_name: Name reported in snapshots and log prefixes.
        application_version: Version reported in snapshots.
        application_host: Host interface for web server binding.
        wait_seconds: Delay applied by the `/wait` endpoint.
        shutdown_timeout_seconds: Grace period for in-flight requests on shutdown.
        read_timeout_seconds: Maximum time to read a request from a client.
        write_timeout_seconds: Maximum time to write a response to a client.
        idle_timeout_seconds: Maximum idle time of keep-alive connections.
        log_level: Standard logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    application_name: str = Field(default="py-info-server", min_length=1)
    application_version: str = Field(default=__version__, min_length=1)
    application_host: str = Field(default="0.0.0.0")
    wait_seconds: int = Field(default=3, ge=0)
    shutdown_timeout_seconds: float = Field(default=5.0, gt=0)
    read_timeout_seconds: float = Field(default=120.0, gt=0)
    write_timeout_seconds: float = Field(default=120.0, gt=0)
    idle_timeout_seconds: float = Field(default=120.0, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("application_name", "application_version")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level_name = value.strip().upper()
        if level_name not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level {value!r}")
        return level_name


class ListenPortSettings(BaseSettings):
    """Minimal settings model holding only the optional `PORT` override.

    Attributes:
        port: Raw port override, `None` when `PORT` is not set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    port: int | None = Field(default=None)

    @field_validator("port", mode="before")
    @classmethod
    def _validate_decimal_integer(cls, value: object) -> object:
        if value is None or isinstance(value, int):
            return value
        if not isinstance(value, str) or not DECIMAL_INTEGER_PATTERN.fullmatch(value):
            raise ValueError(f"invalid decimal integer {value!r}")
        return int(value)


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        ConfigError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise ConfigError(
            "ERROR: Startup configuration validation failed. Update .env or environment variables.",
            cause=error,
        ) from error


def config_resolve_listen_address(default_port: int = DEFAULT_PORT) -> str:
    """Resolve the TCP listen address from the optional `PORT` variable.

    Args:
        default_port: Port used when `PORT` is not defined.

    Returns:
        str: Listen address in the form `:PORT`.

    Raises:
        ConfigError: Raised when `PORT` is not an integer or is outside 1..65535.
    """

    try:
        port_settings = ListenPortSettings()
    except ValidationError as error:
        raise ConfigError(PORT_PARSE_ERROR_MESSAGE, cause=error) from error

    if port_settings.port is None:
        return f":{default_port}"

    if not MIN_PORT <= port_settings.port <= MAX_PORT:
        raise ConfigError(
            PORT_RANGE_ERROR_MESSAGE,
            cause=ValueError(f"port {port_settings.port} is out of range"),
        )
    return f":{port_settings.port}"


def config_split_listen_address(listen_address: str, host: str) -> tuple[str, int]:
    """Split a `:PORT` listen address into the host and port to bind.

    Args:
        listen_address: Address produced by `config_resolve_listen_address`.
        host: Interface used when the address carries no host part.

    Returns:
        tuple[str, int]: Bind host and numeric port.

    Raises:
        ValueError: Raised when the port part is not an integer.
    """

    address_host, _, address_port = listen_address.rpartition(":")
    return (address_host or host, int(address_port))
