"""Pydantic configuration models for the NGINX status check."""

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

from ..errors import ConfigError


DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 81
DEFAULT_STATUS_PATH = "nginx_status"
DEFAULT_TIMEOUT = 10

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StatusTarget(BaseModel):
    """Resolved status page URL plus the labels attached to its metrics."""
    url: str
    hostname: str
    port: str


class CheckConfig(BaseModel):
    """Configuration of one check run."""
    hostname: str = DEFAULT_HOSTNAME
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    status_path: str = DEFAULT_STATUS_PATH
    url: str = ""  # Takes precedence over hostname/port/status_path
    timeout: int = Field(default=DEFAULT_TIMEOUT, ge=0)  # Seconds, 0 disables
    log_level: str = "WARNING"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def resolve_target(self) -> StatusTarget:
        """
        Resolve the status URL and the host/port labels.

        An explicit url wins; its host and port become the labels. Otherwise
        the URL is built as http://<hostname>:<port>/<status_path>.

        Returns:
            StatusTarget: URL to fetch and label values

        Raises:
            ConfigError: If the URL is invalid
        """
        if self.url.strip():
            url = self.url.strip()
            try:
                hostname, port = _split_host_port(url)
            except ValueError as e:
                raise ConfigError(f"invalid url provided: {e}") from e
            return StatusTarget(url=url, hostname=hostname, port=port)

        url = f"http://{self.hostname}:{self.port}/{self.status_path.lstrip('/')}"
        try:
            _split_host_port(url)
        except ValueError as e:
            raise ConfigError(
                f"invalid url built from hostname, port and status-path: {url}"
            ) from e
        return StatusTarget(url=url, hostname=self.hostname, port=str(self.port))


def _split_host_port(url: str):
    """
    Parse an absolute http(s) URL into its host and port strings.

    The port is an empty string when the URL does not carry one.

    Raises:
        ValueError: If the URL is not an absolute http(s) URL
    """
    parsed = urlsplit(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"{url}: URL must start with http:// or https://")
    if not parsed.hostname:
        raise ValueError(f"{url}: missing host")

    port = parsed.port  # raises ValueError when out of range or not numeric
    return parsed.hostname, "" if port is None else str(port)
