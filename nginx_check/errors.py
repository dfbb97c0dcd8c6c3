"""Exceptions raised by the NGINX status check."""

from typing import Optional


class NginxCheckError(Exception):
    """Base class for every failure the check reports."""


class ConfigError(NginxCheckError):
    """Check configuration could not be resolved into a status target."""


# Fetcher


class TransportError(NginxCheckError):
    """Status page could not be retrieved."""


class ConnectionFailure(TransportError):
    """DNS, connect or other transport-level failure."""


class RequestTimeout(TransportError):
    """Request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float, detail: Optional[str] = None) -> None:
        self.url = url
        self.timeout = timeout
        message = f"request to {url} timed out after {timeout:g}s"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class BadStatusError(TransportError):
    """Server answered with a status code other than 200."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"invalid nginx status code: {status_code}")


class BodyReadError(TransportError):
    """Headers were received but the body could not be read."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"error reading body content: {detail}")


# Extractor


class FormatError(NginxCheckError):
    """Status page does not have the expected line structure."""


class LineCountError(FormatError):
    def __init__(self, observed: int, expected: int = 4) -> None:
        self.observed = observed
        self.expected = expected
        super().__init__(f"{expected} output lines are expected, got {observed}")


class LineFormatError(FormatError):
    def __init__(self, line_number: int, content: str) -> None:
        self.line_number = line_number
        self.content = content
        super().__init__(f"unexpected input for line {line_number}: {content}")


class FieldError(NginxCheckError):
    """A captured number is not a valid unsigned 64-bit integer."""

    def __init__(self, field: str, raw: str, description: Optional[str] = None) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"invalid {description or field + ' value'}: {raw}")
