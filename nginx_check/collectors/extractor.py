"""Parser for the NGINX stub-status page.

The page has the following format::

    Active connections: 1
    server accepts handled requests
     7 7 91
    Reading: 0 Writing: 1 Waiting: 0

Blank lines are ignored and every line is stripped before it is matched.
The second line is a header; it must be present but its text is not checked.
"""

import re
import time
from typing import Callable, List, Optional, Union

from ..errors import FieldError, LineCountError, LineFormatError
from ..utils.metrics import MetricRecord, ParsedFields, build_record


EXPECTED_LINES = 4
UINT64_MAX = 2 ** 64 - 1

LINE1_REGEX = re.compile(r'Active connections: (\d+)', re.ASCII)
LINE3_REGEX = re.compile(r'(\d+)\s+(\d+)\s+(\d+)', re.ASCII)
LINE4_REGEX = re.compile(r'Reading:\s+(\d+)\s+Writing:\s+(\d+)\s+Waiting:\s+(\d+)', re.ASCII)

# Characters trimmed from both ends of each line: ASCII whitespace plus the
# Unicode space separators. ASCII control characters such as \x1c-\x1f are kept.
WHITESPACE = (
    " \t\n\v\f\r\x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Wording used in error messages where it differs from "<field> value"
FIELD_DESCRIPTIONS = {"active": "number of connections"}


def _split_lines(content: Union[bytes, str]) -> List[str]:
    """
    Split the page into stripped, non-blank lines.

    Args:
        content: Raw response body

    Returns:
        List[str]: Non-blank lines with surrounding whitespace removed
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    lines = []
    for line in content.split("\n"):
        line = line.strip(WHITESPACE)
        if line:
            lines.append(line)
    return lines


def _match_line(regex: "re.Pattern", lines: List[str], line_number: int) -> "re.Match":
    line = lines[line_number - 1]
    match = regex.fullmatch(line)
    if match is None:
        raise LineFormatError(line_number, line)
    return match


def _parse_uint(field: str, raw: str) -> int:
    """
    Convert a captured digit string into an unsigned 64-bit integer.

    Raises:
        FieldError: If the value does not fit in 64 bits
    """
    value = int(raw)
    if value > UINT64_MAX:
        raise FieldError(field, raw, FIELD_DESCRIPTIONS.get(field))
    return value


def parse_status(content: Union[bytes, str]) -> ParsedFields:
    """
    Parse the seven values of a stub-status page.

    Lines are checked in order (line 1, then line 3, then line 4) and the
    first invalid line or field is reported.

    Args:
        content: Raw response body

    Returns:
        ParsedFields: The parsed values

    Raises:
        LineCountError: If the page does not have exactly 4 non-blank lines
        LineFormatError: If line 1, 3 or 4 does not match its pattern
        FieldError: If a number does not fit in an unsigned 64-bit integer
    """
    lines = _split_lines(content)
    if len(lines) != EXPECTED_LINES:
        raise LineCountError(len(lines), EXPECTED_LINES)

    line1 = _match_line(LINE1_REGEX, lines, 1)
    active = _parse_uint("active", line1.group(1))

    line3 = _match_line(LINE3_REGEX, lines, 3)
    accepts = _parse_uint("accepts", line3.group(1))
    handled = _parse_uint("handled", line3.group(2))
    requests = _parse_uint("requests", line3.group(3))

    line4 = _match_line(LINE4_REGEX, lines, 4)
    reading = _parse_uint("reading", line4.group(1))
    writing = _parse_uint("writing", line4.group(2))
    waiting = _parse_uint("waiting", line4.group(3))

    return ParsedFields(
        active=active,
        accepts=accepts,
        handled=handled,
        requests=requests,
        reading=reading,
        writing=writing,
        waiting=waiting
    )


def extract_metrics(
    content: Union[bytes, str],
    hostname: str,
    port: str,
    now: Optional[Callable[[], float]] = None
) -> List[MetricRecord]:
    """
    Parse a stub-status page into metric records.

    All records share one timestamp, read once from ``now`` before parsing.

    Args:
        content: Raw response body
        hostname: Value of the host label
        port: Value of the port label
        now: Clock returning seconds since the epoch (default: time.time)

    Returns:
        List[MetricRecord]: Seven records in METRIC_NAMES order

    Raises:
        FormatError: If the page structure is invalid
        FieldError: If a value is out of range
    """
    now = now or time.time
    timestamp_ms = int(now() * 1000)

    fields = parse_status(content)

    return [
        build_record(name, value, timestamp_ms, hostname, port)
        for name, value in fields.as_metrics()
    ]
