"""Metric data structures and the fixed NGINX metric table."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple


LABEL_HOST = "host"
LABEL_PORT = "port"


class MetricKind(Enum):
    """Prometheus metric type of a record."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDescriptor:
    """Help text and kind for one known metric name."""

    help: str
    kind: MetricKind


# Output order of the records produced for one status page
METRIC_NAMES: Tuple[str, ...] = (
    "nginx_active",
    "nginx_accepts",
    "nginx_handled",
    "nginx_requests",
    "nginx_reading",
    "nginx_writing",
    "nginx_waiting",
)

METRIC_DESCRIPTORS: Mapping[str, MetricDescriptor] = MappingProxyType({
    "nginx_active": MetricDescriptor("number of active connections", MetricKind.GAUGE),
    "nginx_accepts": MetricDescriptor("accepted connections", MetricKind.COUNTER),
    "nginx_handled": MetricDescriptor("handled connections", MetricKind.COUNTER),
    "nginx_requests": MetricDescriptor("handled requests", MetricKind.COUNTER),
    "nginx_reading": MetricDescriptor("reading requests", MetricKind.GAUGE),
    "nginx_writing": MetricDescriptor("writing requests", MetricKind.GAUGE),
    "nginx_waiting": MetricDescriptor("keep-alive connections", MetricKind.GAUGE),
})


@dataclass(frozen=True)
class LabelPair:
    """Single label attached to a sample."""

    name: str
    value: str


@dataclass(frozen=True)
class Sample:
    """One reading of a metric."""

    value: float
    labels: Tuple[LabelPair, ...]
    timestamp_ms: int


@dataclass(frozen=True)
class MetricRecord:
    """Named, typed metric with its samples (always one for this check)."""

    name: str
    help: str
    kind: MetricKind
    samples: Tuple[Sample, ...]

    @property
    def value(self) -> float:
        """Value of the single sample."""
        return self.samples[0].value

    @property
    def timestamp_ms(self) -> int:
        """Timestamp of the single sample."""
        return self.samples[0].timestamp_ms

    def labels(self) -> dict:
        """Labels of the single sample as a plain dict."""
        return {label.name: label.value for label in self.samples[0].labels}


@dataclass(frozen=True)
class ParsedFields:
    """The seven values read from a stub-status page."""

    active: int
    accepts: int
    handled: int
    requests: int
    reading: int
    writing: int
    waiting: int

    def as_metrics(self) -> Iterator[Tuple[str, int]]:
        """
        Pair each field with its metric name.

        Yields:
            Tuple[str, int]: (metric name, value) in output order
        """
        for name in METRIC_NAMES:
            yield name, getattr(self, name[len("nginx_"):])


def build_record(
    name: str,
    value: int,
    timestamp_ms: int,
    hostname: str,
    port: str
) -> MetricRecord:
    """
    Build a metric record for one of the known metric names.

    Args:
        name: Metric name, a key of METRIC_DESCRIPTORS
        value: Parsed value
        timestamp_ms: Capture time in milliseconds since the epoch
        hostname: Value of the host label
        port: Value of the port label

    Returns:
        MetricRecord: Record holding a single labelled sample

    Raises:
        KeyError: If the name is not a known metric
    """
    descriptor = METRIC_DESCRIPTORS[name]
    sample = Sample(
        value=float(value),
        labels=(LabelPair(LABEL_HOST, hostname), LabelPair(LABEL_PORT, port)),
        timestamp_ms=timestamp_ms
    )
    return MetricRecord(
        name=name,
        help=descriptor.help,
        kind=descriptor.kind,
        samples=(sample,)
    )
