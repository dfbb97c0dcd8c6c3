"""Prometheus text exposition of metric records."""

from typing import Iterable

from prometheus_client.utils import floatToGoString

from .metrics import MetricRecord, Sample


def _escape_help(text: str) -> str:
    return text.replace('\\', r'\\').replace('\n', r'\n')


def _escape_label_value(text: str) -> str:
    return text.replace('\\', r'\\').replace('\n', r'\n').replace('"', r'\"')


def _sample_line(name: str, sample: Sample) -> str:
    labels = ",".join(
        f'{label.name}="{_escape_label_value(label.value)}"' for label in sample.labels
    )
    if labels:
        labels = "{" + labels + "}"
    return f"{name}{labels} {floatToGoString(sample.value)} {sample.timestamp_ms}\n"


def render_records(records: Iterable[MetricRecord]) -> str:
    """
    Render records in the Prometheus text format.

    Each record becomes a block of "# HELP", "# TYPE" and one line per
    sample carrying its millisecond timestamp, e.g.::

        # HELP nginx_active number of active connections
        # TYPE nginx_active gauge
        nginx_active{host="localhost",port="81"} 33.0 1700000000000

    Args:
        records: Records to render, in output order

    Returns:
        str: Exposition text
    """
    output = []
    for record in records:
        output.append(f"# HELP {record.name} {_escape_help(record.help)}\n")
        output.append(f"# TYPE {record.name} {record.kind.value}\n")
        for sample in record.samples:
            output.append(_sample_line(record.name, sample))
    return "".join(output)
