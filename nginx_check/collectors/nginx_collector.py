"""NGINX stub-status collector: fetch the page, then extract metrics."""

import logging
import time
from typing import Callable, List, Optional

import httpx

from ..config.models import StatusTarget
from ..errors import NginxCheckError
from ..utils.metrics import MetricRecord
from .extractor import extract_metrics
from .fetcher import StatusFetcher


class NginxCollector:
    """Collector producing the seven stub-status metrics for one target."""

    def __init__(
        self,
        target: StatusTarget,
        timeout: float,
        logger: logging.Logger,
        now: Optional[Callable[[], float]] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize NGINX collector.

        Args:
            target: Status URL and label values
            timeout: Request timeout in seconds, 0 for no timeout
            logger: Logger instance
            now: Clock used to timestamp the records (default: time.time)
            client: Optional httpx async client for the request
        """
        self.target = target
        self.fetcher = StatusFetcher(timeout, client=client)
        self.now = now or time.time
        self.logger = logger.getChild(self.__class__.__name__)

    def collect(self) -> List[MetricRecord]:
        """
        Fetch the status page and convert it into metric records.

        The page is only parsed once the fetch succeeded.

        Returns:
            List[MetricRecord]: Seven records in output order

        Raises:
            NginxCheckError: If the fetch or the parsing fails
        """
        self.logger.debug(
            "Fetching status page",
            extra={"url": self.target.url, "timeout": self.fetcher.timeout}
        )
        start_time = time.monotonic()

        try:
            content = self.fetcher.fetch(self.target.url)
            self.logger.debug(
                "Status page received",
                extra={
                    "bytes": len(content),
                    "duration_ms": round((time.monotonic() - start_time) * 1000, 1)
                }
            )
            records = extract_metrics(
                content,
                self.target.hostname,
                self.target.port,
                now=self.now
            )
        except NginxCheckError as e:
            self.logger.error(
                f"Collection failed: {e}",
                extra={"url": self.target.url, "error_type": type(e).__name__}
            )
            raise

        self.logger.info(f"Collected {len(records)} metrics from {self.target.url}")
        return records


def get_metrics(
    url: str,
    hostname: str,
    port: str,
    timeout: float,
    now: Optional[Callable[[], float]] = None
) -> List[MetricRecord]:
    """
    Load the status page at url and build its metric records.

    Args:
        url: Status page URL
        hostname: Value of the host label
        port: Value of the port label
        timeout: Request timeout in seconds, 0 for no timeout
        now: Clock used to timestamp the records

    Returns:
        List[MetricRecord]: Seven records in output order

    Raises:
        NginxCheckError: If the fetch or the parsing fails
    """
    content = StatusFetcher(timeout).fetch(url)
    return extract_metrics(content, hostname, port, now=now)
