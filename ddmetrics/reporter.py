"""
Periodic reporter that posts the contents of a Registry as series.
"""
import logging
import threading
from datetime import datetime
from typing import List, Optional

import pytz

from . import config
from .collector import Collector
from .errors import MetricsError
from .metric_name import new_metric_name
from .models import MetricType, Series
from .registry import Counter, Gauge, Histogram, Registry

logger = logging.getLogger(__name__)

PERCENTILES = (
    ('p50', 0.5),
    ('p75', 0.75),
    ('p95', 0.95),
    ('p99', 0.99),
)


class Reporter:
    """Converts a registry to series and posts them on a fixed interval."""

    def __init__(
        self,
        client,
        registry: Registry,
        interval: Optional[float] = None,
        tags: Optional[List[str]] = None,
        prefix: str = ''
    ):
        """
        Initialize the reporter.

        Args:
            client (MetricsClient): Client used to post series
            registry (Registry): Registry to read metrics from
            interval (float, optional): Seconds between reports. Defaults to config.REPORT_INTERVAL.
            tags (list, optional): Tags added to every series
            prefix (str): Prefix for every metric name
        """
        self.client = client
        self.registry = registry
        self.interval = interval or config.REPORT_INTERVAL
        self.prefix = prefix
        self.tags = list(tags or [])
        if client.environment:
            self.tags.append(f"environment:{client.environment}")

        self.running = False
        self.thread = None
        self.stop_timeout = 5  # seconds
        self._stop_event = None

    def _series(self, name: str, value, metric_type: MetricType, timestamp: int) -> Series:
        return Series(
            metric=new_metric_name(self.prefix, name, ''),
            points=((timestamp, value),),
            type=metric_type,
            host=self.client.host,
            tags=tuple(self.tags),
        )

    def series(self, now: Optional[datetime] = None) -> List[Series]:
        """
        Convert the current registry contents to series.

        Args:
            now (datetime, optional): Timestamp for the points. Defaults to the current UTC time.

        Returns:
            list: One series per counter and gauge, several per histogram and collector
        """
        timestamp = int((now or datetime.now(pytz.UTC)).timestamp())
        result = []

        for name, metric in self.registry.each():
            if isinstance(metric, Counter):
                result.append(self._series(name, metric.count(), MetricType.COUNTER, timestamp))
            elif isinstance(metric, Gauge):
                result.append(self._series(name, metric.value(), MetricType.GAUGE, timestamp))
            elif isinstance(metric, Histogram):
                snapshot = metric.snapshot()
                stats = [
                    ('count', snapshot.count),
                    ('min', snapshot.min),
                    ('max', snapshot.max),
                    ('mean', snapshot.mean),
                    ('stddev', snapshot.stddev),
                ]
                stats.extend((label, snapshot.percentile(p)) for label, p in PERCENTILES)
                for label, value in stats:
                    result.append(self._series(f"{name}.{label}", value, MetricType.GAUGE, timestamp))
            elif isinstance(metric, Collector):
                for key, value in sorted(metric.safe_collect().items()):
                    result.append(self._series(f"{name}.{key}", value, MetricType.GAUGE, timestamp))

        return result

    def flush(self) -> None:
        """
        Post the current registry contents once.

        Raises:
            MetricsError: Whatever the client raised while posting
        """
        series = self.series()
        if not series:
            logger.debug("Registry is empty, nothing to report")
            return
        self.client.post_series(series)
        logger.debug("Reported %d series", len(series))

    def start(self) -> None:
        """Start reporting on a background thread."""
        if self.running:
            logger.warning("Reporter already running")
            return

        self.running = True
        # One event per loop: a thread left over from a timed out stop() stays stopped.
        stop_event = threading.Event()
        self._stop_event = stop_event

        def report_loop():
            logger.info("Starting reporter loop every %s seconds", self.interval)
            while not stop_event.wait(self.interval):
                try:
                    self.flush()
                except MetricsError as e:
                    logger.error("Failed to report metrics: %s", str(e))
                except Exception as e:
                    logger.error("Error in reporter loop: %s", str(e))

        self.thread = threading.Thread(target=report_loop, daemon=True)
        self.thread.start()

    def stop(self) -> None:
        """Stop the reporting thread."""
        if not self.running:
            logger.warning("Reporter not running")
            return

        logger.info("Stopping reporter")
        self.running = False
        self._stop_event.set()

        if self.thread:
            self.thread.join(timeout=self.stop_timeout)
            if self.thread.is_alive():
                logger.warning("Reporter thread did not stop cleanly")
            self.thread = None
