"""
Registry of named metrics read by the reporter.

A Registry is an explicit handle: create one at startup, pass it to the
code that records metrics and to the reporter, and clear it at shutdown.
There is no process-wide default registry.
"""
import logging
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Sequence, Tuple, Union

from .collector import Collector
from .errors import DuplicateMetricError

logger = logging.getLogger(__name__)

Number = Union[int, float]


class Counter:
    """A monotonically adjusted integer count."""

    def __init__(self):
        self._count = 0
        self._lock = threading.Lock()

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount

    def dec(self, amount: int = 1) -> None:
        with self._lock:
            self._count -= amount

    def count(self) -> int:
        with self._lock:
            return self._count

    def clear(self) -> None:
        with self._lock:
            self._count = 0


class Gauge:
    """The last value recorded."""

    def __init__(self, value: Number = 0):
        self._value = value
        self._lock = threading.Lock()

    def update(self, value: Number) -> None:
        with self._lock:
            self._value = value

    def value(self) -> Number:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class HistogramSnapshot:
    """Point-in-time statistics of a Histogram."""
    count: int
    min: Number
    max: Number
    mean: float
    stddev: float
    values: Tuple[Number, ...]

    def percentile(self, p: float) -> float:
        """
        Get the p-th percentile (0 <= p <= 1) of the retained values.
        Returns 0 when no values were recorded.
        """
        return _percentile(sorted(self.values), p)


def _percentile(ordered: Sequence[Number], p: float) -> float:
    n = len(ordered)
    if n == 0:
        return 0.0
    pos = p * (n + 1)
    if pos < 1:
        return float(ordered[0])
    if pos >= n:
        return float(ordered[-1])
    lower = ordered[int(pos) - 1]
    upper = ordered[int(pos)]
    return lower + (pos - math.floor(pos)) * (upper - lower)


class Histogram:
    """
    Distribution of recorded values.

    The total count covers every update; statistics are computed over the
    most recent ``reservoir_size`` values.
    """

    def __init__(self, reservoir_size: int = 1028):
        self._values = deque(maxlen=reservoir_size)
        self._count = 0
        self._lock = threading.Lock()

    def update(self, value: Number) -> None:
        with self._lock:
            self._values.append(value)
            self._count += 1

    def count(self) -> int:
        with self._lock:
            return self._count

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self._count = 0

    def snapshot(self) -> HistogramSnapshot:
        with self._lock:
            values = tuple(self._values)
            count = self._count

        if not values:
            return HistogramSnapshot(count=count, min=0, max=0, mean=0.0, stddev=0.0, values=())

        mean = sum(values) / len(values)
        variance = sum((v - mean) ** 2 for v in values) / len(values)
        return HistogramSnapshot(
            count=count,
            min=min(values),
            max=max(values),
            mean=mean,
            stddev=math.sqrt(variance),
            values=values,
        )

    def min(self) -> Number:
        return self.snapshot().min

    def max(self) -> Number:
        return self.snapshot().max

    def mean(self) -> float:
        return self.snapshot().mean

    def stddev(self) -> float:
        return self.snapshot().stddev

    def percentile(self, p: float) -> float:
        return self.snapshot().percentile(p)


Metric = Union[Counter, Gauge, Histogram, Collector]


class Registry:
    """Thread-safe map of metric names to metrics."""

    def __init__(self):
        self._metrics: Dict[str, Metric] = {}
        self._lock = threading.Lock()

    def register(self, name: str, metric: Metric) -> Metric:
        """
        Register a metric under a name.

        Args:
            name (str): Metric name
            metric: Counter, Gauge, Histogram or Collector

        Returns:
            The registered metric

        Raises:
            DuplicateMetricError: If the name is already taken
            TypeError: If metric is not a supported type
        """
        if not isinstance(metric, (Counter, Gauge, Histogram, Collector)):
            raise TypeError(f"Unsupported metric type: {type(metric).__name__}")
        with self._lock:
            if name in self._metrics:
                raise DuplicateMetricError(name)
            self._metrics[name] = metric
        logger.debug("Registered metric: %s", name)
        return metric

    def get(self, name: str) -> Optional[Metric]:
        with self._lock:
            return self._metrics.get(name)

    def get_or_register(self, name: str, factory: Callable[[], Metric]) -> Metric:
        """
        Get the metric registered under name, creating it with factory if absent.
        """
        with self._lock:
            metric = self._metrics.get(name)
            if metric is None:
                metric = factory()
                self._metrics[name] = metric
            return metric

    def unregister(self, name: str) -> None:
        with self._lock:
            self._metrics.pop(name, None)

    def counter(self, name: str) -> Counter:
        return self._typed(name, Counter, Counter)

    def gauge(self, name: str) -> Gauge:
        return self._typed(name, Gauge, Gauge)

    def histogram(self, name: str, reservoir_size: int = 1028) -> Histogram:
        return self._typed(name, Histogram, lambda: Histogram(reservoir_size))

    def register_collector(self, collector: Collector) -> Collector:
        """Register a collector under its metric_name."""
        return self.register(collector.metric_name, collector)

    def _typed(self, name: str, cls: type, factory: Callable[[], Metric]):
        metric = self.get_or_register(name, factory)
        if not isinstance(metric, cls):
            raise DuplicateMetricError(name)
        return metric

    def snapshot(self) -> Dict[str, Metric]:
        """
        Get a copy of the name to metric mapping, safe to iterate while
        other threads keep registering metrics.
        """
        with self._lock:
            return dict(self._metrics)

    def each(self) -> Iterator[Tuple[str, Metric]]:
        """Iterate over (name, metric) pairs in name order."""
        return iter(sorted(self.snapshot().items()))

    def clear(self) -> None:
        """Unregister every metric."""
        with self._lock:
            self._metrics.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)
