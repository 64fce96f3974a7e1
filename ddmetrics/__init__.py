"""
Client for shipping metrics and events to the Datadog API.
"""
from .client import MetricsClient
from .collector import Collector
from .errors import (
    BackendError,
    DuplicateMetricError,
    EncodingError,
    InvalidNameError,
    MetricsError,
    TransportError
)
from .metric_name import new_metric_name
from .models import AlertType, Event, MetricType, Priority, Series
from .registry import Counter, Gauge, Histogram, Registry
from .reporter import Reporter
from .transport import Transport

__all__ = [
    'MetricsClient',
    'Transport',
    'Reporter',
    'Registry',
    'Collector',
    'Counter',
    'Gauge',
    'Histogram',
    'Series',
    'Event',
    'MetricType',
    'Priority',
    'AlertType',
    'new_metric_name',
    'MetricsError',
    'EncodingError',
    'TransportError',
    'BackendError',
    'InvalidNameError',
    'DuplicateMetricError',
]
