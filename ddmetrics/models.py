"""
Data model for the payloads sent to Datadog.

- Series: one metric with its data points, sent through the series endpoint
- Event: a discrete occurrence, sent through the events endpoint
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple, Union

Number = Union[int, float]
Point = Tuple[Number, Number]


class MetricType(str, Enum):
    """Series types understood by the backend."""
    GAUGE = 'gauge'
    COUNTER = 'counter'
    RATE = 'rate'
    COUNT = 'count'
    DISTRIBUTION = 'distribution'


class Priority(str, Enum):
    """Event priorities."""
    NORMAL = 'normal'
    LOW = 'low'


class AlertType(str, Enum):
    """Event alert types."""
    ERROR = 'error'
    WARNING = 'warning'
    INFO = 'info'
    SUCCESS = 'success'


@dataclass(frozen=True)
class Series:
    """A metric and its (timestamp, value) points.

    ``points`` and ``tags`` are stored as tuples so a Series can be shared
    read-only with the delivery pipeline.
    """
    metric: str
    points: Tuple[Point, ...]
    type: MetricType = MetricType.GAUGE
    host: str = ''
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(tuple(point) for point in self.points))
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'type', MetricType(self.type))

    @classmethod
    def single(cls, metric: str, timestamp: Number, value: Number, type: MetricType = MetricType.GAUGE,
               host: str = '', tags: Iterable[str] = ()) -> 'Series':
        """Build a Series holding exactly one point."""
        return cls(metric=metric, points=((timestamp, value),), type=type, host=host, tags=tuple(tags))


@dataclass(frozen=True)
class Event:
    """A discrete event such as a deploy or an alert."""
    title: str
    text: str
    priority: Priority = Priority.NORMAL
    tags: Tuple[str, ...] = field(default_factory=tuple)
    alert_type: AlertType = AlertType.INFO

    def __post_init__(self):
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'priority', Priority(self.priority))
        object.__setattr__(self, 'alert_type', AlertType(self.alert_type))
