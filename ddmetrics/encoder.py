"""
JSON encoding of series and events.

Each series is encoded on its own so the resulting fragment can be measured
and spliced into a larger payload without re-serializing the whole batch.
"""
import json
import math
from typing import Any, Dict

from .errors import EncodingError
from .models import Event, Series

_SEPARATORS = (',', ':')


def _check_number(value: Any, what: str, metric: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EncodingError(f"{what} must be a number, got {type(value).__name__}", metric)
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodingError(f"{what} is not finite ({value!r})", metric)


def _dumps(obj: Dict[str, Any], metric: str = None) -> bytes:
    try:
        return json.dumps(obj, separators=_SEPARATORS, ensure_ascii=False, allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise EncodingError(str(e), metric) from e


def series_to_dict(series: Series) -> Dict[str, Any]:
    """
    Convert a Series to the dictionary sent on the wire.

    Args:
        series (Series): The series to convert

    Returns:
        dict: ``metric``, ``points``, ``type``, ``host`` and, when present, ``tags``

    Raises:
        EncodingError: If a timestamp or value is not a finite number
    """
    points = []
    for point in series.points:
        if len(point) != 2:
            raise EncodingError(f"point must be a (timestamp, value) pair, got {point!r}", series.metric)
        timestamp, value = point
        _check_number(timestamp, 'timestamp', series.metric)
        _check_number(value, 'value', series.metric)
        points.append([timestamp, value])

    body = {
        'metric': series.metric,
        'points': points,
        'type': series.type.value,
        'host': series.host,
    }
    if series.tags:
        body['tags'] = list(series.tags)
    return body


def encode_series(series: Series) -> bytes:
    """
    Encode one series to a compact JSON fragment.

    Encoding is deterministic: the same series always yields the same bytes.

    Args:
        series (Series): The series to encode

    Returns:
        bytes: UTF-8 JSON object

    Raises:
        EncodingError: If the series holds a value JSON cannot represent
    """
    return _dumps(series_to_dict(series), series.metric)


def encode_event(event: Event) -> bytes:
    """Encode an event to the JSON body of the events endpoint."""
    return _dumps({
        'title': event.title,
        'text': event.text,
        'priority': event.priority.value,
        'tags': list(event.tags),
        'alert_type': event.alert_type.value,
    })
