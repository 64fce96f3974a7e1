"""
Exceptions raised by the metrics client.
"""
from typing import Optional


class MetricsError(Exception):
    """
    Base exception for all metrics client errors.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "An error occurred while delivering metrics."):
        self.message = message
        super().__init__(self.message)


class EncodingError(MetricsError):
    """
    A series or event could not be serialized to JSON.

    Args:
        reason (str): Why serialization failed.
        metric (str, optional): Name of the offending metric, if known.
    """
    def __init__(self, reason: str, metric: Optional[str] = None):
        self.reason = reason
        self.metric = metric
        if metric:
            message = f"Unable to encode metric '{metric}': {reason}"
        else:
            message = f"Unable to encode payload: {reason}"
        super().__init__(message)


class TransportError(MetricsError):
    """
    No response was received from the backend (DNS, refused connection, timeout).

    Args:
        url (str): The URL the request was sent to.
        reason (str): Description of the underlying failure.
    """
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Unable to reach Datadog at {url}: {reason}")


class BackendError(MetricsError):
    """
    The backend answered with a non-2xx status.

    The message carries a dump of the outgoing request (without body) and the
    full response so the failure can be diagnosed without extra logging.

    Args:
        status_code (int): HTTP status of the response.
        url (str): The URL the request was sent to.
        request_dump (str): Rendering of the request line and headers.
        response_dump (str): Rendering of the status line, headers and body.
    """
    def __init__(self, status_code: int, url: str, request_dump: str, response_dump: str):
        self.status_code = status_code
        self.url = url
        self.request_dump = request_dump
        self.response_dump = response_dump
        super().__init__(
            f"Bad Datadog response: {status_code}\n"
            f"Request:\n{request_dump}\n"
            f"Response:\n{response_dump}"
        )


class InvalidNameError(MetricsError, ValueError):
    """Raised when a metric name is empty."""
    def __init__(self, message: str = "Metric name cannot be empty."):
        super().__init__(message)


class DuplicateMetricError(MetricsError):
    """
    A metric is already registered under the given name.

    Args:
        name (str): The name that is already taken.
    """
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Metric '{name}' is already registered")
