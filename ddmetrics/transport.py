"""
HTTP transport for posting payloads to Datadog.
"""
import logging
from typing import Optional

import requests

from . import config
from .errors import BackendError, TransportError

logger = logging.getLogger(__name__)


def dump_request(request: requests.PreparedRequest) -> str:
    """
    Render a request line and its headers. The body is left out.

    Args:
        request (requests.PreparedRequest): The request that was sent

    Returns:
        str: Human readable request dump
    """
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    return "\n".join(lines)


def dump_response(response: requests.Response, body: bytes) -> str:
    """
    Render a response status line, headers and body.

    Args:
        response (requests.Response): The response received
        body (bytes): The already drained response body

    Returns:
        str: Human readable response dump
    """
    lines = [f"HTTP {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    lines.append("")
    lines.append(body.decode('utf-8', errors='replace'))
    return "\n".join(lines)


class Transport:
    """Posts JSON payloads, one attempt per call, over a pooled session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """
        Initialize the transport.

        Args:
            session (requests.Session, optional): Session to send requests with. A new one is created if omitted.
            timeout (float, optional): Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def send(self, url: str, payload: bytes) -> None:
        """
        POST a JSON payload and check the response.

        The response body is always read and the response closed, so the
        connection can go back to the pool.

        Args:
            url (str): Full endpoint URL, including the api_key query parameter
            payload (bytes): Request body

        Raises:
            TransportError: If no response was received
            BackendError: If the response status is not 2xx
        """
        headers = {
            'Content-Type': config.CONTENT_TYPE,
            'Content-Length': str(len(payload)),
        }

        logger.debug("POST %d bytes", len(payload))
        try:
            response = self.session.post(url, data=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e

        try:
            body = response.content
        except requests.RequestException as e:
            raise TransportError(url, f"failed reading response body: {e}") from e
        finally:
            response.close()

        if not 200 <= response.status_code < 300:
            raise BackendError(
                response.status_code,
                url,
                dump_request(response.request),
                dump_response(response, body),
            )

    def close(self) -> None:
        """Close the underlying session and its pooled connections."""
        self.session.close()

    def __enter__(self) -> 'Transport':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
