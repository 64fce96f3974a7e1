"""
Client for posting series and events to the Datadog API.

Series are encoded one by one, packed into chunks of roughly
``chunk_threshold`` bytes and posted chunk by chunk. Events are posted as a
single request.
"""
import logging
from typing import Iterable, List, Optional

from . import config
from .chunker import chunk
from .encoder import encode_event, encode_series
from .envelope import wrap
from .models import Event, Series
from .transport import Transport

logger = logging.getLogger(__name__)

SERIES_ENDPOINT = '/v1/series'
EVENT_ENDPOINT = '/v1/events'


class MetricsClient:
    """Client for sending series and events to the backend."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        host: Optional[str] = None,
        environment: Optional[str] = None,
        chunk_threshold: Optional[int] = None,
        request_timeout: Optional[float] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize the metrics client.

        Args:
            api_key (str, optional): API key for authentication. Defaults to config.API_KEY.
            base_url (str, optional): Base URL of the API. Defaults to config.SERVER_URL.
            host (str, optional): Host name reported with series. Defaults to config.SOURCE_NAME.
            environment (str, optional): Environment name. Defaults to config.ENVIRONMENT.
            chunk_threshold (int, optional): Soft byte limit per series request. Defaults to config.CHUNK_THRESHOLD.
            request_timeout (float, optional): Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
            transport (Transport, optional): Transport to send with. Created from request_timeout if omitted.
        """
        self.api_key = api_key if api_key is not None else config.API_KEY
        self.base_url = (base_url or config.SERVER_URL).rstrip('/')
        self.host = host if host is not None else config.SOURCE_NAME
        self.environment = environment if environment is not None else config.ENVIRONMENT
        self.chunk_threshold = chunk_threshold if chunk_threshold is not None else config.CHUNK_THRESHOLD
        if request_timeout is None:
            request_timeout = config.REQUEST_TIMEOUT
        self.transport = transport or Transport(timeout=request_timeout)

    def series_url(self) -> str:
        """
        Get the authenticated URL to POST series to, e.g.
        ``https://app.datadoghq.com/api/v1/series?api_key=9775a026f1ca7d1...``
        """
        return f"{self.base_url}{SERIES_ENDPOINT}?api_key={self.api_key}"

    def event_url(self) -> str:
        """Get the authenticated URL to POST events to."""
        return f"{self.base_url}{EVENT_ENDPOINT}?api_key={self.api_key}"

    def post_series(self, series: Iterable[Series], threshold_bytes: Optional[int] = None) -> None:
        """
        Post series to the backend in size-bounded chunks.

        Chunks are sent one after another. The first failure stops delivery:
        chunks sent before it stay delivered and the samples of the failing
        chunk are not retried, so a raised error means the batch was delivered
        partially or not at all.

        Args:
            series (iterable): Series to post, in order
            threshold_bytes (int, optional): Soft byte limit per request. Defaults to self.chunk_threshold.

        Raises:
            EncodingError: If a series cannot be encoded
            TransportError: If a request got no response
            BackendError: If the backend rejected a chunk
        """
        if threshold_bytes is None:
            threshold_bytes = self.chunk_threshold
        url = self.series_url()

        def send_chunk(fragments: List[bytes]) -> None:
            self.transport.send(url, wrap(fragments))

        chunk(series, threshold_bytes, send_chunk, encode=encode_series)

    def post_event(self, event: Event) -> None:
        """
        Post a single event.

        Args:
            event (Event): The event to post

        Raises:
            EncodingError: If the event cannot be encoded
            TransportError: If the request got no response
            BackendError: If the backend rejected the event
        """
        self.transport.send(self.event_url(), encode_event(event))
        logger.debug("Posted event: %s", event.title)

    def reporter(self, registry, interval: Optional[float] = None, tags: Optional[List[str]] = None,
                 prefix: str = ''):
        """
        Create a reporter that posts the given registry with this client.
        The returned reporter is not started.

        Args:
            registry (Registry): Registry to report
            interval (float, optional): Seconds between reports. Defaults to config.REPORT_INTERVAL.
            tags (list, optional): Tags added to every reported series
            prefix (str): Prefix for reported metric names

        Returns:
            Reporter: The reporter
        """
        # Import here to avoid circular imports
        from .reporter import Reporter
        return Reporter(self, registry, interval=interval, tags=tags, prefix=prefix)

    def close(self) -> None:
        """Release the transport's pooled connections."""
        self.transport.close()

    def __enter__(self) -> 'MetricsClient':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
