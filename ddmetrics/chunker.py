"""
Greedy size-based chunking of encoded series.
"""
import logging
from typing import Callable, Iterable, List, TypeVar

from .encoder import encode_series

logger = logging.getLogger(__name__)

T = TypeVar('T')
Sink = Callable[[List[bytes]], None]


def chunk(samples: Iterable[T], threshold_bytes: int, sink: Sink,
          encode: Callable[[T], bytes] = encode_series) -> None:
    """
    Encode samples in order and hand them to ``sink`` in size-bounded chunks.

    A chunk is flushed as soon as its cumulative fragment size is strictly
    greater than ``threshold_bytes``, so a chunk can exceed the threshold by at
    most one fragment. Fragments are never split. Whatever is left at the end
    of the input is flushed as a final, smaller chunk.

    Args:
        samples (iterable): Samples to encode, consumed once
        threshold_bytes (int): Soft upper bound on a chunk's byte size
        sink (callable): Called with each chunk (a list of fragments)
        encode (callable, optional): Encodes one sample to bytes

    Raises:
        EncodingError: If a sample cannot be encoded; chunks already handed to
            ``sink`` are not rolled back
        Exception: Anything raised by ``sink`` propagates and stops chunking
    """
    pending: List[bytes] = []
    size = 0

    for sample in samples:
        fragment = encode(sample)
        pending.append(fragment)
        size += len(fragment)

        if size > threshold_bytes:
            logger.debug("Flushing chunk of %d fragments (%d bytes)", len(pending), size)
            sink(pending)
            pending = []
            size = 0

    if pending:
        logger.debug("Flushing final chunk of %d fragments (%d bytes)", len(pending), size)
        sink(pending)
