"""
Outer payload for the series endpoint.

The backend expects an object, not an array, so encoded series are placed in
a single ``series`` field. Fragments are already valid JSON and are spliced in
verbatim rather than decoded and encoded again.
"""
from typing import Sequence

SERIES_FIELD = b'series'


def wrap(fragments: Sequence[bytes]) -> bytes:
    """
    Wrap encoded series fragments into ``{"series": [...]}``.

    Args:
        fragments (sequence): Encoded series, each a complete JSON object

    Returns:
        bytes: The request body. ``{}`` when there are no fragments, since the
        field is omitted rather than sent empty.
    """
    if not fragments:
        return b'{}'
    return b''.join((b'{"', SERIES_FIELD, b'":[', b','.join(fragments), b']}'))
