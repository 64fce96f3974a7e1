"""
Metric name construction.
"""
from .errors import InvalidNameError


def new_metric_name(prefix: str, name: str, tags: str) -> str:
    """
    Build a metric name of the form ``prefix.name[tags]``.

    The ``prefix.`` and ``[tags]`` parts are left out when empty.

    Args:
        prefix (str): Namespace prefix, may be empty
        name (str): Metric name, must not be empty
        tags (str): Tag string, may be empty

    Returns:
        str: The full metric name

    Raises:
        InvalidNameError: If name is empty
    """
    if not name:
        raise InvalidNameError()

    parts = []
    if prefix:
        parts.append(prefix + '.')
    parts.append(name)
    if tags:
        parts.append('[' + tags + ']')
    return ''.join(parts)
