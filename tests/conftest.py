from unittest.mock import MagicMock

import pytest

from ddmetrics.client import MetricsClient
from ddmetrics.transport import Transport
from tests.helpers import make_response


@pytest.fixture
def session():
    session = MagicMock()
    session.post.return_value = make_response()
    return session


@pytest.fixture
def transport(session):
    return Transport(session=session, timeout=5)


@pytest.fixture
def client(transport):
    return MetricsClient(
        api_key='secret',
        base_url='https://app.datadoghq.com/api',
        host='web-1',
        environment='',
        chunk_threshold=2 * 1024 * 1024,
        transport=transport
    )
