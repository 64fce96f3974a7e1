from unittest.mock import MagicMock, PropertyMock

import pytest
import requests

from ddmetrics.errors import BackendError, TransportError
from ddmetrics.transport import Transport, dump_request, dump_response
from tests.helpers import make_response

URL = 'https://app.datadoghq.com/api/v1/series?api_key=secret'


def test_send_posts_payload_with_explicit_headers(transport, session):
    transport.send(URL, b'{"series":[]}')

    session.post.assert_called_once_with(
        URL,
        data=b'{"series":[]}',
        headers={'Content-Type': 'application/json', 'Content-Length': '13'},
        timeout=5
    )


@pytest.mark.parametrize("status_code", [200, 202, 204, 299])
def test_2xx_is_success(transport, session, status_code):
    session.post.return_value = make_response(status_code=status_code)
    transport.send(URL, b'{}')
    session.post.return_value.close.assert_called_once()


@pytest.mark.parametrize("status_code", [199, 301, 400, 403, 500, 503])
def test_non_2xx_raises_backend_error(transport, session, status_code):
    session.post.return_value = make_response(status_code=status_code, reason='Nope', body=b'{"errors": ["bad"]}')

    with pytest.raises(BackendError) as excinfo:
        transport.send(URL, b'{}')

    assert excinfo.value.status_code == status_code
    assert excinfo.value.url == URL
    session.post.return_value.close.assert_called_once()


def test_backend_error_message_is_diagnostic(transport, session):
    session.post.return_value = make_response(
        status_code=503, reason='Service Unavailable', body=b'upstream overloaded',
        headers={'Retry-After': '30'}
    )

    with pytest.raises(BackendError) as excinfo:
        transport.send(URL, b'{"secret-body": 1}')

    message = str(excinfo.value)
    assert '503' in message
    assert 'POST ' + URL in message
    assert 'Content-Type: application/json' in message
    assert 'Retry-After: 30' in message
    assert 'upstream overloaded' in message
    assert 'secret-body' not in message


@pytest.mark.parametrize("exc", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("timed out"),
])
def test_connection_failure_raises_transport_error(transport, session, exc):
    session.post.side_effect = exc

    with pytest.raises(TransportError) as excinfo:
        transport.send(URL, b'{}')

    assert excinfo.value.__cause__ is exc
    assert excinfo.value.url == URL
    assert session.post.call_count == 1


def test_body_read_failure_still_closes_response(transport, session):
    response = make_response()
    type(response).content = PropertyMock(side_effect=requests.ConnectionError("reset"))
    session.post.return_value = response

    with pytest.raises(TransportError):
        transport.send(URL, b'{}')

    response.close.assert_called_once()


def test_dump_request_leaves_out_body():
    request = requests.Request('POST', URL, data=b'{"a":1}', headers={'Content-Type': 'application/json'}).prepare()
    dump = dump_request(request)

    assert dump.splitlines()[0] == 'POST ' + URL
    assert 'Content-Type: application/json' in dump
    assert '{"a":1}' not in dump


def test_dump_response_includes_status_headers_and_body():
    response = make_response(status_code=400, reason='Bad Request', headers={'X-Id': 'abc'})
    dump = dump_response(response, b'invalid payload')

    assert dump.splitlines()[0] == 'HTTP 400 Bad Request'
    assert 'X-Id: abc' in dump
    assert dump.endswith('invalid payload')


def test_close_closes_session():
    session = MagicMock()
    with Transport(session=session):
        pass
    session.close.assert_called_once()


def test_explicit_zero_timeout_is_kept(session):
    transport = Transport(session=session, timeout=0)
    transport.send(URL, b'{}')

    assert transport.timeout == 0
    assert session.post.call_args.kwargs['timeout'] == 0


def test_default_timeout_comes_from_config(session):
    from ddmetrics import config
    assert Transport(session=session).timeout == config.REQUEST_TIMEOUT
