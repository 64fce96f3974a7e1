from unittest.mock import MagicMock


def make_response(status_code=202, body=b'{"status": "ok"}', reason='Accepted', headers=None,
                  url='https://app.datadoghq.com/api/v1/series?api_key=secret'):
    """Build a mock requests.Response with a matching PreparedRequest."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = headers if headers is not None else {'Content-Type': 'application/json'}
    response.content = body
    response.request.method = 'POST'
    response.request.url = url
    response.request.headers = {'Content-Type': 'application/json', 'Content-Length': '42'}
    return response
