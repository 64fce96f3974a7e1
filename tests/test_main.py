import json
from unittest.mock import MagicMock, patch

import pytest

from ddmetrics import main as cli
from ddmetrics.errors import BackendError
from ddmetrics.models import AlertType, MetricType, Priority


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.host = 'cli-host'
    with patch.object(cli, 'MetricsClient') as client_cls:
        client_cls.return_value.__enter__.return_value = client
        yield client_cls, client


def test_event_command(mock_client):
    client_cls, client = mock_client

    status = cli.main(['--api-key', 'secret', 'event', '--title', 'Deploy', '--text', 'v2',
                       '--priority', 'low', '--alert-type', 'success', '--tag', 'a:b', '--tag', 'c:d'])

    assert status == 0
    assert client_cls.call_args.kwargs['api_key'] == 'secret'
    event = client.post_event.call_args.args[0]
    assert event.title == 'Deploy'
    assert event.priority == Priority.LOW
    assert event.alert_type == AlertType.SUCCESS
    assert event.tags == ('a:b', 'c:d')


def test_series_command(mock_client, tmp_path):
    _, client = mock_client
    path = tmp_path / 'series.json'
    path.write_text(json.dumps({'series': [
        {'metric': 'a', 'points': [[1, 2]], 'type': 'counter', 'tags': ['x:y']},
        {'metric': 'b', 'points': [[1, 3]], 'host': 'other'},
    ]}))

    assert cli.main(['series', str(path)]) == 0

    posted = client.post_series.call_args.args[0]
    assert [s.metric for s in posted] == ['a', 'b']
    assert posted[0].type == MetricType.COUNTER
    assert posted[0].host == 'cli-host'
    assert posted[1].host == 'other'


def test_series_command_rejects_malformed_file(mock_client, tmp_path):
    _, client = mock_client
    path = tmp_path / 'series.json'
    path.write_text(json.dumps([{'points': [[1, 2]]}]))

    assert cli.main(['series', str(path)]) == 1
    client.post_series.assert_not_called()


def test_delivery_failure_exits_non_zero(mock_client):
    _, client = mock_client
    client.post_event.side_effect = BackendError(503, 'http://x', 'POST http://x', 'HTTP 503')

    assert cli.main(['event', '--title', 'x']) == 1


def test_config_file_fills_missing_options(mock_client, tmp_path):
    client_cls, _ = mock_client
    config_file = tmp_path / 'config.json'
    config_file.write_text(json.dumps({'api-key': 'from-file', 'chunk_threshold': 1024}))

    assert cli.main(['--config-file', str(config_file), 'event', '--title', 'x']) == 0

    kwargs = client_cls.call_args.kwargs
    assert kwargs['api_key'] == 'from-file'
    assert kwargs['chunk_threshold'] == 1024


def test_command_line_wins_over_config_file(mock_client, tmp_path):
    client_cls, _ = mock_client
    config_file = tmp_path / 'config.json'
    config_file.write_text(json.dumps({'api_key': 'from-file'}))

    cli.main(['--config-file', str(config_file), '--api-key', 'from-cli', 'event', '--title', 'x'])

    assert client_cls.call_args.kwargs['api_key'] == 'from-cli'


def test_missing_config_file_is_ignored(mock_client, tmp_path):
    assert cli.main(['--config-file', str(tmp_path / 'missing.json'), 'event', '--title', 'x']) == 0


def test_series_command_rejects_string_tags(mock_client, tmp_path):
    _, client = mock_client
    path = tmp_path / 'series.json'
    path.write_text(json.dumps([{'metric': 'a', 'points': [[1, 2]], 'tags': 'env:prod'}]))

    assert cli.main(['series', str(path)]) == 1
    client.post_series.assert_not_called()


def test_load_series_file_rejects_string_tags(tmp_path):
    path = tmp_path / 'series.json'
    path.write_text(json.dumps([{'metric': 'a', 'points': [[1, 2]], 'tags': 'env:prod'}]))

    with pytest.raises(ValueError):
        cli.load_series_file(str(path), 'cli-host')


def test_invalid_log_level_in_config_file_exits_non_zero(mock_client, tmp_path):
    client_cls, _ = mock_client
    config_file = tmp_path / 'config.json'
    config_file.write_text(json.dumps({'log_level': 'LOUD'}))

    assert cli.main(['--config-file', str(config_file), 'event', '--title', 'x']) == 1
    client_cls.assert_not_called()
