#!/usr/bin/env python3
"""
Command line tool for posting events and series to Datadog.
"""
import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from . import config as sdk_config
from .client import MetricsClient
from .errors import MetricsError
from .models import AlertType, Event, MetricType, Priority, Series

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """
    Setup logging with the specified log level.

    Args:
        log_level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_config_from_file(config_file: str) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_file (str): Path to the JSON config file

    Returns:
        dict: Configuration dictionary with argument names as keys
    """
    if not os.path.exists(config_file):
        logger.error("Config file not found: %s", config_file)
        return {}

    try:
        with open(config_file, 'r') as f:
            config = json.load(f)
            logger.debug("Loaded configuration from %s", config_file)
            return config
    except (json.JSONDecodeError, ValueError) as e:
        logger.error("Error parsing config file %s: %s", config_file, e)
        return {}


def merge_config_with_args(config: Dict[str, Any], args: argparse.Namespace) -> argparse.Namespace:
    """
    Merge configuration from a file with command line arguments.
    Command line arguments take precedence over config file values.

    Args:
        config (dict): Configuration dictionary from file
        args (argparse.Namespace): Command line arguments

    Returns:
        argparse.Namespace: Updated arguments namespace
    """
    args_dict = vars(args)

    for key, value in config.items():
        arg_key = key.replace('-', '_')
        if args_dict.get(arg_key) is None:
            args_dict[arg_key] = value

    return argparse.Namespace(**args_dict)


def load_series_file(path: str, default_host: str) -> List[Series]:
    """
    Read series from a JSON file.

    The file holds either a list of series objects or an object with a
    ``series`` field, using the same schema as the series endpoint.

    Args:
        path (str): Path to the JSON file
        default_host (str): Host used for series that do not name one

    Returns:
        list: The parsed series

    Raises:
        ValueError: If the file is not valid JSON or a series is malformed
    """
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('series', [])
    if not isinstance(data, list):
        raise ValueError("expected a list of series or an object with a 'series' field")

    series = []
    for item in data:
        tags = item.get('tags', []) if isinstance(item, dict) else []
        if not isinstance(tags, list):
            raise ValueError(f"tags must be a list of strings, got {tags!r}")
        try:
            series.append(Series(
                metric=item['metric'],
                points=item['points'],
                type=MetricType(item.get('type', MetricType.GAUGE.value)),
                host=item.get('host', default_host),
                tags=tags,
            ))
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed series {item!r}: {e}") from e
    return series


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Post events and series to Datadog.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--config-file', type=str,
                        help='Path to JSON configuration file')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Log level (default: config.LOG_LEVEL)')
    parser.add_argument('--api-key', type=str, default=None,
                        help='API key for authentication')
    parser.add_argument('--server-url', type=str, default=None,
                        help='Base URL of the Datadog API')
    parser.add_argument('--host', type=str, default=None,
                        help='Host name reported with series')
    parser.add_argument('--chunk-threshold', type=int, default=None,
                        help='Soft byte limit per series request')
    parser.add_argument('--request-timeout', type=int, default=None,
                        help='Request timeout in seconds')

    subparsers = parser.add_subparsers(dest='command', required=True)

    event_parser = subparsers.add_parser('event', help='Post a single event')
    event_parser.add_argument('--title', type=str, required=True, help='Event title')
    event_parser.add_argument('--text', type=str, default='', help='Event body')
    event_parser.add_argument('--priority', type=str, default=Priority.NORMAL.value,
                              choices=[p.value for p in Priority], help='Event priority')
    event_parser.add_argument('--alert-type', type=str, default=AlertType.INFO.value,
                              choices=[a.value for a in AlertType], help='Event alert type')
    event_parser.add_argument('--tag', dest='tags', action='append', default=[],
                              help='Event tag, may be repeated')

    series_parser = subparsers.add_parser('series', help='Post series from a JSON file')
    series_parser.add_argument('file', type=str, help='JSON file with series')

    return parser


def build_client(args: argparse.Namespace) -> MetricsClient:
    return MetricsClient(
        api_key=args.api_key,
        base_url=args.server_url,
        host=args.host,
        chunk_threshold=args.chunk_threshold,
        request_timeout=args.request_timeout
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, post the requested payload and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config_file:
        args = merge_config_with_args(load_config_from_file(args.config_file), args)

    try:
        setup_logging(args.log_level or sdk_config.LOG_LEVEL)
    except ValueError as e:
        setup_logging('INFO')
        logger.error("Invalid configuration: %s", e)
        return 1

    with build_client(args) as client:
        try:
            if args.command == 'event':
                client.post_event(Event(
                    title=args.title,
                    text=args.text,
                    priority=Priority(args.priority),
                    tags=args.tags,
                    alert_type=AlertType(args.alert_type)
                ))
                logger.info("Posted event: %s", args.title)
            else:
                series = load_series_file(args.file, client.host)
                client.post_series(series)
                logger.info("Posted %d series", len(series))
        except (OSError, ValueError) as e:
            logger.error("Invalid input: %s", e)
            return 1
        except MetricsError as e:
            logger.error("Delivery failed: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
