"""
Configuration settings for the Datadog metrics client.
"""
import os
import socket

# Backend configuration
SERVER_URL = os.getenv('DATADOG_API_URL', 'https://app.datadoghq.com/api')
API_KEY = os.getenv('DATADOG_API_KEY', '')

# Source configuration
SOURCE_NAME = os.getenv('DATADOG_HOST', socket.gethostname())
ENVIRONMENT = os.getenv('DATADOG_ENVIRONMENT', '')

# HTTP client configuration
REQUEST_TIMEOUT = 30  # seconds
CONTENT_TYPE = 'application/json'

# Batching configuration
CHUNK_THRESHOLD = int(os.getenv('DATADOG_CHUNK_THRESHOLD', str(2 * 1024 * 1024)))  # bytes

# Reporter configuration
REPORT_INTERVAL = int(os.getenv('DATADOG_REPORT_INTERVAL', '10'))  # seconds

# Logging configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
