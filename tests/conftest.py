"""
Pytest configuration and fixtures for all tests.
"""

import base64
import json
import os
import sys
import pytest
from unittest.mock import Mock

# Add src and hooks to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../hooks'))

# Set up test environment variables before importing any modules
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('TARGET_FUNCTION', 'ses-event-redactor-test:2')

EVENTS_DIR = os.path.join(os.path.dirname(__file__), 'events')


def load_event(file_name):
    """Load a sample SES event from tests/events."""
    with open(os.path.join(EVENTS_DIR, file_name)) as f:
        return json.load(f)


def firehose_record(record_id, payload):
    """Build a Firehose event record; dict payloads are JSON-encoded first."""
    if isinstance(payload, dict):
        payload = json.dumps(payload).encode('utf-8')
    return {
        'recordId': record_id,
        'approximateArrivalTimestamp': 1730802600000,
        'data': base64.b64encode(payload).decode('ascii')
    }


@pytest.fixture
def mock_context():
    """Mock Lambda context."""
    context = Mock()
    context.aws_request_id = "test-request-id"
    context.invoked_function_arn = "arn:aws:lambda:us-west-2:123456789012:function:test"
    context.function_name = "ses-event-redactor-test"
    return context


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables for all tests."""
    # Environment variables are already set above
    yield
