"""Shared pytest configuration and fixtures."""

import json
import os

import pytest

# Handlers build their services at import time
os.environ.setdefault('AWS_ACCESS_KEY_ID', 'testing')
os.environ.setdefault('AWS_SECRET_ACCESS_KEY', 'testing')
os.environ.setdefault('AWS_SECURITY_TOKEN', 'testing')
os.environ.setdefault('AWS_SESSION_TOKEN', 'testing')
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('EXPENSES_TABLE', 'test-expenses')
os.environ.setdefault('CATEGORIES_TABLE', 'test-categories')
os.environ.setdefault('COUNTERS_TABLE', 'test-counters')
os.environ['USE_LOCALSTACK'] = 'false'


@pytest.fixture
def make_event():
    """Build API Gateway proxy events."""

    def _make_event(method, path, user_id='user123', body=None, query=None, path_params=None):
        event = {
            'httpMethod': method,
            'path': path,
            'queryStringParameters': query,
            'pathParameters': path_params,
            'body': json.dumps(body) if isinstance(body, (dict, list)) else body,
            'requestContext': {}
        }
        if user_id:
            event['requestContext'] = {'authorizer': {'claims': {'sub': user_id}}}
        return event

    return _make_event
