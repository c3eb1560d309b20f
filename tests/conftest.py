import logging
from datetime import datetime

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture
def fixed_clock():
    """A clock that always returns 3:04:05 PM."""
    return lambda: datetime(2024, 5, 1, 15, 4, 5)


@pytest.fixture
def function_call_event():
    return {
        "type": "response.output_item.done",
        "output_index": 0,
        "item": {
            "id": "item_fc",
            "type": "function_call",
            "status": "completed",
            "call_id": "c1",
            "name": "lookup_order",
            "arguments": '{"order_id": "A-17", "verbose": true}',
        },
    }


@pytest.fixture
def function_call_output_event():
    return {
        "type": "conversation.item.created",
        "item": {
            "id": "item_out",
            "type": "function_call_output",
            "call_id": "c1",
            "output": '"shipped"',
        },
    }
