"""
Pytest configuration for the trigger tests.

- Tests run against MagicMock Firestore clients and injected DB operations
- No Firestore emulator, network or credentials are needed
- This file sits in functions/ so the flat packages (db, models, triggers,
  utils, scripts) import the same way they do in the deployed function
"""
import logging

import pytest


@pytest.fixture(autouse=True)
def trigger_log_level(caplog):
    """
    Capture INFO trigger logs in every test.

    Tests assert on log prefixes like [RatingTrigger:worker=w1], which are
    written at INFO or above.
    """
    caplog.set_level(logging.INFO)
    yield caplog
