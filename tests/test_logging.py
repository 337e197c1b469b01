"""Log setup and the log lines written along the webhook path."""

from __future__ import annotations

import logging

import pytest

from conftest import FakeNotifier, FakeUserStore, checkout_event
from donation_webhook.core.errors import MissingField, StoreUpdateFailed
from donation_webhook.core.logging import mask_email, setup_logging
from donation_webhook.services.donations import handle_stripe_event

SERVICE_LOGGER = "donation_webhook.services.donations"


@pytest.fixture
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("_restore_root_logger")
def test_setup_logging_configures_root():
    setup_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert logging.getLogger("uvicorn.access").propagate is True


@pytest.mark.parametrize(
    "email, expected",
    [
        ("a@example.com", "***@example.com"),
        ("weird@sub@example.org", "***@example.org"),
        ("no-at-sign", "***"),
    ],
)
def test_mask_email(email, expected):
    assert mask_email(email) == expected


class TestMilestones:
    def test_unhandled_type_logged_at_info(self, caplog, sink):
        event = checkout_event()
        event["type"] = "invoice.paid"
        with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
            handle_stripe_event(event, store=FakeUserStore(), notifier=None, failures=sink)
        (record,) = [r for r in caplog.records if r.name == SERVICE_LOGGER]
        assert record.levelno == logging.INFO
        assert "invoice.paid" in record.getMessage()

    def test_missing_email_logged_at_warning(self, caplog, sink):
        with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
            with pytest.raises(MissingField):
                handle_stripe_event(
                    checkout_event(email=None), store=FakeUserStore(), notifier=None, failures=sink
                )
        assert [r.levelno for r in caplog.records if r.name == SERVICE_LOGGER] == [logging.WARNING]
        assert "evt_test_123" in caplog.text

    def test_store_failure_logged_at_error(self, caplog, sink):
        with caplog.at_level(logging.INFO, logger=SERVICE_LOGGER):
            with pytest.raises(StoreUpdateFailed):
                handle_stripe_event(
                    checkout_event(), store=FakeUserStore(fail=True), notifier=None, failures=sink
                )
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "***@example.com" in errors[0].getMessage()

    def test_success_logs_no_full_address(self, caplog, sink):
        with caplog.at_level(logging.DEBUG, logger=SERVICE_LOGGER):
            handle_stripe_event(
                checkout_event(), store=FakeUserStore(), notifier=FakeNotifier(), failures=sink
            )
        assert "Updated ***@example.com to donated" in caplog.text
        assert "a@example.com" not in caplog.text
