"""Settings, secret redaction and log context."""

import logging

from payorder.common.config import Settings
from payorder.common.logging import ContextFilter, log_context, order_id_ctx, payment_id_ctx, trace_id_ctx
from payorder.common.startup import log_startup_config, redacted_config


def test_settings_read_gateway_env(monkeypatch):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_env_key")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "env_secret")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.razorpay_key_id == "rzp_env_key"
    assert settings.key_secret == "env_secret"
    assert settings.gateway_credentials_loaded is True
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert "env_secret" not in repr(settings)


def test_missing_credentials_reported_not_loaded():
    settings = Settings(_env_file=None, razorpay_key_id=None, razorpay_key_secret=None)

    assert settings.gateway_credentials_loaded is False
    assert settings.key_secret == ""


def test_redacted_config_hides_credentials():
    settings = Settings(_env_file=None, razorpay_key_id="rzp_live_key", razorpay_key_secret="live_secret")
    config = redacted_config(settings, ["razorpay_key_id", "razorpay_key_secret", "gateway_mode", "redis_url"])

    assert config["razorpay_key_id"] == "<redacted>"
    assert config["razorpay_key_secret"] == "<redacted>"
    assert config["gateway_mode"] == "razorpay"
    assert config["redis_url"] == "<unset>"


def test_startup_log_never_contains_secret(caplog):
    settings = Settings(_env_file=None, razorpay_key_id="rzp_live_key", razorpay_key_secret="live_secret")
    caplog.set_level(logging.INFO, logger="payorder")

    log_startup_config(settings, ["razorpay_key_id", "razorpay_key_secret"])

    assert "live_secret" not in caplog.text
    assert "rzp_live_key" not in caplog.text
    assert "gateway credentials loaded: yes" in caplog.text


def test_context_filter_injects_ids():
    record = logging.LogRecord("payorder", logging.INFO, __file__, 1, "msg", None, None)
    trace_token = trace_id_ctx.set("trace-1")
    payment_token = payment_id_ctx.set("pay_1")
    try:
        assert ContextFilter("payorder").filter(record) is True
    finally:
        trace_id_ctx.reset(trace_token)
        payment_id_ctx.reset(payment_token)

    assert record.service_name == "payorder"
    assert record.trace_id == "trace-1"
    assert record.payment_id == "pay_1"
    assert record.order_id == ""


def test_log_context_restores_previous_values():
    outer = trace_id_ctx.set("trace-outer")
    try:
        with log_context(trace_id="trace-inner", order_id="order_1"):
            assert trace_id_ctx.get() == "trace-inner"
            assert order_id_ctx.get() == "order_1"
        assert trace_id_ctx.get() == "trace-outer"
        assert order_id_ctx.get() == ""
    finally:
        trace_id_ctx.reset(outer)
