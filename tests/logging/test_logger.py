import logging

import pytest

from platsync.logging import (
    LogConfig,
    LogLevel,
    get_logger,
    log_api_call,
    log_authentication_event,
    setup_logging,
)


@pytest.fixture
def log_config(tmp_path, isolated_logging):
    yield LogConfig(log_directory=tmp_path)
    setup_logging(LogConfig(log_directory=isolated_logging), force_reconfigure=True)


def test_setup_logging_writes_to_configured_directory(log_config, tmp_path):
    setup_logging(log_config, force_reconfigure=True)

    get_logger("platsync.test").info("written to file")
    for handler in logging.getLogger("platsync").handlers:
        handler.flush()

    assert "written to file" in (tmp_path / "platsync.log").read_text(encoding="utf-8")


def test_setup_logging_applies_level(log_config):
    log_config.default_level = LogLevel.ERROR

    setup_logging(log_config, force_reconfigure=True)

    assert logging.getLogger("platsync").level == logging.ERROR


def test_setup_logging_reads_level_from_settings(mocker, log_config):
    mocker.patch("platsync.logging.logger.LogConfig", return_value=log_config)
    mocker.patch("platsync.logging.logger._level_from_settings", return_value=LogLevel.DEBUG)

    setup_logging(force_reconfigure=True)

    assert logging.getLogger("platsync").level == logging.DEBUG


def test_api_logger_does_not_propagate(log_config):
    setup_logging(log_config, force_reconfigure=True)

    assert logging.getLogger("platsync.api").propagate is False


def test_get_logger_returns_same_instance():
    assert get_logger("platsync.test") is get_logger("platsync.test")


def test_log_api_call_success(mocker):
    spy = mocker.spy(logging.getLogger("platsync.api"), "debug")

    log_api_call("GET", "/test", status_code=200, duration=0.1)

    spy.assert_called_once()


def test_log_api_call_client_error(mocker):
    spy = mocker.spy(logging.getLogger("platsync.api"), "warning")

    log_api_call("POST", "/bad", status_code=404, duration=0.2, error="404 - missing")

    spy.assert_called_once()


def test_log_api_call_transport_error(mocker):
    spy = mocker.spy(logging.getLogger("platsync.api"), "error")

    log_api_call("POST", "/crash", duration=0.2, error="connection refused")

    spy.assert_called_once()
    _, kwargs = spy.call_args
    assert kwargs["extra"]["api_error"] == "connection refused"


def test_log_authentication_event_sanitizes_details(mocker):
    spy = mocker.spy(logging.getLogger("platsync.auth"), "info")

    log_authentication_event("exchange", True, {"project_ref": "p", "secret": "role-secret"})

    spy.assert_called_once()
    _, kwargs = spy.call_args
    assert kwargs["extra"]["auth_details"]["project_ref"] == "p"
    assert kwargs["extra"]["auth_details"]["secret"] != "role-secret"


def test_log_authentication_event_failure(mocker):
    spy = mocker.spy(logging.getLogger("platsync.auth"), "error")

    log_authentication_event("exchange", False)

    spy.assert_called_once()
