"""configure_logging: one stderr handler for structlog and stdlib loggers.

Root and ``blogctl`` logger state is restored by the conftest fixture.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from blogctl.config.logging import QUIET_LOGGERS, configure_logging


def _stderr_json(capfd: pytest.CaptureFixture[str]) -> dict[str, object]:
    return json.loads(capfd.readouterr().err.strip())


class TestLevels:
    @pytest.mark.parametrize(
        ("verbose", "expected"), [(True, logging.DEBUG), (False, logging.WARNING)]
    )
    def test_blogctl_level_follows_verbose(self, verbose: bool, expected: int) -> None:
        configure_logging(verbose=verbose)
        assert logging.getLogger("blogctl").level == expected
        assert logging.getLogger().level == logging.WARNING

    def test_reconfiguring_replaces_the_handler(self) -> None:
        configure_logging()
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_quiet_loggers_stay_at_warning(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("MARKDOWN").debug("Successfully loaded extension")
        assert all(logging.getLogger(n).level == logging.WARNING for n in QUIET_LOGGERS)
        assert capfd.readouterr().err == ""


class TestJsonLines:
    def test_structlog_event(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.get_logger("blogctl.build").warning("missing profile image", path="profile.jpg")
        line = _stderr_json(capfd)
        assert line["event"] == "missing profile image"
        assert line["path"] == "profile.jpg"
        assert line["level"] == "warning"
        assert line["logger"] == "blogctl.build"
        assert "timestamp" in line

    def test_stdlib_record_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("blogctl.plugins.manager").debug("Registered plugin: %s", "prism")
        line = _stderr_json(capfd)
        assert line["event"] == "Registered plugin: prism"
        assert line["level"] == "debug"
        assert line["logger"] == "blogctl.plugins.manager"

    def test_nothing_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        logging.getLogger("blogctl").error("boom")
        assert capfd.readouterr().out == ""
