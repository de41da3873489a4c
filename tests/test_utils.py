"""Test time helpers and the package logging setup"""
import logging
from datetime import datetime, timedelta, timezone

from dome_api.utils import logger as dome_logger
from dome_api.utils.timeutils import format_datetime, to_datetime, to_unix


class TestTimeUtils:

    def test_to_datetime_is_utc(self):
        value = to_datetime(1640995200)

        assert value == datetime(2022, 1, 1, tzinfo=timezone.utc)
        assert to_datetime(None) is None

    def test_formats(self):
        value = datetime(2024, 10, 2, 13, 5, 9, tzinfo=timezone.utc)

        assert format_datetime(value, "readable") == "2024-10-02 13:05:09 UTC"
        assert format_datetime(value, "date_only") == "2024-10-02"
        assert format_datetime(value, "iso") == "2024-10-02T13:05:09+00:00"
        assert format_datetime(value) == "2024-10-02 13:05:09+00:00"
        assert format_datetime(None, "iso") is None

    def test_to_unix(self):
        aware = datetime(2022, 1, 1, tzinfo=timezone.utc)

        assert to_unix(aware) == 1640995200.0
        assert to_unix(1640995200) == 1640995200.0
        assert to_unix(aware + timedelta(seconds=30)) == 1640995230.0


class TestLogging:

    def test_module_loggers_hang_off_the_package_logger(self):
        log = dome_logger.get_logger("dome_api.streaming")

        assert log.name == "dome_api.streaming"
        assert log.parent is logging.getLogger(dome_logger.PACKAGE_LOGGER)

    def test_importing_the_package_configures_nothing(self):
        """Only a NullHandler; third-party logger levels are not touched"""
        import dome_api  # noqa: F401

        package_logger = logging.getLogger(dome_logger.PACKAGE_LOGGER)
        assert all(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
        assert package_logger.level == logging.NOTSET
        assert not dome_logger._configured

    def test_configure_logging_is_opt_in(self, monkeypatch):
        package_logger = logging.getLogger(dome_logger.PACKAGE_LOGGER)
        httpx_logger = logging.getLogger("httpx")
        saved_handlers = list(package_logger.handlers)
        saved_levels = (package_logger.level, httpx_logger.level)
        monkeypatch.setattr(dome_logger, "_configured", False)

        try:
            dome_logger.configure_logging("debug")

            streams = [h for h in package_logger.handlers if not isinstance(h, logging.NullHandler)]
            assert len(streams) == 1
            assert package_logger.level == logging.DEBUG
            assert httpx_logger.level == logging.WARNING
            assert streams[0] not in logging.getLogger().handlers

            dome_logger.configure_logging("error")
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.handlers = saved_handlers
            package_logger.setLevel(saved_levels[0])
            httpx_logger.setLevel(saved_levels[1])

    def test_api_call_record(self, caplog):
        log = dome_logger.get_logger("dome_api._client")

        with caplog.at_level(logging.INFO, logger="dome_api"):
            dome_logger.log_api_call(log, "GET", "https://api.test/v1/polymarket/orders", 200, 12.4)

        record = caplog.records[-1]
        assert record.getMessage() == "API GET https://api.test/v1/polymarket/orders - 200 (12ms)"
        assert record.status == 200
        assert record.type == "api_call"

    def test_stream_event_record(self, caplog):
        log = dome_logger.get_logger("dome_api.streaming")

        with caplog.at_level(logging.INFO, logger="dome_api"):
            dome_logger.log_stream_event(log, "closed", "code=1000")
            dome_logger.log_stream_event(log, "open")

        messages = [r.getMessage() for r in caplog.records[-2:]]
        assert messages == ["WS closed - code=1000", "WS open"]
