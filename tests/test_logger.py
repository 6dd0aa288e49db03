import io

from oberon0.logger import PROJECT_NAME, Logger, LogLevel
from oberon0.position import EMPTY_POS, FilePos


def _logger(level=LogLevel.DEBUG):
    out, err = io.StringIO(), io.StringIO()
    return Logger(level, out, err), out, err


def test_error_at_position_format():
    logger, out, err = _logger()
    logger.error(FilePos("a.Mod", 2, 5, 0), "bad character.")
    assert err.getvalue() == (
        "a.Mod:2:5: \u001b[1m\u001b[91merror: \u001b[97mbad character.\u001b[0m\n"
    )
    assert out.getvalue() == ""


def test_warning_goes_to_out():
    logger, out, err = _logger()
    logger.warning(FilePos("a.Mod", 1, 1, 0), "careful")
    assert "\u001b[1m\u001b[95mwarning: \u001b[97mcareful" in out.getvalue()
    assert err.getvalue() == ""
    assert logger.count(LogLevel.WARNING) == 1


def test_empty_file_name_uses_project_name():
    logger, _, err = _logger()
    logger.error("", "cannot open file.")
    assert err.getvalue().startswith(PROJECT_NAME + ": ")


def test_file_name_without_position():
    logger, _, err = _logger()
    logger.error("x.Mod", "error reading file.")
    assert err.getvalue().startswith("x.Mod: \u001b[1m")


def test_empty_pos_has_no_location_prefix():
    logger, _, err = _logger()
    logger.error(EMPTY_POS, "msg")
    assert err.getvalue().startswith("\u001b[1m\u001b[91merror: ")


def test_info_and_debug_are_plain():
    logger, out, _ = _logger()
    logger.info("hello")
    logger.debug("world")
    assert out.getvalue() == "hello\u001b[0m\nworld\u001b[0m\n"
    assert logger.count(LogLevel.INFO) == 1
    assert logger.count(LogLevel.DEBUG) == 1


def test_messages_below_level_are_counted_not_shown():
    logger, out, err = _logger(LogLevel.ERROR)
    logger.warning("f", "w")
    logger.info("i")
    assert out.getvalue() == ""
    assert err.getvalue() == ""
    assert logger.count(LogLevel.WARNING) == 1
    assert logger.count(LogLevel.INFO) == 1


def test_quiet_suppresses_errors_but_counts():
    logger, _, err = _logger(LogLevel.QUIET)
    logger.error("f", "e")
    logger.error("f", "e")
    assert err.getvalue() == ""
    assert logger.error_count == 2


def test_warn_as_error_promotes_warnings():
    logger, out, err = _logger()
    logger.warn_as_error = True
    logger.warning("f", "w")
    assert logger.count(LogLevel.ERROR) == 1
    assert logger.warning_count == 0
    assert out.getvalue() == ""
    assert "error: " in err.getvalue()


def test_single_stream_receives_errors():
    out = io.StringIO()
    logger = Logger(LogLevel.DEBUG, out)
    logger.error("f", "boom")
    logger.info("note")
    text = out.getvalue()
    assert "boom" in text
    assert "note" in text


def test_default_level_is_error():
    logger = Logger()
    assert logger.level == LogLevel.ERROR
    assert logger.error_count == 0