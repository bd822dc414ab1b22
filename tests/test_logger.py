import io
from datetime import datetime

from streamkit.logger import LogLevel, Logger, get_command_line


def test_log_levels_are_ordered():
    levels = [LogLevel(i) for i in range(5)]
    assert levels == [LogLevel.OFF, LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO, LogLevel.DEBUG]
    assert sorted(levels) == levels


def test_get_command_line_joins_arguments():
    assert get_command_line(["prog", "-a", "b"]) == "prog -a b"


def test_get_command_line_without_arguments():
    assert get_command_line(["prog"]) == "prog "


def test_current_time_format():
    value = Logger().current_time()
    parsed = datetime.strptime(value, "%H:%M:%S.%f")
    assert parsed.strftime("%H:%M:%S.%f")[:-3] == value


def test_replace_vars_first_value_fills_all_placeholders():
    assert Logger().replace_vars("a {} b {}", ["x", "y"]) == "a x b x"


def test_replace_vars_inserts_text_literally():
    assert Logger().replace_vars("v={}", ["\\1$1"]) == "v=\\1$1"


def test_init_log_file_disabled(tmp_path):
    logger = Logger()
    assert logger.init_log_file(tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_init_log_file_writes_header(tmp_path):
    logger = Logger(is_write_file=True)
    path = logger.init_log_file(tmp_path / "Logs")
    assert path == logger.log_file_path
    text = path.read_text(encoding="utf-8")
    assert text.startswith("LOG ")
    assert f"Save Path: {tmp_path / 'Logs'}\n" in text
    assert text.endswith("\n\n")


def test_init_log_file_avoids_existing_files(tmp_path):
    logger = Logger(is_write_file=True)
    first = logger.init_log_file(tmp_path)
    second = logger.init_log_file(tmp_path)
    assert first != second
    assert first.exists() and second.exists()


def test_handle_log_prints_both_parts():
    buf = io.StringIO()
    Logger(stream=buf).handle_log("hello", "world")
    assert buf.getvalue() == "hello\nworld\n"


def test_handle_log_empty_write_prints_only_newline():
    buf = io.StringIO()
    Logger(stream=buf).handle_log("", "ignored")
    assert buf.getvalue() == "\n"


def test_handle_log_appends_escaped_text(tmp_path):
    logger = Logger(is_write_file=True, stream=io.StringIO())
    path = logger.init_log_file(tmp_path)
    before = path.read_text(encoding="utf-8")
    logger.handle_log("<b>", " & more")
    after = path.read_text(encoding="utf-8")
    assert after == before + "&lt;b&gt; &amp; more\n"


def test_handle_log_without_file_only_prints(tmp_path):
    buf = io.StringIO()
    logger = Logger(is_write_file=True, log_file_path=tmp_path / "missing.log", stream=buf)
    logger.handle_log("line")
    assert buf.getvalue() == "line\n\n"
    assert not (tmp_path / "missing.log").exists()