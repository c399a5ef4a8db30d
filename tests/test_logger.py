import threading

import pytest

from relaychat.logger import (
    AsyncLogger,
    ConsoleLogger,
    FileLogger,
    Logger,
    LogLevel,
    format_message,
)


class RecordingLogger(Logger):
    def __init__(self):
        self.entries = []
        self.threads = []

    def log(self, msg, level=LogLevel.MESSAGE, prefix=""):
        self.entries.append((msg, level, prefix))
        self.threads.append(threading.current_thread())


@pytest.mark.parametrize(
    "level, tag",
    [
        (LogLevel.ERR, "[ERROR]"),
        (LogLevel.WARNING, "[WARNING]"),
        (LogLevel.MESSAGE, "[MESSAGE]"),
        (LogLevel.INFO, "[INFO]"),
        (LogLevel.UNKNOWN, "[UNKNOWN]"),
    ],
)
def test_format_message_tags(level, tag):
    assert format_message("hello", level, "ignored") == tag + " hello"


def test_format_message_custom_prefix():
    assert format_message("hello", LogLevel.CUSTOM, "<chat>") == "<chat> hello"


def test_format_message_default_level_is_message():
    assert format_message("hi") == format_message("hi", LogLevel.MESSAGE)


def test_logger_is_abstract():
    with pytest.raises(TypeError):
        Logger()


def test_file_logger_appends_lines(tmp_path):
    path = tmp_path / "log.txt"
    logger = FileLogger(path)
    logger.log("first", LogLevel.INFO)
    logger.log("second", LogLevel.ERR)
    logger.log("third", LogLevel.CUSTOM, "*")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        format_message("first", LogLevel.INFO),
        format_message("second", LogLevel.ERR),
        format_message("third", LogLevel.CUSTOM, "*"),
    ]


def test_file_logger_missing_directory_raises(tmp_path):
    logger = FileLogger(tmp_path / "missing" / "log.txt")
    with pytest.raises(OSError):
        logger.log("x")


def test_console_logger_prints(capsys):
    ConsoleLogger().log("hello", LogLevel.WARNING)
    out = capsys.readouterr().out
    assert out.startswith(format_message("hello", LogLevel.WARNING))
    assert out.endswith("\n")


def test_async_logger_forwards_all_in_order():
    target = RecordingLogger()
    logger = AsyncLogger(target)
    for index in range(50):
        logger.log(f"m{index}", LogLevel.INFO)
    logger.close()
    assert [entry[0] for entry in target.entries] == [f"m{index}" for index in range(50)]
    assert all(entry[1] is LogLevel.INFO for entry in target.entries)


def test_async_logger_writes_on_worker_thread():
    target = RecordingLogger()
    with AsyncLogger(target) as logger:
        logger.log("bg")
    assert target.entries == [("bg", LogLevel.MESSAGE, "")]
    assert target.threads[0] is not threading.current_thread()


def test_async_logger_falls_back_after_close():
    target = RecordingLogger()
    logger = AsyncLogger(target)
    logger.close()
    logger.log("direct", LogLevel.CUSTOM, ">>")
    assert target.entries == [("direct", LogLevel.CUSTOM, ">>")]
    assert target.threads == [threading.current_thread()]


def test_async_logger_to_file(tmp_path):
    path = tmp_path / "async.txt"
    with AsyncLogger(FileLogger(path)) as logger:
        logger.log("one", LogLevel.INFO)
        logger.log("two", LogLevel.MESSAGE)
    assert path.read_text(encoding="utf-8").splitlines() == [
        format_message("one", LogLevel.INFO),
        format_message("two", LogLevel.MESSAGE),
    ]