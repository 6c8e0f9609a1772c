from loguru import logger
import pytest

from klogger.services.klog import KLog, exception_to_str, exit_code_for
from klogger.services.log_config import LogConfig


def _fail():
    raise ValueError("boom")


def _nested_fail():
    _fail()


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "klog.log"


@pytest.fixture
def exits():
    return []


@pytest.fixture
def klog(log_path, exits):
    config = LogConfig()
    config.file_format = "{type}|{context}|{message}"
    config.open_log_file(str(log_path))
    return KLog(config, exit_func=exits.append)


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_log_writes_info_to_console_and_file(klog, log_path, capsys):
    klog.log("hello", context="app.Main.main")

    assert _lines(log_path) == ["INFO|app.Main.main|hello"]
    out = capsys.readouterr().out
    assert "INFO" in out and "app.Main.main" in out and "hello" in out


def test_debug_is_dropped_unless_debug_mode(klog, log_path):
    klog.debug("hidden", context="c")
    assert _lines(log_path) == []

    klog.set_debug_mode(True)
    klog.debug("shown", context="c")
    assert _lines(log_path) == ["DEBUG|c|shown"]


def test_warning_and_error_levels(klog, log_path):
    klog.warning("careful", context="c")
    klog.error("broken", context="c")
    assert _lines(log_path) == ["WARNING|c|careful", "ERROR|c|broken"]


def test_context_defaults_to_calling_function(klog, log_path):
    klog.log("where")
    assert _lines(log_path) == [f"INFO|{__name__}.test_context_defaults_to_calling_function|where"]


def test_context_skips_nested_facade_calls(klog, log_path):
    class Worker:
        def run(self):
            klog.error(ValueError("x"))

    Worker().run()

    context = _lines(log_path)[0].split("|")[1]
    assert context.startswith(f"{__name__}.")
    assert context.endswith("run")


def test_error_with_exception_draws_frame_tree(klog, log_path):
    try:
        _nested_fail()
    except ValueError as exc:
        klog.error("failed", exc, context="c")

    lines = _lines(log_path)
    assert lines[0] == "ERROR|c|failed"
    assert lines[1] == "    --> ValueError: boom"
    frames = lines[2:]
    assert len(frames) == 3
    assert all(line.startswith("        ├── ") for line in frames[:-1])
    assert frames[-1].startswith("        └── ")
    assert "_fail(test_klog.py:" in frames[-1]
    assert "_nested_fail(test_klog.py:" in frames[1]


def test_error_with_exception_only_uses_default_message(klog, log_path):
    try:
        _fail()
    except ValueError as exc:
        klog.error(exc, context="c")

    lines = _lines(log_path)
    assert lines[0] == "ERROR|c|An exception was caught"
    assert lines[-1].startswith("        └── _fail(")


def test_exception_without_traceback_has_header_only():
    assert exception_to_str(KeyError("k")) == "\n    --> KeyError: 'k'"


def test_critical_defaults_to_exit_code_one(klog, log_path, exits):
    klog.critical("fatal", context="c")

    assert exits == [1]
    assert _lines(log_path) == ["CRITICAL|c|fatal", "    --> Critical error code: 1"]


def test_critical_with_explicit_code(klog, log_path, exits):
    klog.critical("fatal", 42, context="c")
    assert exits == [42]
    assert _lines(log_path)[-1] == "    --> Critical error code: 42"


def test_critical_with_exception_derives_code(klog, log_path, exits):
    try:
        _fail()
    except ValueError as exc:
        klog.critical("fatal", exc, context="c")
        klog.critical(exc, context="c")

    code = exits[0]
    assert exits == [code, code]
    assert 1 <= code <= 255
    lines = _lines(log_path)
    assert "    --> ValueError: boom" in lines
    assert f"    --> Critical error code: {code}" in lines
    assert "CRITICAL|c|An exception was caught" in lines


def test_exit_code_for_is_deterministic_and_non_zero():
    first = exit_code_for(RuntimeError("disk full"))
    assert first == exit_code_for(RuntimeError("disk full"))
    for exc in [RuntimeError(""), KeyError("x"), OSError(2, "missing")]:
        assert exit_code_for(exc) != 0


def test_critical_exits_the_process_by_default(log_path):
    config = LogConfig()
    config.open_log_file(str(log_path))
    klog = KLog(config)

    with pytest.raises(SystemExit) as excinfo:
        klog.critical("fatal", 3, context="c")

    assert excinfo.value.code == 3
    assert "Critical error code: 3" in log_path.read_text(encoding="utf-8")


def test_set_output_reports_failures(tmp_path):
    messages = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    try:
        KLog().set_output(str(tmp_path))
    finally:
        logger.remove(handler_id)
    assert any("Cannot open log file" in message for message in messages)


def test_set_config_from_path(tmp_path):
    config_path = tmp_path / "klogger.json"
    log_path = tmp_path / "out.log"
    config_path.write_text(
        '{"debug": true, "append": false, "file": "%s"}' % log_path.as_posix(),
        encoding="utf-8",
    )

    klog = KLog()
    klog.set_config(str(config_path))

    assert klog.is_debug_mode() is True
    assert klog.is_append_mode() is False
    assert "Logger configuration loaded" in log_path.read_text(encoding="utf-8")


def test_set_config_from_stream(tmp_path):
    klog = KLog()
    with open(tmp_path / "c.yml", "w+b") as stream:
        stream.write(b"formats:\n  console: '{message}'\n")
        stream.seek(0)
        klog.set_config(stream)
    assert klog.config.console_format == "{message}"
