import logging

import pytest

from student_app.errors import build_error_message
from student_app.utils import logs
from student_app.utils.counter import AtomicCounter, run_demo
from student_app.utils.digest import digest, md5_hex


def test_md5_known_vectors():
    assert md5_hex("") == "d41d8cd98f00b204e9800998ecf8427e"
    assert md5_hex("abc") == "900150983cd24fb0d6963f7d28e17f72"
    assert md5_hex(b"abc") == md5_hex("abc", "ascii")


def test_md5_charset_changes_bytes():
    assert md5_hex("密码", "utf-8") != md5_hex("密码", "gbk")
    with pytest.raises(LookupError):
        md5_hex("abc", "no-such-charset")


def test_digest_unknown_algorithm():
    assert len(digest("sha256", b"x")) == 32
    with pytest.raises(ValueError):
        digest("not-a-hash", b"x")


class TestLogFacade:
    def test_logger_named_after_calling_class(self, caplog):
        caplog.set_level(logging.INFO)
        logs.info("saved", tag="addStudent")
        record = caplog.records[-1]
        assert record.name == f"{__name__}.TestLogFacade"
        assert record.getMessage() == "【addStudent】saved"

    def test_debug_is_skipped_when_disabled(self, caplog):
        caplog.set_level(logging.INFO)
        logs.debug("hidden")
        assert not [r for r in caplog.records if r.getMessage() == "hidden"]


def test_logger_named_after_module_outside_class(caplog):
    caplog.set_level(logging.WARNING)
    logs.warn("careful")
    logs.error("broken", tag="db")
    names = {r.name for r in caplog.records}
    assert names == {__name__}
    assert caplog.records[-1].getMessage() == "【db】broken"
    assert caplog.records[-1].levelno == logging.ERROR


def test_loggers_are_memoized():
    assert logs.get_logger("student_app.x") is logs.get_logger("student_app.x")


def test_format_stack_trace():
    assert logs.format_stack_trace(None) is None
    assert logs.format_stack_trace(ValueError("never raised")) is None
    try:
        1 / 0
    except ZeroDivisionError as exc:
        trace = logs.format_stack_trace(exc)
        message = build_error_message(exc)
    assert trace.startswith("\r\n\t")
    assert "test_format_stack_trace" in trace
    assert len(trace) <= 500
    assert message.startswith("ZeroDivisionError: division by zero")


def test_counter_demo_is_exact():
    assert run_demo() == 20000
    assert run_demo(threads=4, increments=2500) == 10000


def test_atomic_counter_step():
    c = AtomicCounter(5)
    assert c.increase() == 6
    assert c.increase(4) == 10
    assert c.value == 10
