import logging

from drakonis.logging.context import (
    TraceIdFilter,
    clear_current_trace_id,
    gen_trace_id,
    get_current_trace_id,
    set_current_trace_id,
)


def test_trace_id_set_get_clear_with_token():
    token = set_current_trace_id("abc")
    assert get_current_trace_id() == "abc"
    clear_current_trace_id(token)
    assert get_current_trace_id() is None


def test_trace_id_clear_without_token():
    set_current_trace_id("xyz")
    clear_current_trace_id()
    assert get_current_trace_id() is None


def test_gen_trace_id_and_filter_injects_record_field(caplog):
    rid = gen_trace_id()
    assert isinstance(rid, str) and len(rid) == 32
    logger = logging.getLogger("drakonis.test")
    caplog.set_level(logging.INFO, logger="drakonis.test")
    f = TraceIdFilter()
    logger.addFilter(f)
    set_current_trace_id("trace-1")
    try:
        logger.info("msg")
        rec = caplog.records[-1]
        assert rec.trace_id == "trace-1"
    finally:
        clear_current_trace_id()
        logger.removeFilter(f)
