#!/usr/bin/env python3
"""
DecisionLogger configuration demo.

Run:
  python examples/decision_logger_demo.py

Emits JSON lines via the 'drakonis.audit' logger, first logging every decision and
then with smart sampling (denies always, plain grants at 5%).
"""

import logging

from drakonis import ANY_ACTION, AccessControl, PolicyAssembler
from drakonis.logging import DecisionLogger, TraceIdFilter, gen_trace_id, set_current_trace_id


def setup_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(message)s"))
        h.addFilter(TraceIdFilter())
        root.addHandler(h)
    root.setLevel(logging.INFO)


def make_policy():
    return (
        PolicyAssembler()
        .for_role("editor")
        .on_resource("doc")
        .declare_actions({ANY_ACTION: True, "purge": False})
        .finalize()
    )


def run(control: AccessControl) -> None:
    editor = {"id": "u1", "roles": ["editor"], "token": "t-123"}
    control.is_allowed(editor, "doc", "read")
    control.is_allowed(editor, "doc", "purge")


def main() -> None:
    setup_logging()
    set_current_trace_id(gen_trace_id())

    print("\n=== 1) log everything ===")
    run(AccessControl(make_policy(), logger_sink=DecisionLogger(as_json=True)))

    print("\n=== 2) smart sampling ===")
    audit = DecisionLogger(
        as_json=True,
        smart_sampling=True,
        sample_rate=0.05,
        category_sampling_rates={"deny": 1.0, "error": 1.0, "grant": 0.05},
    )
    run(AccessControl(make_policy(), logger_sink=audit))


if __name__ == "__main__":
    main()
