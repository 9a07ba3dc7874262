import pytest
from dataclasses import FrozenInstanceError

from drakonis.core.model import (
    ANY_ACTION,
    DENY,
    GRANT,
    Decision,
    DynamicRule,
    StaticRule,
    Wildcard,
    as_rule,
    evaluate_rule,
)


def test_as_rule_coerces_literals():
    assert as_rule(True) is GRANT
    assert as_rule(False) is DENY
    fn = lambda user, data: True  # noqa: E731
    r = as_rule(fn)
    assert isinstance(r, DynamicRule) and r.predicate is fn
    same = StaticRule(True)
    assert as_rule(same) is same


@pytest.mark.parametrize("bad", [None, 1, "yes", {"a": 1}])
def test_as_rule_rejects_other_values(bad):
    with pytest.raises(TypeError):
        as_rule(bad)


def test_static_rule_ignores_instance_even_when_absent():
    assert evaluate_rule(GRANT, object(), None) is True
    assert evaluate_rule(GRANT, object(), {"authorId": "x"}) is True
    assert evaluate_rule(DENY, object(), None) is False
    assert evaluate_rule(DENY, object(), {"authorId": "x"}) is False


def test_absent_rule_denies():
    assert evaluate_rule(None, object(), None) is False


def test_dynamic_rule_result_is_coerced_to_bool():
    assert evaluate_rule(DynamicRule(lambda u, d: 1), None, None) is True
    assert evaluate_rule(DynamicRule(lambda u, d: []), None, None) is False


def test_dynamic_rule_exception_propagates():
    boom = DynamicRule(lambda u, d: 1 / 0)
    with pytest.raises(ZeroDivisionError):
        evaluate_rule(boom, None, None)


def test_wildcard_is_not_a_string():
    assert ANY_ACTION is Wildcard.ANY
    assert ANY_ACTION != "*"
    assert repr(ANY_ACTION) == "ANY_ACTION"


def test_rules_and_decision_are_frozen():
    with pytest.raises(FrozenInstanceError):
        GRANT.verdict = False  # type: ignore[misc]
    d = Decision(allowed=False, reason="no_rule", resource="doc", action="read")
    assert d.role is None
    assert d.roles == ()
    with pytest.raises(FrozenInstanceError):
        d.allowed = True  # type: ignore[misc]
