from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union

Predicate = Callable[[Any, Any], Any]


class Wildcard(enum.Enum):
    """Reserved action keys.

    ``ANY`` stands for every action on a resource that has no more specific rule.
    Being an enum member it never compares equal to a user action name, including
    the string ``"*"``.
    """

    ANY = "*"

    def __repr__(self) -> str:
        return "ANY_ACTION"


ANY_ACTION = Wildcard.ANY

ActionKey = Union[str, Wildcard]


@dataclass(frozen=True)
class StaticRule:
    """Fixed verdict, independent of caller and resource instance."""

    verdict: bool


@dataclass(frozen=True)
class DynamicRule:
    """Verdict computed by ``predicate(caller, resource_instance)``.

    The predicate must be side-effect free; any exception it raises reaches the
    caller of the evaluator unchanged.
    """

    predicate: Predicate


Rule = Union[StaticRule, DynamicRule]

GRANT = StaticRule(True)
DENY = StaticRule(False)


def as_rule(value: Any) -> Rule:
    """Coerce a literal rule (bool, callable or Rule) into a :data:`Rule`."""
    if isinstance(value, (StaticRule, DynamicRule)):
        return value
    if isinstance(value, bool):
        return GRANT if value else DENY
    if callable(value):
        return DynamicRule(value)
    raise TypeError(
        f"rule must be a bool, a callable(caller, instance) or a Rule, got {type(value).__name__}"
    )


def evaluate_rule(rule: Optional[Rule], caller: Any, resource_instance: Any) -> bool:
    """Resolve a single rule to a verdict. An absent rule (``None``) denies."""
    if rule is None:
        return False
    if isinstance(rule, StaticRule):
        return rule.verdict
    if isinstance(rule, DynamicRule):
        return bool(rule.predicate(caller, resource_instance))
    raise TypeError(f"unknown rule type: {type(rule).__name__}")  # pragma: no cover


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str
    resource: str
    action: str
    role: Optional[str] = None
    roles: Tuple[str, ...] = field(default_factory=tuple)
