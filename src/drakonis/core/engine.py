from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

from ..logging.context import get_current_trace_id
from .model import ActionKey, Decision, Wildcard, evaluate_rule
from .policy import PolicyStore
from .ports import DecisionLogSink, MetricsObserve, MetricsSink
from .roles import caller_roles

logger = logging.getLogger("drakonis.engine")

DECISIONS_METRIC = "drakonis_decisions_total"
LATENCY_METRIC = "drakonis_decision_seconds"


def _action_name(action: ActionKey) -> str:
    return action.value if isinstance(action, Wildcard) else action


def _resolve(
    store: PolicyStore,
    caller: Any,
    resource: str,
    action: ActionKey,
    resource_instance: Any,
) -> Tuple[bool, str, Optional[str], Tuple[str, ...]]:
    """Core decision: (allowed, reason, granting role, roles considered)."""
    roles = caller_roles(caller)
    if not roles:
        return False, "no_roles", None, roles

    any_rule = False
    for role in roles:
        rule = store.lookup(role, resource, action)
        if rule is None:
            continue
        any_rule = True
        # Predicate exceptions propagate: a broken rule is not a deny.
        if evaluate_rule(rule, caller, resource_instance):
            return True, "granted", role, roles
    return False, ("denied" if any_rule else "no_rule"), None, roles


def decide(
    store: Any,
    caller: Any,
    resource: str,
    action: ActionKey,
    resource_instance: Any = None,
) -> bool:
    """Return True when any of the caller's roles grants *action* on *resource*.

    *store* is a :class:`PolicyStore` or a literal nested mapping. Roles are
    OR-aggregated and the first grant wins; there is no deny override. Missing
    roles, resources and actions deny. Dynamic rules are called with
    ``(caller, resource_instance)``; ``resource_instance`` is ``None`` when omitted.
    """
    allowed, _reason, _role, _roles = _resolve(
        PolicyStore.coerce(store), caller, resource, action, resource_instance
    )
    return allowed


class AccessControl:
    """Policy decision point bound to one :class:`PolicyStore`.

    Adds an explained :class:`Decision`, metrics and audit logging around
    :func:`decide`. The store is swapped with :meth:`set_policy`, never mutated,
    so an instance can be shared across threads.
    """

    def __init__(
        self,
        policy: Any,
        *,
        metrics: MetricsSink | None = None,
        logger_sink: DecisionLogSink | None = None,
    ) -> None:
        self._store = PolicyStore.coerce(policy)
        self.metrics = metrics
        self.logger_sink = logger_sink

    @property
    def policy(self) -> PolicyStore:
        return self._store

    def set_policy(self, policy: Any) -> None:
        self._store = PolicyStore.coerce(policy)
        logger.info("Drakonis: policy replaced (%d roles)", len(self._store))

    # -- decisions -------------------------------------------------------------

    def evaluate(
        self,
        caller: Any,
        resource: str,
        action: ActionKey,
        resource_instance: Any = None,
    ) -> Decision:
        store = self._store
        start = time.perf_counter()
        try:
            allowed, reason, role, roles = _resolve(
                store, caller, resource, action, resource_instance
            )
        except Exception:
            self._observe("error", time.perf_counter() - start)
            self._log(
                {
                    "resource": resource,
                    "action": _action_name(action),
                    "roles": list(caller_roles(caller)),
                    "decision": "error",
                    "allowed": False,
                    "reason": "rule_error",
                },
                caller=caller,
            )
            raise

        decision = Decision(
            allowed=allowed,
            reason=reason,
            resource=resource,
            action=_action_name(action),
            role=role,
            roles=roles,
        )
        self._observe("grant" if allowed else "deny", time.perf_counter() - start)
        self._log(
            {
                "resource": resource,
                "action": decision.action,
                "roles": list(roles),
                "decision": "grant" if allowed else "deny",
                "allowed": allowed,
                "reason": reason,
                "role": role,
            },
            caller=caller,
        )
        return decision

    def is_allowed(
        self,
        caller: Any,
        resource: str,
        action: ActionKey,
        resource_instance: Any = None,
    ) -> bool:
        return self.evaluate(caller, resource, action, resource_instance).allowed

    # alias of is_allowed
    def has_permission(
        self,
        caller: Any,
        resource: str,
        action: ActionKey,
        resource_instance: Any = None,
    ) -> bool:
        return self.is_allowed(caller, resource, action, resource_instance)

    # -- sinks -----------------------------------------------------------------

    def _observe(self, decision: str, elapsed: float) -> None:
        if self.metrics is None:
            return
        labels = {"decision": decision}
        try:
            self.metrics.inc(DECISIONS_METRIC, labels)
        except Exception:
            logger.exception("Drakonis: metrics inc failed")
        if not isinstance(self.metrics, MetricsObserve):
            return
        try:
            self.metrics.observe(LATENCY_METRIC, elapsed, labels)
        except Exception:
            logger.exception("Drakonis: metrics observe failed")

    def _log(self, payload: Dict[str, Any], caller: Any = None) -> None:
        if self.logger_sink is None:
            return
        trace_id = get_current_trace_id()
        if trace_id is not None:
            payload["trace_id"] = trace_id
        if caller is not None:
            payload["caller"] = caller
        try:
            self.logger_sink.log(payload)
        except Exception:
            logger.exception("Drakonis: decision logging failed")


__all__ = ["AccessControl", "decide", "DECISIONS_METRIC", "LATENCY_METRIC"]
