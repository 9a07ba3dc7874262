from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from . import adapters, core
from .core.builder import PolicyAssembler, ResourceStage, RoleStage
from .core.engine import AccessControl, decide
from .core.model import (
    ANY_ACTION,
    DENY,
    GRANT,
    Decision,
    DynamicRule,
    Rule,
    StaticRule,
    Wildcard,
    as_rule,
)
from .core.policy import PolicyStore
from .core.roles import caller_roles
from .logging.decision_logger import DecisionLogger


def _detect_version() -> str:
    try:
        return version("drakonis-guard")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _detect_version()

__all__ = [
    "ANY_ACTION",
    "AccessControl",
    "DENY",
    "Decision",
    "DecisionLogger",
    "DynamicRule",
    "GRANT",
    "PolicyAssembler",
    "PolicyStore",
    "ResourceStage",
    "RoleStage",
    "Rule",
    "StaticRule",
    "Wildcard",
    "as_rule",
    "caller_roles",
    "decide",
    "adapters",
    "core",
    "__version__",
]
