from .builder import PolicyAssembler, ResourceStage, RoleStage
from .engine import AccessControl, decide
from .model import ANY_ACTION, DENY, GRANT, Decision, DynamicRule, StaticRule, Wildcard, as_rule
from .policy import PolicyStore
from .roles import caller_roles

__all__ = [
    "ANY_ACTION",
    "AccessControl",
    "DENY",
    "Decision",
    "DynamicRule",
    "GRANT",
    "PolicyAssembler",
    "PolicyStore",
    "ResourceStage",
    "RoleStage",
    "StaticRule",
    "Wildcard",
    "as_rule",
    "caller_roles",
    "decide",
]
