from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple

from .model import ANY_ACTION, ActionKey, Rule, Wildcard, as_rule

ResourcePolicy = Mapping[ActionKey, Rule]
RolePolicy = Mapping[str, ResourcePolicy]

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


def _require_mapping(obj: Any, what: str) -> Mapping[Any, Any]:
    if not isinstance(obj, Mapping):
        raise TypeError(f"{what} must be a mapping, got {type(obj).__name__}")
    return obj


def _require_name(key: Any, what: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"{what} name must be a string, got {key!r}")
    return key


def freeze_resource_policy(actions: Mapping[Any, Any]) -> ResourcePolicy:
    """Return a read-only ``action -> Rule`` mapping built from literal rules."""
    frozen: Dict[ActionKey, Rule] = {}
    for action, rule in _require_mapping(actions, "resource policy").items():
        if not isinstance(action, (str, Wildcard)):
            raise TypeError(f"action must be a string or ANY_ACTION, got {action!r}")
        frozen[action] = as_rule(rule)
    return MappingProxyType(frozen)


def _freeze_role_policy(resources: Mapping[Any, Any]) -> RolePolicy:
    frozen: Dict[str, ResourcePolicy] = {}
    for resource, actions in _require_mapping(resources, "role policy").items():
        frozen[_require_name(resource, "resource")] = freeze_resource_policy(actions)
    return MappingProxyType(frozen)


class PolicyStore(Mapping):
    """Immutable role -> resource -> action -> Rule table.

    A store is a plain three level tree. Roles are independent of each other: an
    undeclared role grants nothing and no role implies another.

    It can be built from a literal nested mapping::

        PolicyStore({"admin": {"article": {"delete": True}}})

    Literal values are copied into read-only mappings, so mutating the source dict
    afterwards does not affect the store. Rules may be given as ``bool``, as a
    ``callable(caller, instance)`` or as :class:`StaticRule`/:class:`DynamicRule`.
    """

    __slots__ = ("_roles",)

    def __init__(self, roles: Optional[Mapping[str, Mapping[Any, Any]]] = None) -> None:
        frozen: Dict[str, RolePolicy] = {}
        for role, resources in _require_mapping({} if roles is None else roles, "policy").items():
            frozen[_require_name(role, "role")] = _freeze_role_policy(resources)
        self._roles: Mapping[str, RolePolicy] = MappingProxyType(frozen)

    # --- construction -------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[Any, Any]]) -> "PolicyStore":
        return cls(data)

    @classmethod
    def coerce(cls, obj: Any) -> "PolicyStore":
        """Return *obj* if it is already a store, otherwise build one from it."""
        if isinstance(obj, PolicyStore):
            return obj
        return cls(obj)

    @classmethod
    def _from_frozen(cls, roles: Mapping[str, RolePolicy]) -> "PolicyStore":
        # Callers pass layers that are already read-only; skip re-validation.
        store = cls.__new__(cls)
        store._roles = MappingProxyType(dict(roles))
        return store

    # --- Mapping ------------------------------------------------------------

    def __getitem__(self, role: str) -> RolePolicy:
        return self._roles[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"PolicyStore({self.to_dict()!r})"

    # --- lookup -------------------------------------------------------------

    def lookup(self, role: str, resource: str, action: ActionKey) -> Optional[Rule]:
        """Resolve the rule for ``(role, resource, action)``.

        An explicit action rule wins over the :data:`ANY_ACTION` rule of the same
        resource. Returns ``None`` when nothing applies; ``None`` is distinct from an
        explicit deny rule but has the same effect on decisions.
        """
        actions = self._roles.get(role, _EMPTY).get(resource)
        if actions is None:
            return None
        rule = actions.get(action)
        if rule is None:
            rule = actions.get(ANY_ACTION)
        return rule

    def has_rule(self, role: str, resource: str, action: ActionKey) -> bool:
        return self.lookup(role, resource, action) is not None

    def roles(self) -> Tuple[str, ...]:
        return tuple(self._roles)

    def resources(self, role: str) -> Tuple[str, ...]:
        return tuple(self._roles.get(role, _EMPTY))

    def actions(self, role: str, resource: str) -> Tuple[ActionKey, ...]:
        return tuple(self._roles.get(role, _EMPTY).get(resource, _EMPTY))

    def to_dict(self) -> Dict[str, Dict[str, Dict[ActionKey, Rule]]]:
        """Mutable deep copy of the table, rules included as Rule objects."""
        return {
            role: {resource: dict(actions) for resource, actions in resources.items()}
            for role, resources in self._roles.items()
        }


__all__ = [
    "PolicyStore",
    "ResourcePolicy",
    "RolePolicy",
    "freeze_resource_policy",
]
