from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .policy import PolicyStore, RolePolicy, freeze_resource_policy


def _check_name(name: Any, what: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"{what} name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError(f"{what} name must not be empty")
    return name


_NO_ROLES: Mapping[str, RolePolicy] = MappingProxyType({})


@dataclass(frozen=True)
class PolicyAssembler:
    """Staged, immutable builder for :class:`PolicyStore`.

    Each step returns a new value; an assembler is never changed by declarations
    made from it::

        store = (
            PolicyAssembler()
            .for_role("admin").on_resource("article").declare_actions({"delete": True})
            .for_role("author").on_resource("article").declare_actions(
                delete=lambda user, article: article is not None and user.id == article.author_id,
            )
            .finalize()
        )

    Declaring the same ``(role, resource)`` again replaces its action map as a
    whole; action maps are never merged.
    """

    _roles: Mapping[str, RolePolicy] = field(default_factory=lambda: _NO_ROLES, repr=False)

    def for_role(self, role: str) -> "RoleStage":
        role = _check_name(role, "role")
        if role in self._roles:
            return RoleStage(self, role)
        roles = dict(self._roles)
        roles[role] = MappingProxyType({})
        return RoleStage(PolicyAssembler(MappingProxyType(roles)), role)

    def _with_resource(self, role: str, resource: str, actions: Mapping[Any, Any]) -> "PolicyAssembler":
        resources = dict(self._roles.get(role, {}))
        resources[resource] = freeze_resource_policy(actions)
        roles = dict(self._roles)
        roles[role] = MappingProxyType(resources)
        return PolicyAssembler(MappingProxyType(roles))

    def finalize(self) -> PolicyStore:
        """Snapshot of everything declared so far. The assembler stays usable."""
        return PolicyStore._from_frozen(self._roles)

    # Backwards-compatible alias
    build = finalize


@dataclass(frozen=True)
class RoleStage:
    assembler: PolicyAssembler
    role: str

    def on_resource(self, resource: str) -> "ResourceStage":
        return ResourceStage(self.assembler, self.role, _check_name(resource, "resource"))


@dataclass(frozen=True)
class ResourceStage:
    assembler: PolicyAssembler
    role: str
    resource: str

    def declare_actions(
        self, actions: Optional[Mapping[Any, Any]] = None, /, **more: Any
    ) -> PolicyAssembler:
        """Set the action map of this ``(role, resource)``, replacing any previous one.

        Keyword actions are applied over *actions*. Rules may be ``bool``, a
        ``callable(caller, instance)`` or a Rule; use :data:`ANY_ACTION` as a key for
        the rule that covers every other action.
        """
        if actions is None:
            actions = {}
        elif not isinstance(actions, Mapping):
            raise TypeError(f"actions must be a mapping, got {type(actions).__name__}")
        merged: dict[Any, Any] = dict(actions)
        merged.update(more)
        return self.assembler._with_resource(self.role, self.resource, merged)

    can = declare_actions


__all__ = ["PolicyAssembler", "RoleStage", "ResourceStage"]
